"""Data models for blocks, recipes, and generator output."""
