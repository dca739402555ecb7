"""Workflow Factory — compose GitHub Actions workflows from reusable blocks."""

__version__ = "0.1.0"
