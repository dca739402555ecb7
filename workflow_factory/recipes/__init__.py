"""Built-in recipe catalog and recipe loading."""

from __future__ import annotations

from pathlib import Path

import yaml

from workflow_factory.models.recipe import Recipe
from workflow_factory.recipes.nextjs_vercel import nextjs_vercel
from workflow_factory.recipes.node_docker_ghcr import node_docker_ghcr
from workflow_factory.recipes.static_gh_pages import static_gh_pages
from workflow_factory.utils.yaml_io import WorkflowLoader

RECIPES: list[Recipe] = [nextjs_vercel, node_docker_ghcr, static_gh_pages]

RECIPES_BY_ID: dict[str, Recipe] = {r.id: r for r in RECIPES}
RECIPES_BY_SLUG: dict[str, Recipe] = {r.slug: r for r in RECIPES}


class RecipeNotFoundError(LookupError):
    """No built-in recipe matches the given id or slug."""


def get_recipe(id_or_slug: str) -> Recipe | None:
    """Look up a built-in recipe by id, then by slug."""
    return RECIPES_BY_ID.get(id_or_slug) or RECIPES_BY_SLUG.get(id_or_slug)


def require_recipe(id_or_slug: str) -> Recipe:
    recipe = get_recipe(id_or_slug)
    if recipe is None:
        known = ", ".join(sorted(RECIPES_BY_ID))
        raise RecipeNotFoundError(f"Unknown recipe '{id_or_slug}'. Available: {known}")
    return recipe


def get_all_recipes() -> list[Recipe]:
    return list(RECIPES)


def load_recipe(path: str | Path) -> Recipe:
    """Load a user-authored recipe from a YAML file.

    The file may hold the recipe at the top level or under a `recipe` key.
    """
    with open(path) as f:
        data = yaml.load(f, Loader=WorkflowLoader)

    if isinstance(data, dict) and isinstance(data.get("recipe"), dict):
        data = data["recipe"]
    if not isinstance(data, dict) or "id" not in data:
        raise ValueError(f"{path}: a recipe must be a mapping with an 'id' key")

    return Recipe.from_dict(data)
