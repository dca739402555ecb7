"""Tests for the built-in recipe catalog and recipe loading."""

import tempfile
from pathlib import Path

import pytest
import yaml

from workflow_factory.generator import generate_workflow
from workflow_factory.recipes import (
    RECIPES,
    RecipeNotFoundError,
    get_all_recipes,
    get_recipe,
    load_recipe,
    require_recipe,
)
from workflow_factory.utils.yaml_io import load_workflow
from workflow_factory.validator import validate_workflow


def _write_recipe(data: dict) -> str:
    """Write a recipe dict to a temporary YAML file and return the path."""
    f = tempfile.NamedTemporaryFile(mode="w", suffix=".yaml", delete=False)
    yaml.dump(data, f, sort_keys=False)
    f.close()
    return f.name


@pytest.mark.parametrize("recipe", RECIPES, ids=lambda r: r.id)
def test_recipe_generates_output(recipe):
    output = generate_workflow(recipe)
    assert output.yaml
    assert isinstance(output.secrets, list)
    assert isinstance(output.permissions, list)
    assert isinstance(output.notes, list)
    assert output.recipe is recipe


@pytest.mark.parametrize("recipe", RECIPES, ids=lambda r: r.id)
def test_recipe_passes_validation(recipe):
    result = validate_workflow(generate_workflow(recipe))
    assert result.errors == []
    assert result.valid


@pytest.mark.parametrize("recipe", RECIPES, ids=lambda r: r.id)
def test_recipe_metadata(recipe):
    assert recipe.id
    assert recipe.slug
    assert recipe.name
    assert recipe.description
    assert recipe.stack
    assert recipe.triggers
    assert recipe.jobs
    assert recipe.metadata.seo_title
    assert recipe.metadata.seo_description
    assert recipe.metadata.common_failures
    for failure in recipe.metadata.common_failures:
        assert failure.title
        assert failure.description
        assert failure.solution


def test_lookup():
    assert get_recipe("nextjs-vercel").name == "Next.js to Vercel"
    assert get_recipe("static-gh-pages").slug == "static-gh-pages"
    assert get_recipe("missing") is None
    assert [r.id for r in get_all_recipes()] == [
        "nextjs-vercel",
        "node-docker-ghcr",
        "static-gh-pages",
    ]


def test_require_recipe_unknown():
    with pytest.raises(RecipeNotFoundError, match="missing"):
        require_recipe("missing")


def test_nextjs_vercel_output():
    output = generate_workflow(get_recipe("nextjs-vercel"))
    assert [s.name for s in output.secrets] == ["VERCEL_TOKEN", "VERCEL_ORG_ID", "VERCEL_PROJECT_ID"]
    assert [(p.scope.value, p.level.value) for p in output.permissions] == [("contents", "read")]
    assert output.notes == ["Requires secrets: VERCEL_TOKEN,VERCEL_ORG_ID,VERCEL_PROJECT_ID"]
    assert "environment: production" in output.yaml
    assert "cancel-in-progress: true" in output.yaml


def test_node_docker_ghcr_output():
    output = generate_workflow(get_recipe("node-docker-ghcr"))
    assert [(p.scope.value, p.level.value) for p in output.permissions] == [
        ("contents", "read"),
        ("packages", "write"),
    ]
    assert output.notes == ["This workflow requires Docker to be available"]
    assert "platforms: linux/amd64,linux/arm64" in output.yaml


def test_static_gh_pages_output():
    output = generate_workflow(get_recipe("static-gh-pages"))
    assert output.secrets == []
    assert output.notes == []
    assert "workflow_dispatch: {}" in output.yaml
    assert "run: npm run build" in output.yaml


def test_load_recipe_camel_case():
    path = _write_recipe(
        {
            "id": "custom",
            "name": "Custom CI",
            "triggers": {"pull_request": {"branches": ["main"]}},
            "jobs": [
                {
                    "id": "ci",
                    "name": "CI",
                    "runsOn": "ubuntu-22.04",
                    "blocks": [
                        {"blockId": "checkout"},
                        {"blockId": "setup-node", "config": {"packageManager": "pnpm"}},
                        {"blockId": "test", "config": {"testCommand": "vitest run"}},
                    ],
                }
            ],
        }
    )
    recipe = load_recipe(path)
    assert recipe.slug == "custom"
    assert recipe.jobs[0].runs_on == "ubuntu-22.04"
    assert recipe.jobs[0].blocks[1].config.package_manager == "pnpm"

    output = generate_workflow(recipe)
    assert "pnpm/action-setup@v3" in output.yaml
    assert "run: vitest run" in output.yaml
    assert validate_workflow(output).valid


def test_load_recipe_snake_case_under_recipe_key():
    path = _write_recipe(
        {
            "recipe": {
                "id": "pages",
                "triggers": {"push": {"branches": ["main"]}},
                "concurrency": {"group": "pages", "cancel_in_progress": False},
                "jobs": [
                    {
                        "id": "deploy",
                        "runs_on": "ubuntu-latest",
                        "needs": ["build"],
                        "blocks": [{"block_id": "deploy-gh-pages"}],
                    }
                ],
                "metadata": {
                    "common_failures": [
                        {"title": "t", "description": "d", "solution": "s"},
                    ]
                },
            }
        }
    )
    recipe = load_recipe(path)
    assert recipe.concurrency.cancel_in_progress is False
    assert recipe.jobs[0].needs == ["build"]
    assert recipe.jobs[0].name == "deploy"
    assert recipe.metadata.common_failures[0].solution == "s"


def test_load_recipe_rejects_non_mapping():
    path = Path(tempfile.mkdtemp()) / "bad.yaml"
    path.write_text("- not\n- a recipe\n")
    with pytest.raises(ValueError, match="mapping"):
        load_recipe(path)


def test_load_recipe_scalar_needs_and_stack():
    path = _write_recipe(
        {
            "id": "two-jobs",
            "stack": "node",
            "triggers": {"push": {"branches": ["main"]}},
            "jobs": [
                {"id": "build", "blocks": [{"blockId": "checkout"}]},
                {"id": "deploy", "needs": "build", "blocks": [{"blockId": "checkout"}]},
            ],
            "metadata": {"relatedRecipes": "static-gh-pages"},
        }
    )
    recipe = load_recipe(path)
    assert recipe.stack == ["node"]
    assert recipe.jobs[0].needs == []
    assert recipe.jobs[1].needs == ["build"]
    assert recipe.metadata.related_recipes == ["static-gh-pages"]

    output = generate_workflow(recipe)
    workflow = load_workflow(output.yaml)
    assert workflow["jobs"]["deploy"]["needs"] == ["build"]
