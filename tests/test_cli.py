"""Tests for the command-line interface."""

import tempfile
from pathlib import Path

import yaml
from click.testing import CliRunner

from workflow_factory.cli import main


def _write(text: str, suffix: str = ".yml") -> str:
    f = tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False)
    f.write(text)
    f.close()
    return f.name


def test_version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test_recipes_lists_catalog():
    result = CliRunner().invoke(main, ["recipes"])
    assert result.exit_code == 0
    assert "nextjs-vercel" in result.output
    assert "static-gh-pages" in result.output


def test_blocks_lists_registry():
    result = CliRunner().invoke(main, ["blocks"])
    assert result.exit_code == 0
    assert "docker-buildx" in result.output


def test_generate_prints_yaml():
    result = CliRunner().invoke(main, ["generate", "static-gh-pages"])
    assert result.exit_code == 0
    assert "name: Static Site to GitHub Pages" in result.output
    assert "Valid!" in result.output


def test_generate_writes_file():
    out = Path(tempfile.mkdtemp()) / ".github" / "workflows" / "deploy.yml"
    result = CliRunner().invoke(main, ["generate", "nextjs-vercel", "-o", str(out)])
    assert result.exit_code == 0
    assert out.exists()
    assert "Requires secrets" in result.output
    assert out.read_text().startswith("name: Next.js to Vercel\n")


def test_generate_unknown_recipe():
    result = CliRunner().invoke(main, ["generate", "nope"])
    assert result.exit_code != 0
    assert "Unknown recipe" in result.output


def test_generate_unknown_block_in_recipe_file():
    recipe_path = _write(
        yaml.dump(
            {
                "id": "broken",
                "triggers": {"push": {}},
                "jobs": [{"id": "ci", "runsOn": "ubuntu-latest", "blocks": [{"blockId": "teleport"}]}],
            }
        ),
        suffix=".yaml",
    )
    result = CliRunner().invoke(main, ["generate", recipe_path])
    assert result.exit_code != 0
    assert "Unknown block: teleport" in result.output


def test_show_recipe():
    result = CliRunner().invoke(main, ["show", "node-docker-ghcr"])
    assert result.exit_code == 0
    assert "GITHUB_TOKEN" in result.output
    assert "packages" in result.output
    assert "Common failures" in result.output


def test_validate_valid_file():
    path = _write(
        "name: Test\non: push\njobs:\n  t:\n    runs-on: ubuntu-latest\n    steps:\n"
        "      - uses: actions/checkout@v4\n"
    )
    result = CliRunner().invoke(main, ["validate", path])
    assert result.exit_code == 0
    assert "Valid!" in result.output


def test_validate_undeclared_secret():
    path = _write(
        "name: Test\non: push\njobs:\n  t:\n    runs-on: ubuntu-latest\n    steps:\n"
        "      - run: echo ${{ secrets.API_KEY }}\n"
    )
    result = CliRunner().invoke(main, ["validate", path])
    assert result.exit_code == 1
    assert "UNDECLARED_SECRET" in result.output

    result = CliRunner().invoke(main, ["validate", path, "--secret", "API_KEY"])
    assert result.exit_code == 0


def test_validate_strict_fails_on_warnings():
    path = _write(
        "name: Test\non: push\njobs:\n  t:\n    runs-on: ubuntu-latest\n    steps:\n"
        "      - uses: actions/checkout@main\n"
    )
    assert CliRunner().invoke(main, ["validate", path]).exit_code == 0
    result = CliRunner().invoke(main, ["validate", path, "--strict"])
    assert result.exit_code == 1
    assert "UNSTABLE_VERSION" in result.output


def test_validate_against_recipe_secrets():
    path = str(Path(tempfile.mkdtemp()) / "deploy.yml")
    CliRunner().invoke(main, ["generate", "nextjs-vercel", "--no-validate", "-o", path])
    result = CliRunner().invoke(main, ["validate", path, "--recipe", "nextjs-vercel"])
    assert result.exit_code == 0
