"""Workflow Factory CLI — generate and validate GitHub Actions workflows."""

import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from workflow_factory import __version__

console = Console()
err_console = Console(stderr=True)


def _resolve_recipe(recipe_ref: str):
    """Resolve a built-in recipe id/slug, or load a recipe YAML file."""
    import yaml

    from workflow_factory.recipes import RecipeNotFoundError, load_recipe, require_recipe

    path = Path(recipe_ref)
    if path.suffix in (".yml", ".yaml") and path.exists():
        try:
            return load_recipe(path)
        except (OSError, ValueError, KeyError, RecursionError, yaml.YAMLError) as e:
            raise click.ClickException(f"Could not load recipe {recipe_ref}: {e}")

    try:
        return require_recipe(recipe_ref)
    except RecipeNotFoundError as e:
        raise click.ClickException(str(e))


def _generate(recipe):
    from workflow_factory.generator import UnknownBlockError, generate_workflow

    try:
        return generate_workflow(recipe)
    except UnknownBlockError as e:
        raise click.ClickException(str(e))


def _print_result(result) -> None:
    for error in result.errors:
        where = f" ({error.path})" if error.path else ""
        err_console.print(f"  [red]x[/] [{error.code}] {escape(error.message)}{escape(where)}")
    for warning in result.warnings:
        where = f" ({warning.path})" if warning.path else ""
        err_console.print(f"  [yellow]![/] [{warning.code}] {escape(warning.message)}{escape(where)}")
    status = "[green]Valid![/]" if result.valid else "[red]Invalid[/]"
    err_console.print(f"\n{status} {result.summary()}")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Workflow Factory — compose GitHub Actions workflows from reusable blocks.

    Pick a recipe (e.g. nextjs-vercel), generate its workflow YAML, and
    validate it for structure, secrets, permissions and triggers.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ── Catalog ──────────────────────────────────────────────────────────


@main.command(name="recipes")
def list_recipes():
    """List the built-in recipes."""
    from workflow_factory.recipes import get_all_recipes

    recipes = get_all_recipes()
    table = Table(title=f"Recipes ({len(recipes)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Stack", style="dim")
    table.add_column("Jobs", justify="right")

    for recipe in recipes:
        table.add_row(recipe.id, recipe.name, ", ".join(recipe.stack), str(len(recipe.jobs)))

    console.print(table)


@main.command(name="blocks")
def list_blocks():
    """List the registered blocks."""
    from workflow_factory.blocks import BLOCK_REGISTRY

    table = Table(title=f"Blocks ({len(BLOCK_REGISTRY)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Description")

    for block in BLOCK_REGISTRY.values():
        table.add_row(block.id, block.name, block.description)

    console.print(table)


# ── Generate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("recipe_ref", metavar="RECIPE")
@click.option("--output", "-o", default=None, help="Write the workflow to this file")
@click.option("--validate/--no-validate", default=True, help="Validate the generated workflow")
def generate(recipe_ref: str, output: str | None, validate: bool):
    """Generate the workflow YAML for a recipe.

    RECIPE is a built-in recipe id/slug or a path to a recipe YAML file.
    """
    from workflow_factory.validator import validate_workflow

    recipe = _resolve_recipe(recipe_ref)
    result = _generate(recipe)

    if output:
        path = Path(output)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(result.yaml)
        err_console.print(f"[green]Workflow written to:[/] {path}")
    else:
        click.echo(result.yaml, nl=False)

    for note in result.notes:
        err_console.print(f"  [blue]i[/] {note}")

    if validate:
        validation = validate_workflow(result)
        _print_result(validation)
        if not validation.valid:
            sys.exit(1)


@main.command()
@click.argument("recipe_ref", metavar="RECIPE")
def show(recipe_ref: str):
    """Show a recipe's workflow, secrets, permissions and troubleshooting notes."""
    recipe = _resolve_recipe(recipe_ref)
    result = _generate(recipe)

    console.print(Panel(recipe.description or recipe.name, title=recipe.name))
    console.print(Syntax(result.yaml, "yaml"))

    console.print("\n[bold]Secrets[/]")
    if not result.secrets:
        console.print("  No additional secrets required.")
    for secret in result.secrets:
        required = " [red]Required[/]" if secret.required else ""
        console.print(f"  [cyan]{secret.name}[/]{required}")
        console.print(f"    {secret.description}")
        if secret.example:
            console.print(f"    [dim]{secret.example}[/]")

    console.print("\n[bold]Permissions[/]")
    if not result.permissions:
        console.print("  Uses default permissions only.")
    for permission in result.permissions:
        color = "yellow" if permission.level.value == "write" else "green"
        console.print(
            f"  {permission.scope.value}: [{color}]{permission.level.value}[/] "
            f"[dim]{permission.reason}[/]"
        )

    if result.notes:
        console.print("\n[bold]Notes[/]")
        for note in result.notes:
            console.print(f"  - {note}")

    if recipe.metadata.common_failures:
        console.print("\n[bold]Common failures[/]")
        for failure in recipe.metadata.common_failures:
            console.print(f"  [red]{failure.title}[/]")
            console.print(f"    {failure.description}")
            console.print(f"    [green]Fix:[/] {failure.solution}")


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("workflow_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--secret", "-s", "secrets", multiple=True, help="Declared secret name")
@click.option("--recipe", "-r", "recipe_ref", default=None, help="Declare the secrets of this recipe")
@click.option("--strict", is_flag=True, help="Treat warnings as errors")
def validate(workflow_path: str, secrets: tuple, recipe_ref: str | None, strict: bool):
    """Validate a workflow file against its declared secrets."""
    from workflow_factory.models.block import SecretDef
    from workflow_factory.validator import validate_yaml

    declared = [SecretDef(name=name) for name in secrets]
    if recipe_ref:
        declared.extend(_generate(_resolve_recipe(recipe_ref)).secrets)

    text = Path(workflow_path).read_text()
    err_console.print(f"\n[bold blue]Workflow Factory[/] — Validating: {workflow_path}\n")

    result = validate_yaml(text, declared)
    _print_result(result)

    if not result.valid:
        sys.exit(1)
    if strict and result.warnings:
        err_console.print("[red]FAIL[/] (strict mode: warnings treated as errors)")
        sys.exit(1)


if __name__ == "__main__":
    main()
