"""Workflow generator — compile a recipe into a GitHub Actions workflow.

Each job is compiled by running its blocks in order: steps are appended
as emitted, fragment env maps are shallow-merged (later keys win), and
each block's secrets and permissions are collected. Secrets and
permissions are then merged per job and again across jobs:

- secrets: first definition of a name wins
- permissions: highest level per scope wins, first one on ties
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from workflow_factory.blocks import get_block
from workflow_factory.models.block import (
    Constraint,
    ConstraintType,
    PermissionDef,
    PermissionScope,
    SecretDef,
)
from workflow_factory.models.recipe import GeneratorOutput, JobConfig, Recipe
from workflow_factory.utils.yaml_io import dump_workflow

logger = logging.getLogger(__name__)

DOCKER_NOTE = "This workflow requires Docker to be available"


class UnknownBlockError(ValueError):
    """A recipe references a block id that is not registered."""

    def __init__(self, block_id: str, job_id: str | None = None):
        self.block_id = block_id
        self.job_id = job_id
        where = f" in job '{job_id}'" if job_id else ""
        super().__init__(f"Unknown block: {block_id}{where}")


@dataclass
class CompiledJob:
    """A compiled job mapping plus the declarations gathered from its blocks."""

    job: dict
    secrets: list[SecretDef] = field(default_factory=list)
    permissions: list[PermissionDef] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)


# --- Merging ---


def merge_secrets(secret_lists: Iterable[Iterable[SecretDef]]) -> list[SecretDef]:
    """Flatten secret lists, keeping the first definition of each name."""
    merged: dict[str, SecretDef] = {}
    for secrets in secret_lists:
        for secret in secrets:
            if secret.name not in merged:
                merged[secret.name] = secret
    return list(merged.values())


def merge_permissions(permission_lists: Iterable[Iterable[PermissionDef]]) -> list[PermissionDef]:
    """Flatten permission lists, keeping the highest level for each scope.

    Among entries tied at the highest level the first one seen is kept,
    including its reason.
    """
    merged: dict[PermissionScope, PermissionDef] = {}
    for permissions in permission_lists:
        for permission in permissions:
            existing = merged.get(permission.scope)
            if existing is None or permission.level > existing.level:
                merged[permission.scope] = permission
    return list(merged.values())


def permissions_to_mapping(permissions: Iterable[PermissionDef]) -> dict[str, str]:
    """Render merged permissions as the workflow `permissions` block."""
    return {p.scope.value: p.level.value for p in permissions}


def _dedupe(items: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(items))


def constraint_note(constraint: Constraint) -> str | None:
    """Translate a block constraint into an advisory note, if it has one."""
    if constraint.type is ConstraintType.REQUIRES_SECRETS:
        return f"Requires secrets: {constraint.value}"
    if constraint.type is ConstraintType.REQUIRES_DOCKER:
        return DOCKER_NOTE
    # requires-tag-trigger and requires-subdirectory carry no note yet
    return None


# --- Compilation ---


def compile_job(job_config: JobConfig) -> CompiledJob:
    """Compile one job configuration.

    Raises:
        UnknownBlockError: if a block reference cannot be resolved.
    """
    steps: list[dict] = []
    job_env: dict[str, str] = {}
    secret_lists: list[list[SecretDef]] = []
    permission_lists: list[list[PermissionDef]] = []
    notes: list[str] = []

    for ref in job_config.blocks:
        block = get_block(ref.block_id)
        if block is None:
            raise UnknownBlockError(ref.block_id, job_config.id)

        fragment = block.emit(ref.config)
        steps.extend(step.to_dict() for step in fragment.steps)
        if fragment.env:
            job_env.update(fragment.env)

        secret_lists.append(block.secrets())
        permission_lists.append(block.permissions())

        for constraint in block.constraints():
            note = constraint_note(constraint)
            if note:
                notes.append(note)

    job: dict = {
        "name": job_config.name,
        "runs-on": job_config.runs_on,
    }
    if job_config.needs:
        job["needs"] = list(job_config.needs)
    if job_config.if_:
        job["if"] = job_config.if_
    if job_config.environment:
        job["environment"] = job_config.environment
    if job_env:
        job["env"] = job_env
    job["steps"] = steps

    logger.debug("Compiled job %s: %d step(s)", job_config.id, len(steps))

    return CompiledJob(
        job=job,
        secrets=merge_secrets(secret_lists),
        permissions=merge_permissions(permission_lists),
        notes=_dedupe(notes),
    )


def build_workflow(recipe: Recipe) -> tuple[dict, list[SecretDef], list[PermissionDef], list[str]]:
    """Compile a recipe into the workflow mapping and its merged declarations."""
    jobs: dict[str, dict] = {}
    secret_lists: list[list[SecretDef]] = []
    permission_lists: list[list[PermissionDef]] = []
    notes: list[str] = []

    for job_config in recipe.jobs:
        compiled = compile_job(job_config)
        jobs[job_config.id] = compiled.job
        secret_lists.append(compiled.secrets)
        permission_lists.append(compiled.permissions)
        notes.extend(compiled.notes)

    secrets = merge_secrets(secret_lists)
    permissions = merge_permissions(permission_lists)

    workflow: dict = {
        "name": recipe.name,
        "on": recipe.triggers,
    }
    # No permissions key means the repository default token permissions apply.
    if permissions:
        workflow["permissions"] = permissions_to_mapping(permissions)
    if recipe.concurrency:
        workflow["concurrency"] = recipe.concurrency.to_dict()
    workflow["jobs"] = jobs

    return workflow, secrets, permissions, _dedupe(notes)


def generate_workflow(recipe: Recipe) -> GeneratorOutput:
    """Generate the workflow YAML and merged declarations for a recipe.

    Raises:
        UnknownBlockError: if any job references an unregistered block.
            No output is produced in that case.
    """
    workflow, secrets, permissions, notes = build_workflow(recipe)
    logger.debug(
        "Generated %s: %d job(s), %d secret(s), %d permission(s)",
        recipe.id,
        len(workflow["jobs"]),
        len(secrets),
        len(permissions),
    )
    return GeneratorOutput(
        yaml=dump_workflow(workflow),
        secrets=secrets,
        permissions=permissions,
        notes=notes,
        recipe=recipe,
    )
