"""Static validator for generated workflows.

Parses the YAML back and runs independent checks in a fixed order:

1. structure — required keys, steps, action version pinning
2. secrets — every `${{ secrets.X }}` in the raw text is declared
3. permissions — scopes and levels come from the known sets
4. triggers — known events, dangerous triggers

Errors make the result invalid; warnings never do. Unparseable YAML
short-circuits to a single INVALID_YAML error.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from workflow_factory.models.block import PermissionLevel, PermissionScope, SecretDef
from workflow_factory.models.recipe import GeneratorOutput
from workflow_factory.utils.yaml_io import DECODE_ERRORS, load_workflow

logger = logging.getLogger(__name__)

VALID_SCOPES = {scope.value for scope in PermissionScope}
VALID_LEVELS = {level.value for level in PermissionLevel}

KNOWN_EVENTS = {
    "push",
    "pull_request",
    "pull_request_target",
    "workflow_dispatch",
    "workflow_call",
    "schedule",
    "release",
    "create",
    "delete",
    "deployment",
    "issues",
    "issue_comment",
    "label",
    "milestone",
    "page_build",
    "project",
    "public",
    "registry_package",
    "repository_dispatch",
    "status",
    "watch",
    "fork",
}

DANGEROUS_EVENTS = {"pull_request_target"}
UNSTABLE_VERSIONS = {"latest", "master", "main"}

# Provided by the platform; never declared by recipes.
IMPLICIT_SECRETS = {"GITHUB_TOKEN"}

SECRET_REF_PATTERN = re.compile(r"\$\{\{\s*secrets\.([A-Z_][A-Z0-9_]*)\s*\}\}")
ACTION_REF_PATTERN = re.compile(r"^[^@]+@(.+)$")


@dataclass
class ValidationIssue:
    """A single finding. `code` values are stable and safe to match on."""

    code: str
    message: str
    path: str | None = None


class ValidationError(ValidationIssue):
    """A finding that makes the workflow invalid."""


class ValidationWarning(ValidationIssue):
    """An advisory finding."""


@dataclass
class ValidationResult:
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def summary(self) -> str:
        status = "PASS" if self.valid else "FAIL"
        return f"[{status}] {len(self.errors)} error(s), {len(self.warnings)} warning(s)"


def validate_workflow(output: GeneratorOutput) -> ValidationResult:
    """Validate generated YAML against the secrets its recipe declares."""
    return validate_yaml(output.yaml, output.secrets)


def validate_yaml(text: str, declared_secrets: list[SecretDef] | None = None) -> ValidationResult:
    """Validate workflow YAML text against a list of declared secrets."""
    result = ValidationResult()

    try:
        workflow = load_workflow(text)
    except DECODE_ERRORS as e:
        result.errors.append(
            ValidationError(code="INVALID_YAML", message=f"Failed to parse YAML: {e}")
        )
        return result

    if not isinstance(workflow, dict):
        result.errors.append(
            ValidationError(
                code="INVALID_YAML",
                message="Failed to parse YAML: workflow document must be a mapping",
            )
        )
        return result

    _check_structure(workflow, result)
    _check_secrets(text, declared_secrets or [], result)
    _check_permissions(workflow, result)
    _check_triggers(workflow, result)

    logger.debug("Validation %s", result.summary())
    return result


def extract_secret_references(text: str) -> list[str]:
    """Return secret names referenced in the text, deduplicated, in first-seen order."""
    return list(dict.fromkeys(SECRET_REF_PATTERN.findall(text)))


# --- Structure ---


def _missing(value) -> bool:
    return value is None or value == ""


def _check_structure(workflow: dict, result: ValidationResult):
    if _missing(workflow.get("name")):
        result.errors.append(
            ValidationError(code="MISSING_NAME", message="Workflow must have a name", path="name")
        )

    if _missing(workflow.get("on")):
        result.errors.append(
            ValidationError(
                code="MISSING_TRIGGER",
                message="Workflow must have at least one trigger (on)",
                path="on",
            )
        )

    jobs = workflow.get("jobs")
    if not jobs or not isinstance(jobs, dict):
        result.errors.append(
            ValidationError(
                code="MISSING_JOBS", message="Workflow must have at least one job", path="jobs"
            )
        )
        return

    for job_id, job in jobs.items():
        if not isinstance(job, dict):
            job = {}

        if _missing(job.get("runs-on")):
            result.errors.append(
                ValidationError(
                    code="MISSING_RUNS_ON",
                    message=f'Job "{job_id}" must specify runs-on',
                    path=f"jobs.{job_id}.runs-on",
                )
            )

        steps = job.get("steps")
        if not steps or not isinstance(steps, list):
            result.errors.append(
                ValidationError(
                    code="MISSING_STEPS",
                    message=f'Job "{job_id}" must have at least one step',
                    path=f"jobs.{job_id}.steps",
                )
            )
            continue

        for i, step in enumerate(steps):
            _check_step(job_id, i, step, result)


def _check_step(job_id: str, index: int, step, result: ValidationResult):
    if not isinstance(step, dict):
        step = {}

    uses = step.get("uses")
    if not uses and not step.get("run"):
        result.errors.append(
            ValidationError(
                code="INVALID_STEP",
                message=f"Step {index + 1} in job \"{job_id}\" must have either 'uses' or 'run'",
                path=f"jobs.{job_id}.steps[{index}]",
            )
        )

    if not uses:
        return

    uses = str(uses)
    path = f"jobs.{job_id}.steps[{index}].uses"
    match = ACTION_REF_PATTERN.match(uses)
    if not match:
        result.warnings.append(
            ValidationWarning(
                code="UNPINNED_ACTION",
                message=f'Action "{uses}" should be pinned to a version',
                path=path,
            )
        )
    elif match.group(1) in UNSTABLE_VERSIONS:
        result.warnings.append(
            ValidationWarning(
                code="UNSTABLE_VERSION",
                message=f'Action "{uses}" uses unstable version "{match.group(1)}"',
                path=path,
            )
        )


# --- Secrets ---


def _check_secrets(text: str, declared_secrets: list[SecretDef], result: ValidationResult):
    """Audit secret references in the raw text.

    Scanning text rather than the parsed steps also catches references
    embedded in CLI arguments, env values and expressions.
    """
    referenced = extract_secret_references(text)
    declared = {secret.name for secret in declared_secrets} | IMPLICIT_SECRETS

    for name in referenced:
        if name not in declared:
            result.errors.append(
                ValidationError(
                    code="UNDECLARED_SECRET",
                    message=f'Secret "{name}" is referenced but not declared in recipe metadata',
                )
            )

    for secret in declared_secrets:
        if secret.name not in IMPLICIT_SECRETS and secret.name not in referenced:
            result.warnings.append(
                ValidationWarning(
                    code="UNUSED_SECRET",
                    message=f'Secret "{secret.name}" is declared but not referenced in the workflow',
                )
            )


# --- Permissions ---


def _check_permissions(workflow: dict, result: ValidationResult):
    _check_permission_map(workflow.get("permissions"), "permissions", "", result)

    jobs = workflow.get("jobs")
    if not isinstance(jobs, dict):
        return
    for job_id, job in jobs.items():
        if isinstance(job, dict):
            _check_permission_map(
                job.get("permissions"),
                f"jobs.{job_id}.permissions",
                f' in job "{job_id}"',
                result,
            )


def _check_permission_map(permissions, path: str, where: str, result: ValidationResult):
    # Shorthand forms (`read-all`, `write-all`, `{}`) have no per-scope entries.
    if not isinstance(permissions, dict):
        return

    for scope, level in permissions.items():
        if scope not in VALID_SCOPES:
            result.errors.append(
                ValidationError(
                    code="INVALID_PERMISSION_SCOPE",
                    message=f'Invalid permission scope{where}: "{scope}"',
                    path=f"{path}.{scope}",
                )
            )
        if not isinstance(level, str) or level not in VALID_LEVELS:
            result.errors.append(
                ValidationError(
                    code="INVALID_PERMISSION_LEVEL",
                    message=f'Invalid permission level{where}: "{level}" for scope "{scope}"',
                    path=f"{path}.{scope}",
                )
            )


# --- Triggers ---


def _check_triggers(workflow: dict, result: ValidationResult):
    triggers = workflow.get("on")
    if not triggers:
        return

    # Shorthand: `on: push` or `on: [push, pull_request]`
    if isinstance(triggers, (str, list)):
        events = triggers if isinstance(triggers, list) else [triggers]
        for event in events:
            if not isinstance(event, str) or event not in KNOWN_EVENTS:
                result.warnings.append(
                    ValidationWarning(
                        code="UNKNOWN_EVENT",
                        message=f'Unknown trigger event: "{event}"',
                        path="on",
                    )
                )
        return

    if not isinstance(triggers, dict):
        return

    for event in triggers:
        if event not in KNOWN_EVENTS:
            result.warnings.append(
                ValidationWarning(
                    code="UNKNOWN_EVENT",
                    message=f'Unknown trigger event: "{event}"',
                    path=f"on.{event}",
                )
            )

    for event in sorted(DANGEROUS_EVENTS & set(triggers)):
        result.warnings.append(
            ValidationWarning(
                code="DANGEROUS_TRIGGER",
                message=(
                    f"{event} can be dangerous - ensure you understand "
                    "the security implications"
                ),
                path=f"on.{event}",
            )
        )
