"""Block contract types.

A block is a stateless unit of pipeline behavior: it turns a sparse
configuration into a YAML fragment (an ordered list of steps plus optional
job env) and declares the secrets, permissions, and constraints it needs.
The generator merges these declarations across blocks and jobs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from enum import Enum


class PermissionScope(Enum):
    """GitHub Actions permission scopes."""

    ACTIONS = "actions"
    CHECKS = "checks"
    CONTENTS = "contents"
    DEPLOYMENTS = "deployments"
    ID_TOKEN = "id-token"
    ISSUES = "issues"
    PACKAGES = "packages"
    PAGES = "pages"
    PULL_REQUESTS = "pull-requests"
    SECURITY_EVENTS = "security-events"
    STATUSES = "statuses"


class PermissionLevel(Enum):
    """Access level for a permission scope, ordered none < read < write."""

    NONE = "none"
    READ = "read"
    WRITE = "write"

    @property
    def rank(self) -> int:
        return _LEVEL_RANK[self]

    def __lt__(self, other: PermissionLevel) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank < other.rank

    def __gt__(self, other: PermissionLevel) -> bool:
        if not isinstance(other, PermissionLevel):
            return NotImplemented
        return self.rank > other.rank


_LEVEL_RANK = {
    PermissionLevel.NONE: 0,
    PermissionLevel.READ: 1,
    PermissionLevel.WRITE: 2,
}


class ConstraintType(Enum):
    """Signals a block raises for documentation notes. Never enforced."""

    REQUIRES_DOCKER = "requires-docker"
    REQUIRES_SECRETS = "requires-secrets"
    REQUIRES_TAG_TRIGGER = "requires-tag-trigger"
    REQUIRES_SUBDIRECTORY = "requires-subdirectory"


# --- Declarations ---


@dataclass(frozen=True)
class SecretDef:
    """A secret a block expects as `${{ secrets.<name> }}`."""

    name: str
    description: str = ""
    required: bool = True
    example: str | None = None


@dataclass(frozen=True)
class PermissionDef:
    """A (scope, level, reason) permission requirement."""

    scope: PermissionScope
    level: PermissionLevel
    reason: str = ""


@dataclass(frozen=True)
class Constraint:
    type: ConstraintType
    value: str | None = None


# --- Fragments ---


@dataclass
class WorkflowStep:
    """A single step in a job: an action reference (`uses`) or a shell command (`run`)."""

    name: str | None = None
    id: str | None = None
    uses: str | None = None
    run: str | None = None
    with_: dict[str, str | int | bool] | None = None
    env: dict[str, str] | None = None
    if_: str | None = None
    working_directory: str | None = None

    def to_dict(self) -> dict:
        """Serialize to the workflow mapping form, dropping unset keys."""
        data: dict = {}
        if self.name is not None:
            data["name"] = self.name
        if self.id is not None:
            data["id"] = self.id
        if self.uses is not None:
            data["uses"] = self.uses
        if self.run is not None:
            data["run"] = self.run
        if self.with_ is not None:
            data["with"] = dict(self.with_)
        if self.env is not None:
            data["env"] = dict(self.env)
        if self.if_ is not None:
            data["if"] = self.if_
        if self.working_directory is not None:
            data["working-directory"] = self.working_directory
        return data


@dataclass
class YamlFragment:
    """Output of one `Block.emit` call. Built fresh on every call."""

    steps: list[WorkflowStep] = field(default_factory=list)
    env: dict[str, str] | None = None


# --- Configuration ---


_CAMEL_KEYS = {
    "workingDirectory": "working_directory",
    "nodeVersion": "node_version",
    "packageManager": "package_manager",
    "cacheEnabled": "cache_enabled",
    "imageName": "image_name",
    "pushEnabled": "push_enabled",
    "projectId": "project_id",
    "buildCommand": "build_command",
    "testCommand": "test_command",
    "lintCommand": "lint_command",
}


@dataclass
class BlockConfig:
    """Sparse configuration shared by all blocks.

    Every field is optional. Each block resolves missing fields to its own
    named defaults, so `emit()` with no config always succeeds.
    """

    # Common
    working_directory: str | None = None
    condition: str | None = None

    # Node
    node_version: str | None = None
    package_manager: str | None = None
    cache_enabled: bool | None = None

    # Docker
    registry: str | None = None
    image_name: str | None = None
    dockerfile: str | None = None
    context: str | None = None
    platforms: list[str] | None = None
    push_enabled: bool | None = None

    # Deploy
    environment: str | None = None
    project_id: str | None = None

    # Scripts
    build_command: str | None = None
    test_command: str | None = None
    lint_command: str | None = None

    @classmethod
    def from_dict(cls, data: dict | None) -> BlockConfig:
        """Build a config from a mapping with snake_case or camelCase keys.

        Unknown keys are ignored.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            key = _CAMEL_KEYS.get(key, key.replace("-", "_"))
            if key in known:
                kwargs[key] = value
        return cls(**kwargs)


# --- The contract ---


class Block(ABC):
    """A reusable unit of pipeline behavior.

    Subclasses set `id`, `name` and `description` and implement `emit`.
    The declaration methods default to "nothing required".
    """

    id: str = ""
    name: str = ""
    description: str = ""

    @abstractmethod
    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        """Produce this block's steps for the given configuration."""

    def secrets(self) -> list[SecretDef]:
        return []

    def permissions(self) -> list[PermissionDef]:
        return []

    def constraints(self) -> list[Constraint]:
        return []

    @staticmethod
    def resolve_config(config: BlockConfig | dict | None) -> BlockConfig:
        if config is None:
            return BlockConfig()
        if isinstance(config, dict):
            return BlockConfig.from_dict(config)
        return config

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id!r}>"
