"""Recipe data models — jobs composed from blocks, plus generator output."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from workflow_factory.models.block import BlockConfig, PermissionDef, SecretDef

# Event name -> event configuration, serialized verbatim under `on`.
# e.g. {"push": {"branches": ["main"]}, "workflow_dispatch": {}}
TriggerConfig = dict[str, Any]


@dataclass
class BlockRef:
    """A reference to a registered block plus its configuration."""

    block_id: str
    config: BlockConfig | None = None


@dataclass
class JobConfig:
    """A job: ordered block references and job-level settings."""

    id: str
    name: str
    runs_on: str
    blocks: list[BlockRef] = field(default_factory=list)
    needs: list[str] = field(default_factory=list)
    if_: str | None = None
    environment: str | None = None


@dataclass
class Concurrency:
    group: str
    cancel_in_progress: bool | None = None

    def to_dict(self) -> dict:
        data: dict = {"group": self.group}
        if self.cancel_in_progress is not None:
            data["cancel-in-progress"] = self.cancel_in_progress
        return data


@dataclass
class CommonFailure:
    """A known failure mode with its fix, shown alongside a recipe."""

    title: str
    description: str
    solution: str


@dataclass
class RecipeMetadata:
    seo_title: str = ""
    seo_description: str = ""
    common_failures: list[CommonFailure] = field(default_factory=list)
    related_recipes: list[str] = field(default_factory=list)


@dataclass
class Recipe:
    """A complete pipeline definition built from blocks."""

    id: str
    slug: str
    name: str
    description: str = ""
    stack: list[str] = field(default_factory=list)
    triggers: TriggerConfig = field(default_factory=dict)
    concurrency: Concurrency | None = None
    jobs: list[JobConfig] = field(default_factory=list)
    metadata: RecipeMetadata = field(default_factory=RecipeMetadata)

    @classmethod
    def from_dict(cls, data: dict) -> Recipe:
        """Build a recipe from its YAML/JSON form.

        Keys may be camelCase (`runsOn`, `blockId`) or snake_case
        (`runs_on`, `block_id`). `id` doubles as the slug when no slug
        is given.
        """
        recipe_id = data["id"]

        concurrency = None
        raw_concurrency = data.get("concurrency")
        if raw_concurrency:
            concurrency = Concurrency(
                group=raw_concurrency["group"],
                cancel_in_progress=_pick(
                    raw_concurrency, "cancel-in-progress", "cancel_in_progress"
                ),
            )

        jobs = []
        for raw_job in data.get("jobs", []):
            jobs.append(
                JobConfig(
                    id=raw_job["id"],
                    name=raw_job.get("name", raw_job["id"]),
                    runs_on=_pick(raw_job, "runsOn", "runs_on", "runs-on") or "ubuntu-latest",
                    blocks=[
                        BlockRef(
                            block_id=_pick(ref, "blockId", "block_id"),
                            config=BlockConfig.from_dict(ref.get("config")) if ref.get("config") else None,
                        )
                        for ref in raw_job.get("blocks", [])
                    ],
                    needs=_as_list(raw_job.get("needs")),
                    if_=_pick(raw_job, "if", "if_"),
                    environment=raw_job.get("environment"),
                )
            )

        raw_meta = data.get("metadata") or {}
        metadata = RecipeMetadata(
            seo_title=_pick(raw_meta, "seoTitle", "seo_title") or "",
            seo_description=_pick(raw_meta, "seoDescription", "seo_description") or "",
            common_failures=[
                CommonFailure(
                    title=f.get("title", ""),
                    description=f.get("description", ""),
                    solution=f.get("solution", ""),
                )
                for f in (_pick(raw_meta, "commonFailures", "common_failures") or [])
            ],
            related_recipes=_as_list(_pick(raw_meta, "relatedRecipes", "related_recipes")),
        )

        return cls(
            id=recipe_id,
            slug=data.get("slug", recipe_id),
            name=data.get("name", recipe_id),
            description=data.get("description", ""),
            stack=_as_list(data.get("stack")),
            triggers=dict(data.get("triggers") or data.get("on") or {}),
            concurrency=concurrency,
            jobs=jobs,
            metadata=metadata,
        )


def _pick(data: dict, *keys: str):
    """Return the value of the first key present in data."""
    for key in keys:
        if key in data:
            return data[key]
    return None


def _as_list(value) -> list:
    """Normalize a scalar-or-list field; `needs: build` means one entry."""
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


@dataclass(frozen=True)
class GeneratorOutput:
    """Everything produced by one `generate_workflow` call."""

    yaml: str
    secrets: list[SecretDef] = field(default_factory=list)
    permissions: list[PermissionDef] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    recipe: Recipe | None = None
