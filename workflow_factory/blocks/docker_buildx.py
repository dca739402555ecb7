"""Docker Buildx block — multi-platform image build and push.

Logs in with the platform-provided GITHUB_TOKEN, derives tags with
docker/metadata-action and caches layers in the GitHub Actions cache.
"""

from __future__ import annotations

from workflow_factory.models.block import (
    Block,
    BlockConfig,
    Constraint,
    ConstraintType,
    PermissionDef,
    PermissionLevel,
    PermissionScope,
    SecretDef,
    WorkflowStep,
    YamlFragment,
)

DEFAULT_REGISTRY = "ghcr.io"
DEFAULT_IMAGE_NAME = "${{ github.repository }}"
DEFAULT_DOCKERFILE = "Dockerfile"
DEFAULT_CONTEXT = "."
DEFAULT_PLATFORMS = ("linux/amd64",)
DEFAULT_PUSH_ENABLED = True

TAG_PATTERNS = (
    "type=ref,event=branch",
    "type=ref,event=pr",
    "type=semver,pattern={{version}}",
    "type=semver,pattern={{major}}.{{minor}}",
    "type=sha",
)


class DockerBuildxBlock(Block):
    id = "docker-buildx"
    name = "Docker Buildx"
    description = "Build and push Docker image using buildx with GHCR login"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        registry = config.registry or DEFAULT_REGISTRY
        image_name = config.image_name or DEFAULT_IMAGE_NAME
        dockerfile = config.dockerfile or DEFAULT_DOCKERFILE
        context = config.context or DEFAULT_CONTEXT
        platforms = config.platforms if config.platforms is not None else DEFAULT_PLATFORMS
        push_enabled = DEFAULT_PUSH_ENABLED if config.push_enabled is None else config.push_enabled

        steps = [
            WorkflowStep(name="Set up QEMU", uses="docker/setup-qemu-action@v3"),
            WorkflowStep(name="Set up Docker Buildx", uses="docker/setup-buildx-action@v3"),
            WorkflowStep(
                name="Log in to Container Registry",
                uses="docker/login-action@v3",
                with_={
                    "registry": registry,
                    "username": "${{ github.actor }}",
                    "password": "${{ secrets.GITHUB_TOKEN }}",
                },
            ),
            WorkflowStep(
                name="Extract metadata (tags, labels)",
                id="meta",
                uses="docker/metadata-action@v5",
                with_={
                    "images": f"{registry}/{image_name}",
                    "tags": "\n".join(TAG_PATTERNS),
                },
            ),
            WorkflowStep(
                name="Build and push Docker image",
                uses="docker/build-push-action@v5",
                with_={
                    "context": context,
                    "file": dockerfile,
                    "platforms": ",".join(platforms),
                    "push": push_enabled,
                    "tags": "${{ steps.meta.outputs.tags }}",
                    "labels": "${{ steps.meta.outputs.labels }}",
                    "cache_from": "type=gha",
                    "cache_to": "type=gha,mode=max",
                },
            ),
        ]
        return YamlFragment(steps=steps)

    def secrets(self) -> list[SecretDef]:
        return [
            SecretDef(
                name="GITHUB_TOKEN",
                description="GitHub token for GHCR authentication (automatically provided)",
                required=True,
                example="Automatically provided by GitHub Actions",
            ),
        ]

    def permissions(self) -> list[PermissionDef]:
        return [
            PermissionDef(
                scope=PermissionScope.CONTENTS,
                level=PermissionLevel.READ,
                reason="Required to checkout repository",
            ),
            PermissionDef(
                scope=PermissionScope.PACKAGES,
                level=PermissionLevel.WRITE,
                reason="Required to push images to GHCR",
            ),
        ]

    def constraints(self) -> list[Constraint]:
        return [Constraint(type=ConstraintType.REQUIRES_DOCKER)]


docker_buildx = DockerBuildxBlock()
