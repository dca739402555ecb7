"""Built-in blocks and the block registry.

The registry is built once at import time and never mutated afterwards.
"""

from __future__ import annotations

from types import MappingProxyType

from workflow_factory.blocks.checkout import checkout
from workflow_factory.blocks.deploy_gh_pages import deploy_gh_pages
from workflow_factory.blocks.deploy_vercel import deploy_vercel
from workflow_factory.blocks.docker_buildx import docker_buildx
from workflow_factory.blocks.install_deps import install_deps
from workflow_factory.blocks.package_scripts import build, lint, test
from workflow_factory.blocks.setup_node import setup_node
from workflow_factory.models.block import Block

BLOCK_REGISTRY: MappingProxyType[str, Block] = MappingProxyType(
    {
        block.id: block
        for block in (
            checkout,
            setup_node,
            install_deps,
            build,
            lint,
            test,
            deploy_vercel,
            docker_buildx,
            deploy_gh_pages,
        )
    }
)


def get_block(block_id: str) -> Block | None:
    """Look up a registered block by id."""
    return BLOCK_REGISTRY.get(block_id)


__all__ = [
    "BLOCK_REGISTRY",
    "build",
    "checkout",
    "deploy_gh_pages",
    "deploy_vercel",
    "docker_buildx",
    "get_block",
    "install_deps",
    "lint",
    "setup_node",
    "test",
]
