"""Setup Node block — install Node.js with package-manager caching.

For pnpm the pnpm/action-setup step must run before actions/setup-node,
otherwise setup-node cannot locate the pnpm store to cache it.
"""

from __future__ import annotations

from workflow_factory.models.block import Block, BlockConfig, WorkflowStep, YamlFragment

DEFAULT_NODE_VERSION = "20"
DEFAULT_PACKAGE_MANAGER = "npm"
DEFAULT_CACHE_ENABLED = True
PNPM_VERSION = 9

SETUP_NODE_ACTION = "actions/setup-node@v4"
PNPM_SETUP_ACTION = "pnpm/action-setup@v3"


def _pnpm_setup_step() -> WorkflowStep:
    return WorkflowStep(
        name="Install pnpm",
        uses=PNPM_SETUP_ACTION,
        with_={"version": PNPM_VERSION},
    )


def _node_setup_step(node_version: str, package_manager: str, cache_enabled: bool) -> WorkflowStep:
    with_: dict[str, str | int | bool] = {"node-version": node_version}
    if cache_enabled:
        with_["cache"] = package_manager
    return WorkflowStep(name="Set up Node.js", uses=SETUP_NODE_ACTION, with_=with_)


class SetupNodeBlock(Block):
    id = "setup-node"
    name = "Setup Node.js"
    description = "Set up Node.js with optional caching for npm/pnpm/yarn"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        node_version = config.node_version or DEFAULT_NODE_VERSION
        package_manager = config.package_manager or DEFAULT_PACKAGE_MANAGER
        cache_enabled = (
            DEFAULT_CACHE_ENABLED if config.cache_enabled is None else config.cache_enabled
        )

        steps = []
        if package_manager == "pnpm":
            steps.append(_pnpm_setup_step())
        steps.append(_node_setup_step(str(node_version), package_manager, cache_enabled))
        return YamlFragment(steps=steps)


setup_node = SetupNodeBlock()
