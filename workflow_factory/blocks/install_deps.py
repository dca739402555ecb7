"""Install Dependencies block — lockfile-respecting install per package manager."""

from __future__ import annotations

from workflow_factory.models.block import Block, BlockConfig, WorkflowStep, YamlFragment

DEFAULT_PACKAGE_MANAGER = "npm"

INSTALL_COMMANDS = {
    "npm": "npm ci",
    "pnpm": "pnpm install --frozen-lockfile",
    "yarn": "yarn install --frozen-lockfile",
}


def install_command(package_manager: str) -> str:
    """Return the install command, falling back to npm for unknown managers."""
    return INSTALL_COMMANDS.get(package_manager, INSTALL_COMMANDS[DEFAULT_PACKAGE_MANAGER])


class InstallDepsBlock(Block):
    id = "install-deps"
    name = "Install Dependencies"
    description = "Install project dependencies using the detected package manager"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        package_manager = config.package_manager or DEFAULT_PACKAGE_MANAGER
        return YamlFragment(
            steps=[
                WorkflowStep(
                    name="Install dependencies",
                    run=install_command(package_manager),
                    working_directory=config.working_directory or None,
                ),
            ]
        )


install_deps = InstallDepsBlock()
