"""Build, lint and test blocks — run a package.json script.

A configured command containing a space is taken as a complete command
and used verbatim (`next build`). Anything else is a script name and gets
the package manager's run prefix (`npm run build`, `pnpm build`).
"""

from __future__ import annotations

from workflow_factory.models.block import Block, BlockConfig, WorkflowStep, YamlFragment

DEFAULT_PACKAGE_MANAGER = "npm"

RUN_PREFIXES = {
    "npm": "npm run",
    "pnpm": "pnpm",
    "yarn": "yarn",
}


def run_prefix(package_manager: str) -> str:
    return RUN_PREFIXES.get(package_manager, RUN_PREFIXES[DEFAULT_PACKAGE_MANAGER])


def script_command(command: str, package_manager: str) -> str:
    """Resolve a configured command or script name into the shell command to run."""
    if " " in command:
        return command
    return f"{run_prefix(package_manager)} {command}"


class ScriptBlock(Block):
    """Base for blocks that run a single package script.

    Subclasses name the `BlockConfig` field holding the command override
    and the default script name.
    """

    step_name = ""
    command_field = ""
    default_command = ""

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        package_manager = config.package_manager or DEFAULT_PACKAGE_MANAGER
        command = getattr(config, self.command_field) or self.default_command
        return YamlFragment(
            steps=[
                WorkflowStep(
                    name=self.step_name,
                    run=script_command(command, package_manager),
                    working_directory=config.working_directory or None,
                ),
            ]
        )


class BuildBlock(ScriptBlock):
    id = "build"
    name = "Build"
    description = "Run the build command"

    step_name = "Build"
    command_field = "build_command"
    default_command = "build"


class LintBlock(ScriptBlock):
    id = "lint"
    name = "Lint"
    description = "Run the lint command"

    step_name = "Lint"
    command_field = "lint_command"
    default_command = "lint"


class TestBlock(ScriptBlock):
    __test__ = False  # not a pytest test class

    id = "test"
    name = "Test"
    description = "Run the test command"

    step_name = "Test"
    command_field = "test_command"
    default_command = "test"


build = BuildBlock()
lint = LintBlock()
test = TestBlock()
