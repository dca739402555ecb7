"""Deploy to GitHub Pages block — configure, upload artifact, deploy."""

from __future__ import annotations

from workflow_factory.models.block import (
    Block,
    BlockConfig,
    PermissionDef,
    PermissionLevel,
    PermissionScope,
    WorkflowStep,
    YamlFragment,
)

DEFAULT_PAGES_PATH = "./dist"


class DeployGhPagesBlock(Block):
    id = "deploy-gh-pages"
    name = "Deploy to GitHub Pages"
    description = "Deploy static files to GitHub Pages"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        return YamlFragment(
            steps=[
                WorkflowStep(name="Setup Pages", uses="actions/configure-pages@v4"),
                WorkflowStep(
                    name="Upload artifact",
                    uses="actions/upload-pages-artifact@v3",
                    with_={"path": config.working_directory or DEFAULT_PAGES_PATH},
                ),
                WorkflowStep(
                    name="Deploy to GitHub Pages",
                    id="deployment",
                    uses="actions/deploy-pages@v4",
                ),
            ]
        )

    def permissions(self) -> list[PermissionDef]:
        return [
            PermissionDef(
                scope=PermissionScope.CONTENTS,
                level=PermissionLevel.READ,
                reason="Required to checkout repository",
            ),
            PermissionDef(
                scope=PermissionScope.PAGES,
                level=PermissionLevel.WRITE,
                reason="Required to deploy to GitHub Pages",
            ),
            PermissionDef(
                scope=PermissionScope.ID_TOKEN,
                level=PermissionLevel.WRITE,
                reason="Required for GitHub Pages deployment verification",
            ),
        ]


deploy_gh_pages = DeployGhPagesBlock()
