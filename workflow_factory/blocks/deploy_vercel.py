"""Deploy to Vercel block — pull, build and deploy with the Vercel CLI."""

from __future__ import annotations

from workflow_factory.models.block import (
    Block,
    BlockConfig,
    Constraint,
    ConstraintType,
    SecretDef,
    WorkflowStep,
    YamlFragment,
)

VERCEL_SECRETS = ("VERCEL_TOKEN", "VERCEL_ORG_ID", "VERCEL_PROJECT_ID")

TOKEN_REF = "${{ secrets.VERCEL_TOKEN }}"


class DeployVercelBlock(Block):
    id = "deploy-vercel"
    name = "Deploy to Vercel"
    description = "Deploy to Vercel using the Vercel CLI"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        production = config.environment == "production"
        target = "production" if production else "preview"
        prod_flag = " --prod" if production else ""
        working_directory = config.working_directory or None

        steps = [
            WorkflowStep(
                name="Install Vercel CLI",
                run="npm install --global vercel@latest",
            ),
            WorkflowStep(
                name="Pull Vercel Environment Information",
                run=f"vercel pull --yes --environment={target} --token={TOKEN_REF}",
                working_directory=working_directory,
            ),
            WorkflowStep(
                name="Build Project Artifacts",
                run=f"vercel build{prod_flag} --token={TOKEN_REF}",
                working_directory=working_directory,
            ),
            WorkflowStep(
                name="Deploy Project Artifacts to Vercel",
                id="deploy",
                run=f"vercel deploy --prebuilt{prod_flag} --token={TOKEN_REF}",
                working_directory=working_directory,
            ),
        ]

        return YamlFragment(
            steps=steps,
            env={
                "VERCEL_ORG_ID": "${{ secrets.VERCEL_ORG_ID }}",
                "VERCEL_PROJECT_ID": "${{ secrets.VERCEL_PROJECT_ID }}",
            },
        )

    def secrets(self) -> list[SecretDef]:
        return [
            SecretDef(
                name="VERCEL_TOKEN",
                description="Vercel API token for deployment",
                required=True,
                example="Go to Vercel > Settings > Tokens to create one",
            ),
            SecretDef(
                name="VERCEL_ORG_ID",
                description="Vercel Organization/Team ID",
                required=True,
                example="Found in .vercel/project.json after running vercel link",
            ),
            SecretDef(
                name="VERCEL_PROJECT_ID",
                description="Vercel Project ID",
                required=True,
                example="Found in .vercel/project.json after running vercel link",
            ),
        ]

    def constraints(self) -> list[Constraint]:
        return [Constraint(type=ConstraintType.REQUIRES_SECRETS, value=",".join(VERCEL_SECRETS))]


deploy_vercel = DeployVercelBlock()
