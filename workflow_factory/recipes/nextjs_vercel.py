"""Next.js to Vercel — PR previews plus production deploys from main."""

from workflow_factory.models.block import BlockConfig
from workflow_factory.models.recipe import (
    BlockRef,
    CommonFailure,
    Concurrency,
    JobConfig,
    Recipe,
    RecipeMetadata,
)


def _deploy_blocks(environment: str) -> list[BlockRef]:
    return [
        BlockRef("checkout"),
        BlockRef("setup-node", BlockConfig(node_version="20", package_manager="npm")),
        BlockRef("install-deps", BlockConfig(package_manager="npm")),
        BlockRef("deploy-vercel", BlockConfig(environment=environment)),
    ]


nextjs_vercel = Recipe(
    id="nextjs-vercel",
    slug="nextjs-vercel",
    name="Next.js to Vercel",
    description="Deploy Next.js applications to Vercel with PR previews and production deployments",
    stack=["nextjs", "vercel", "node"],
    triggers={
        "push": {"branches": ["main"]},
        "pull_request": {"branches": ["main"]},
    },
    concurrency=Concurrency(group="${{ github.workflow }}-${{ github.ref }}", cancel_in_progress=True),
    jobs=[
        JobConfig(
            id="deploy-preview",
            name="Deploy Preview",
            runs_on="ubuntu-latest",
            if_="github.event_name == 'pull_request'",
            blocks=_deploy_blocks("preview"),
        ),
        JobConfig(
            id="deploy-production",
            name="Deploy Production",
            runs_on="ubuntu-latest",
            if_="github.event_name == 'push' && github.ref == 'refs/heads/main'",
            environment="production",
            blocks=_deploy_blocks("production"),
        ),
    ],
    metadata=RecipeMetadata(
        seo_title="Deploy Next.js to Vercel with GitHub Actions",
        seo_description=(
            "Complete GitHub Actions workflow for deploying Next.js applications to Vercel "
            "with automatic PR previews and production deployments."
        ),
        common_failures=[
            CommonFailure(
                title="VERCEL_TOKEN not set",
                description="The workflow fails with authentication error during deployment.",
                solution=(
                    "Create a Vercel token at vercel.com/account/tokens and add it as a "
                    "repository secret named VERCEL_TOKEN."
                ),
            ),
            CommonFailure(
                title="Missing VERCEL_ORG_ID or VERCEL_PROJECT_ID",
                description='Deployment fails with "Project not found" or similar error.',
                solution=(
                    "Run `vercel link` locally to generate .vercel/project.json, then add "
                    "the orgId and projectId as secrets."
                ),
            ),
            CommonFailure(
                title="Build fails with missing dependencies",
                description="Next.js build fails due to missing packages.",
                solution=(
                    "Ensure package-lock.json is committed and all dependencies are listed "
                    "correctly in package.json."
                ),
            ),
        ],
        related_recipes=["nextjs-cloudflare", "react-vite-netlify"],
    ),
)
