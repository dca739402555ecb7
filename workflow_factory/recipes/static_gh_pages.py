"""Static site to GitHub Pages — build on push, deploy through Pages."""

from workflow_factory.models.block import BlockConfig
from workflow_factory.models.recipe import (
    BlockRef,
    CommonFailure,
    Concurrency,
    JobConfig,
    Recipe,
    RecipeMetadata,
)

static_gh_pages = Recipe(
    id="static-gh-pages",
    slug="static-gh-pages",
    name="Static Site to GitHub Pages",
    description="Deploy static HTML/CSS/JS files to GitHub Pages with automatic deployment on push",
    stack=["static", "github-pages"],
    triggers={
        "push": {"branches": ["main"]},
        "workflow_dispatch": {},
    },
    concurrency=Concurrency(group="pages", cancel_in_progress=False),
    jobs=[
        JobConfig(
            id="build",
            name="Build",
            runs_on="ubuntu-latest",
            blocks=[
                BlockRef("checkout"),
                BlockRef("setup-node", BlockConfig(node_version="20", package_manager="npm")),
                BlockRef("install-deps", BlockConfig(package_manager="npm")),
                BlockRef("build", BlockConfig(package_manager="npm")),
            ],
        ),
        JobConfig(
            id="deploy",
            name="Deploy",
            runs_on="ubuntu-latest",
            needs=["build"],
            environment="github-pages",
            blocks=[
                BlockRef("deploy-gh-pages", BlockConfig(working_directory="./dist")),
            ],
        ),
    ],
    metadata=RecipeMetadata(
        seo_title="Deploy Static Site to GitHub Pages with GitHub Actions",
        seo_description=(
            "Complete GitHub Actions workflow for deploying static HTML, CSS, and JavaScript "
            "sites to GitHub Pages with automatic deployments."
        ),
        common_failures=[
            CommonFailure(
                title="Pages not enabled",
                description="Deployment fails because GitHub Pages is not enabled for the repository.",
                solution=(
                    'Go to repository Settings > Pages and enable GitHub Pages. Select "GitHub '
                    'Actions" as the source.'
                ),
            ),
            CommonFailure(
                title="Permission denied",
                description="The workflow fails with permission errors during deployment.",
                solution="Ensure the workflow has `pages: write` and `id-token: write` permissions.",
            ),
            CommonFailure(
                title="Wrong output directory",
                description="The deployed site shows 404 or wrong content.",
                solution=(
                    "Verify that your build outputs to the directory specified in the "
                    "upload-pages-artifact step (default: ./dist)."
                ),
            ),
            CommonFailure(
                title="Build artifacts not found",
                description="Deploy job fails because it cannot find build artifacts.",
                solution="Ensure the build job completes successfully and the artifact path is correct.",
            ),
        ],
        related_recipes=["react-vite-netlify", "nextjs-vercel"],
    ),
)
