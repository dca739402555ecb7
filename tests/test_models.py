"""Tests for block and recipe data models."""

from workflow_factory.models.block import BlockConfig, SecretDef, WorkflowStep
from workflow_factory.models.recipe import Concurrency, GeneratorOutput, Recipe


def test_block_config_defaults_are_unset():
    config = BlockConfig()
    assert config.package_manager is None
    assert config.node_version is None
    assert config.platforms is None
    assert config.push_enabled is None


def test_block_config_from_camel_case():
    config = BlockConfig.from_dict(
        {
            "packageManager": "yarn",
            "nodeVersion": "22",
            "workingDirectory": "site",
            "pushEnabled": False,
            "unknownKey": "ignored",
        }
    )
    assert config.package_manager == "yarn"
    assert config.node_version == "22"
    assert config.working_directory == "site"
    assert config.push_enabled is False


def test_block_config_from_snake_and_kebab_case():
    config = BlockConfig.from_dict({"build_command": "make", "image-name": "acme/app"})
    assert config.build_command == "make"
    assert config.image_name == "acme/app"
    assert BlockConfig.from_dict(None) == BlockConfig()


def test_step_to_dict_drops_unset_keys():
    step = WorkflowStep(name="Checkout", uses="actions/checkout@v4")
    assert step.to_dict() == {"name": "Checkout", "uses": "actions/checkout@v4"}


def test_step_to_dict_key_names():
    step = WorkflowStep(
        name="Build",
        id="build",
        run="make",
        with_={"a": 1},
        env={"CI": "1"},
        if_="success()",
        working_directory="app",
    )
    assert list(step.to_dict()) == ["name", "id", "run", "with", "env", "if", "working-directory"]


def test_concurrency_to_dict():
    assert Concurrency(group="pages").to_dict() == {"group": "pages"}
    assert Concurrency(group="g", cancel_in_progress=True).to_dict() == {
        "group": "g",
        "cancel-in-progress": True,
    }


def test_recipe_from_dict_defaults():
    recipe = Recipe.from_dict({"id": "minimal", "jobs": [{"id": "ci"}]})
    assert recipe.slug == "minimal"
    assert recipe.name == "minimal"
    assert recipe.concurrency is None
    assert recipe.jobs[0].runs_on == "ubuntu-latest"
    assert recipe.jobs[0].blocks == []
    assert recipe.metadata.common_failures == []


def test_secret_def_identity():
    assert SecretDef(name="A") == SecretDef(name="A", description="", required=True)
    assert SecretDef(name="A").example is None


def test_generator_output_defaults():
    output = GeneratorOutput(yaml="name: x\n")
    assert output.secrets == []
    assert output.permissions == []
    assert output.notes == []
    assert output.recipe is None
