"""Checkout block — clone the repository with actions/checkout."""

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

CHECKOUT_ACTION = "actions/checkout@v4"


class CheckoutBlock(Block):
    id = "checkout"
    name = "Checkout"
    description = "Check out the repository code using actions/checkout"

    def emit(self, config: BlockConfig | dict | None = None) -> YamlFragment:
        config = self.resolve_config(config)
        step = WorkflowStep(name="Checkout repository", uses=CHECKOUT_ACTION)
        if config.working_directory:
            step.with_ = {"path": config.working_directory}
        return YamlFragment(steps=[step])

    def permissions(self) -> list[PermissionDef]:
        return [
            PermissionDef(
                scope=PermissionScope.CONTENTS,
                level=PermissionLevel.READ,
                reason="Required to checkout repository code",
            ),
        ]


checkout = CheckoutBlock()
