"""YAML encoding for workflow documents.

PyYAML follows YAML 1.1, where `on`, `off`, `yes` and `no` are booleans.
GitHub Actions relies on `on` being a plain key, so both the dumper and
the loader here only treat `true`/`false` as booleans (YAML 1.2 core).
"""

from __future__ import annotations

import re

import yaml

BOOL_TAG = "tag:yaml.org,2002:bool"
STR_TAG = "tag:yaml.org,2002:str"

_YAML12_BOOL = re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$")

# Decoding failures beyond YAMLError: deep nesting exhausts the recursive
# composer, and out-of-range implicit timestamps fail in the constructor.
DECODE_ERRORS = (yaml.YAMLError, ValueError, RecursionError)


def _without_yaml11_bools(resolvers: dict) -> dict:
    return {
        first: [(tag, regexp) for tag, regexp in entries if tag != BOOL_TAG]
        for first, entries in resolvers.items()
    }


class WorkflowLoader(yaml.SafeLoader):
    """Safe loader with YAML 1.2 booleans."""

    yaml_implicit_resolvers = _without_yaml11_bools(yaml.SafeLoader.yaml_implicit_resolvers)


WorkflowLoader.add_implicit_resolver(BOOL_TAG, _YAML12_BOOL, list("tTfF"))


class WorkflowDumper(yaml.SafeDumper):
    """Safe dumper that never emits aliases and prefers double quotes."""

    yaml_implicit_resolvers = _without_yaml11_bools(yaml.SafeDumper.yaml_implicit_resolvers)

    def ignore_aliases(self, data) -> bool:
        return True

    def choose_scalar_style(self):
        style = super().choose_scalar_style()
        if style == "'":
            return '"'
        return style


WorkflowDumper.add_implicit_resolver(BOOL_TAG, _YAML12_BOOL, list("tTfF"))


def _represent_str(dumper: WorkflowDumper, data: str):
    if "\n" in data:
        return dumper.represent_scalar(STR_TAG, data, style="|")
    return dumper.represent_scalar(STR_TAG, data)


WorkflowDumper.add_representer(str, _represent_str)


def dump_workflow(data: dict) -> str:
    """Serialize a workflow mapping.

    Keys keep insertion order, lines are never wrapped, and `${{ ... }}`
    expressions stay literal so they can be found by text search.
    """
    return yaml.dump(
        data,
        Dumper=WorkflowDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )


def load_workflow(text: str):
    """Parse YAML text. Raises one of DECODE_ERRORS on malformed input."""
    return yaml.load(text, Loader=WorkflowLoader)


def is_valid_yaml(text: str) -> bool:
    """Return True if the text parses as YAML."""
    try:
        load_workflow(text)
    except DECODE_ERRORS:
        return False
    return True
