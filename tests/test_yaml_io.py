"""Tests for workflow YAML encoding."""

from workflow_factory.utils.yaml_io import dump_workflow, load_workflow


def test_on_key_is_plain():
    text = dump_workflow({"name": "CI", "on": {"push": {"branches": ["main"]}}})
    assert text.startswith("name: CI\non:\n")


def test_yaml11_booleans_stay_strings():
    data = load_workflow("on: push\nyes: no\nflag: true\noff: false\n")
    assert data == {"on": "push", "yes": "no", "flag": True, "off": False}


def test_numeric_strings_use_double_quotes():
    text = dump_workflow({"node-version": "20"})
    assert text == 'node-version: "20"\n'


def test_insertion_order_preserved():
    text = dump_workflow({"b": 1, "a": 2})
    assert text == "b: 1\na: 2\n"


def test_no_aliases_for_shared_objects():
    branches = ["main"]
    text = dump_workflow({"push": {"branches": branches}, "pull_request": {"branches": branches}})
    assert "&" not in text
    assert "*" not in text


def test_multiline_strings_use_literal_block():
    text = dump_workflow({"tags": "type=sha\ntype=ref,event=pr"})
    assert text == "tags: |-\n  type=sha\n  type=ref,event=pr\n"
    assert load_workflow(text) == {"tags": "type=sha\ntype=ref,event=pr"}


def test_expressions_are_not_escaped():
    value = "vercel deploy --prebuilt --prod --token=${{ secrets.VERCEL_TOKEN }}"
    text = dump_workflow({"run": value})
    assert value in text


def test_long_lines_are_not_wrapped():
    value = " ".join(["word"] * 60)
    text = dump_workflow({"run": value})
    assert text == f"run: {value}\n"
