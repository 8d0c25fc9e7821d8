"""Tests for the in-band <function_calls> directive parser and stripper.

The parser deliberately accepts any parameter name inside the block (only the
invoked function name is checked); see test_parameter_name_is_not_checked.
"""
from __future__ import annotations

import pytest

from pathpilot.domain.directive import (
    find_directive_block,
    is_plan_complete,
    parse_directive,
    strip_directive,
)


def _block(value: str = "true", name: str = "PathPlan_response", param: str = "is_pathPlan") -> str:
    return (
        "<function_calls>\n"
        f"<invoke name=\"{name}\">\n"
        f"<parameter name=\"{param}\">{value}</parameter>\n"
        "</invoke>\n"
        "</function_calls>"
    )


# ---------------------------------------------------------------------------
# parse_directive / is_plan_complete
# ---------------------------------------------------------------------------

def test_true_directive_marks_plan_complete():
    text = "Consider X, Y, Z.\n\n" + _block("true")
    directive = parse_directive(text)
    assert directive is not None
    assert directive.function_name == "PathPlan_response"
    assert directive.parameter_name == "is_pathPlan"
    assert directive.value is True
    assert is_plan_complete(text) is True


@pytest.mark.parametrize("value", ["false", "1", "", "True", "TRUE", " true", "yes"])
def test_anything_but_literal_true_is_not_complete(value):
    text = "Plan so far.\n" + _block(value)
    assert is_plan_complete(text) is False


def test_no_block_is_not_complete_and_not_an_error():
    assert parse_directive("Just some advice.") is None
    assert is_plan_complete("Just some advice.") is False


def test_block_without_invoke_returns_none():
    text = "x <function_calls><parameter name=\"is_pathPlan\">true</parameter></function_calls>"
    assert parse_directive(text) is None
    assert is_plan_complete(text) is False


def test_block_without_parameter_returns_none():
    text = "x <function_calls><invoke name=\"PathPlan_response\"></invoke></function_calls>"
    assert parse_directive(text) is None


def test_other_function_name_is_not_complete():
    text = "x\n" + _block("true", name="SomethingElse")
    assert parse_directive(text).function_name == "SomethingElse"
    assert is_plan_complete(text) is False


def test_parameter_name_is_not_checked():
    """Loose matching: the first parameter is used whatever its name."""
    text = "x\n" + _block("true", param="done")
    assert is_plan_complete(text) is True


def test_tag_names_are_case_sensitive():
    text = "x <FUNCTION_CALLS><invoke name=\"PathPlan_response\"><parameter name=\"p\">true</parameter></invoke></FUNCTION_CALLS>"
    assert find_directive_block(text) is None
    assert is_plan_complete(text) is False


def test_unclosed_block_is_ignored():
    text = "x <function_calls><invoke name=\"PathPlan_response\"><parameter name=\"p\">true</parameter>"
    assert find_directive_block(text) is None


# ---------------------------------------------------------------------------
# strip_directive
# ---------------------------------------------------------------------------

def test_strip_removes_trailing_block_and_whitespace():
    block = _block("true")
    text = "Consider X, Y, Z.\n\n" + block + "\n  "
    cleaned = strip_directive(text)
    assert cleaned == "Consider X, Y, Z."
    assert block not in cleaned


def test_strip_removes_block_even_when_unparsable():
    text = "Advice.\n<function_calls>\ngarbage\n</function_calls>"
    assert strip_directive(text) == "Advice."


def test_strip_removes_block_in_the_middle():
    text = "Before. " + _block("false") + " After."
    cleaned = strip_directive(text)
    assert "<function_calls>" not in cleaned
    assert cleaned == "Before. After."


def test_strip_without_block_only_trims():
    assert strip_directive("  plain answer \n") == "plain answer"


def test_strip_is_idempotent():
    once = strip_directive("Keep this.\n\n" + _block("true"))
    assert strip_directive(once) == once
