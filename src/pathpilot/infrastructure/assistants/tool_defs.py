"""Tool definitions offered to assistant runs."""

from __future__ import annotations

from typing import Any, Dict

from pathpilot.domain.directive import PLAN_FUNCTION_NAME

# Advertised to the assistant only; replies are not checked against it.
PLAN_PARAMETER_NAME = "is_pathPlan"


def make_tool_def(
    name: str,
    description: str,
    parameters: Dict[str, Any],
) -> Dict[str, Any]:
    """Build an OpenAI function tool definition dict."""
    return {
        "type": "function",
        "function": {
            "name": name,
            "description": description,
            "parameters": parameters,
        },
    }


def make_plan_tool_def() -> Dict[str, Any]:
    """Build the ``PathPlan_response`` tool.

    The tool is never executed: assistants echo it as an in-band
    ``<function_calls>`` block in their text to flag a finished plan.
    """
    return make_tool_def(
        name=PLAN_FUNCTION_NAME,
        description="Indicates that this message contains a pathplan",
        parameters={
            "type": "object",
            "properties": {
                PLAN_PARAMETER_NAME: {
                    "type": "boolean",
                    "description": "Whether this message contains a pathplan",
                },
            },
            "required": [PLAN_PARAMETER_NAME],
        },
    )
