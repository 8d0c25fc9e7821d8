"""In-band directive parsing for assistant replies.

Assistants signal that a reply contains a finished plan by appending a
pseudo function call to the text instead of using native tool calls::

    <function_calls>
    <invoke name="PathPlan_response">
    <parameter name="is_pathPlan">true</parameter>
    </invoke>
    </function_calls>

Tag names are case-sensitive and the parameter value is compared literally
against ``true``.  The parser takes the first ``<invoke>`` and the first
``<parameter>`` inside the first block, whatever the parameter is called.
A missing block, invoke or parameter is a normal outcome and yields ``None``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from .models import PlanDirective

logger = logging.getLogger(__name__)

PLAN_FUNCTION_NAME = "PathPlan_response"

_BLOCK_RE = re.compile(r"<function_calls>.*?</function_calls>", re.DOTALL)
_BLOCK_WITH_LEADING_WS_RE = re.compile(r"\s*<function_calls>.*?</function_calls>", re.DOTALL)
_INVOKE_RE = re.compile(r'<invoke name="(.*?)">')
_PARAMETER_RE = re.compile(r'<parameter name="(.*?)">(.*?)</parameter>')


def find_directive_block(text: str) -> Optional[str]:
    """Return the first ``<function_calls>...</function_calls>`` block verbatim, or None."""
    match = _BLOCK_RE.search(text)
    return match.group(0) if match else None


def parse_directive(text: str) -> Optional[PlanDirective]:
    """Extract the invocation and its first parameter from the directive block."""
    block = find_directive_block(text)
    if block is None:
        logger.debug("No function_calls block in assistant message")
        return None

    invoke = _INVOKE_RE.search(block)
    if invoke is None:
        logger.debug("function_calls block has no invoke element")
        return None

    parameter = _PARAMETER_RE.search(block)
    if parameter is None:
        logger.debug("invoke %r has no parameter element", invoke.group(1))
        return None

    return PlanDirective(
        function_name=invoke.group(1),
        parameter_name=parameter.group(1),
        value=parameter.group(2) == "true",
    )


def is_plan_complete(text: str, function_name: str = PLAN_FUNCTION_NAME) -> bool:
    """True only when the directive invokes ``function_name`` with the literal value ``true``."""
    directive = parse_directive(text)
    if directive is None or directive.function_name != function_name:
        return False
    return directive.value


def strip_directive(text: str) -> str:
    """Remove every directive block (and the whitespace before it) and trim the result.

    Applying it to its own output changes nothing.
    """
    cleaned = text
    while _BLOCK_RE.search(cleaned):
        cleaned = _BLOCK_WITH_LEADING_WS_RE.sub("", cleaned)
    return cleaned.strip()
