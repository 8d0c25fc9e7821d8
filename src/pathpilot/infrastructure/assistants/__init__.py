"""Config-backed assistant registry and the tools offered to runs."""

from .registry import ConfigAssistantRegistry
from .tool_defs import make_plan_tool_def

__all__ = ["ConfigAssistantRegistry", "make_plan_tool_def"]
