"""Assistant registry: resolve an assistant selector from config.

The table is read once from ``PathPilotConfig.assistants`` and never changes
afterwards; tests substitute it by passing their own config.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, List

from pathpilot.application.ports import AssistantRegistry
from pathpilot.config import AssistantConfig, PathPilotConfig
from pathpilot.domain import AssistantConfigError

from .tool_defs import make_plan_tool_def

logger = logging.getLogger(__name__)


class ConfigAssistantRegistry(AssistantRegistry):
    """Only assistants declared in config can be selected."""

    def __init__(self, config: PathPilotConfig):
        self._assistants = MappingProxyType(dict(config.assistants))
        self._tools = [make_plan_tool_def()]

    def resolve(self, selector: str) -> AssistantConfig:
        try:
            return self._assistants[selector]
        except KeyError:
            logger.warning("Unknown assistant selector %r", selector)
            raise AssistantConfigError(selector) from None

    @property
    def tool_definitions(self) -> List[Dict[str, Any]]:
        return list(self._tools)

    def list_ids(self) -> List[str]:
        return list(self._assistants)

    def describe(self) -> List[Dict[str, str]]:
        """``{id, name, description}`` for every configured assistant, in config order."""
        return [
            {"id": selector, "name": a.name or selector, "description": a.description}
            for selector, a in self._assistants.items()
        ]
