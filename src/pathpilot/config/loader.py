"""Load config from PATHPILOT_CONFIG_PATH or return the default.

``load_config()`` is memoised with ``functools.lru_cache`` so the file is read
and parsed at most once per process.  Call ``load_config.cache_clear()`` to
force a re-read (tests, or when the environment changes at runtime).
"""

from __future__ import annotations

import functools
import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schema import DEFAULT_CONFIG, PathPilotConfig

logger = logging.getLogger(__name__)

_ASSISTANT_ENV_PREFIX = "PATHPILOT_ASSISTANT_"


class _Env(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PATHPILOT_", extra="ignore")
    config_path: Optional[str] = None
    openai_api_key: Optional[str] = Field(None, validation_alias="OPENAI_API_KEY")


_env: Optional[_Env] = None


def _get_env() -> _Env:
    global _env
    if _env is None:
        _env = _Env()
    return _env


def assistant_env_var(selector: str) -> str:
    """Environment variable that overrides the provider id of ``selector`` (``path-planner`` -> ``PATHPILOT_ASSISTANT_PATH_PLANNER``)."""
    return _ASSISTANT_ENV_PREFIX + selector.replace("-", "_").upper()


def _apply_env_overrides(config: PathPilotConfig) -> PathPilotConfig:
    env = _get_env()
    update: Dict[str, object] = {}

    if not config.provider.api_key and env.openai_api_key:
        update["provider"] = config.provider.model_copy(update={"api_key": env.openai_api_key})

    assistants = dict(config.assistants)
    overridden = False
    for selector, assistant in config.assistants.items():
        value = os.environ.get(assistant_env_var(selector), "").strip()
        if value and value != assistant.assistant_id:
            assistants[selector] = assistant.model_copy(update={"assistant_id": value})
            overridden = True
            logger.debug("Assistant %s overridden from environment", selector)
    if overridden:
        update["assistants"] = assistants

    if not update:
        return config
    return config.model_copy(update=update)


@functools.lru_cache(maxsize=1)
def load_config() -> PathPilotConfig:
    """Load config from PATHPILOT_CONFIG_PATH if set and valid; else DEFAULT_CONFIG.

    Environment overrides (``OPENAI_API_KEY``, ``PATHPILOT_ASSISTANT_<ROLE>``)
    are applied on top.  Result is cached for the lifetime of the process.
    """
    path = _get_env().config_path
    config = DEFAULT_CONFIG
    if path and path.strip():
        p = Path(path).expanduser().resolve()
        if p.is_file():
            data = json.loads(p.read_text(encoding="utf-8"))
            config = PathPilotConfig.model_validate(data)
        else:
            logger.warning("PATHPILOT_CONFIG_PATH %s is not a file; using default config", p)
    return _apply_env_overrides(config)
