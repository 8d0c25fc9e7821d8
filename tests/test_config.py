"""Tests for config schema validation and loading."""
from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from pathpilot.config import DEFAULT_CONFIG, AssistantConfig, PathPilotConfig, load_config
from pathpilot.config.loader import assistant_env_var


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("PATHPILOT_CONFIG_PATH", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    for selector in DEFAULT_CONFIG.assistants:
        monkeypatch.delenv(assistant_env_var(selector), raising=False)


def test_load_config_default():
    cfg = load_config()
    assert cfg is DEFAULT_CONFIG
    assert cfg.default_assistant == "path-planner"
    assert set(cfg.assistants) == {"path-planner", "atomic-habits", "essentialist", "flow-zone"}
    assert cfg.poll_interval_s == 1.0
    assert cfg.run_timeout_s == 90.0


def test_default_assistant_must_be_declared():
    with pytest.raises(ValidationError, match="default_assistant"):
        PathPilotConfig(
            assistants={"atomic-habits": AssistantConfig(assistant_id="asst_1")},
        )


def test_assistants_must_not_be_empty():
    with pytest.raises(ValidationError, match="assistants must not be empty"):
        PathPilotConfig(assistants={}, default_assistant="path-planner")


def test_poll_interval_must_be_positive():
    with pytest.raises(ValidationError):
        PathPilotConfig(
            assistants={"path-planner": AssistantConfig(assistant_id="asst_1")},
            poll_interval_s=0,
        )


def test_config_is_immutable():
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.default_assistant = "essentialist"


def test_load_config_from_file(tmp_path, monkeypatch):
    path = tmp_path / "pathpilot.json"
    path.write_text(json.dumps({
        "provider": {"base_url": "http://127.0.0.1:9000/v1", "api_key": "sk-file"},
        "assistants": {"coach": {"assistant_id": "asst_coach", "name": "Coach"}},
        "default_assistant": "coach",
        "run_timeout_s": 30,
    }))
    monkeypatch.setenv("PATHPILOT_CONFIG_PATH", str(path))
    cfg = load_config()
    assert cfg.provider.base_url == "http://127.0.0.1:9000/v1"
    assert cfg.provider.api_key == "sk-file"
    assert cfg.assistants["coach"].assistant_id == "asst_coach"
    assert cfg.run_timeout_s == 30


def test_missing_config_file_falls_back_to_default(tmp_path, monkeypatch):
    monkeypatch.setenv("PATHPILOT_CONFIG_PATH", str(tmp_path / "missing.json"))
    assert load_config() is DEFAULT_CONFIG


def test_openai_api_key_fills_empty_provider_key(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    cfg = load_config()
    assert cfg.provider.api_key == "sk-env"
    assert DEFAULT_CONFIG.provider.api_key == ""


def test_file_api_key_wins_over_env(tmp_path, monkeypatch):
    path = tmp_path / "pathpilot.json"
    path.write_text(json.dumps({
        "provider": {"api_key": "sk-file"},
        "assistants": {"path-planner": {"assistant_id": "asst_1"}},
    }))
    monkeypatch.setenv("PATHPILOT_CONFIG_PATH", str(path))
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    assert load_config().provider.api_key == "sk-file"


def test_assistant_id_env_override(monkeypatch):
    monkeypatch.setenv("PATHPILOT_ASSISTANT_FLOW_ZONE", "asst_from_env")
    cfg = load_config()
    assert cfg.assistants["flow-zone"].assistant_id == "asst_from_env"
    assert cfg.assistants["flow-zone"].name == "Flow Zone"
    assert cfg.assistants["path-planner"] == DEFAULT_CONFIG.assistants["path-planner"]


def test_assistant_env_var_name():
    assert assistant_env_var("path-planner") == "PATHPILOT_ASSISTANT_PATH_PLANNER"


def test_load_config_is_cached():
    assert load_config() is load_config()
