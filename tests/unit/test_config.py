"""Unit tests for config module."""

import pytest
from pydantic import ValidationError

from careassist.config import Settings

# Env vars that a deployment may set which override Pydantic Settings defaults.
_DEPLOY_ENV_VARS = [
    "OLLAMA_HOST",
    "CHAT_MODEL",
    "STREAM_MODEL",
    "RETRY_MAX_ATTEMPTS",
    "RECOVERY_ENABLED",
    "CONFIRMATION_MATCH",
    "REQUEST_DB_PATH",
]


def test_default_settings(monkeypatch):
    for var in _DEPLOY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.ollama_host == "http://localhost:11434"
    assert s.chat_model == "mistral"
    assert s.stream_model == "nemotron-mini"
    assert s.health_probe_timeout_seconds == 5.0
    assert s.retry_max_attempts == 3
    assert s.confirmation_match == "substring"


def test_default_generation_options(monkeypatch):
    for var in _DEPLOY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    s = Settings(_env_file=None)
    assert s.stream_temperature == 0.7
    assert s.stream_top_k == 40
    assert s.stream_top_p == 0.9
    assert s.stream_num_ctx == 512
    assert s.stream_repeat_penalty == 1.1


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OLLAMA_HOST", "http://gpu-box:11434")
    monkeypatch.setenv("RETRY_MAX_ATTEMPTS", "5")
    monkeypatch.setenv("CONFIRMATION_MATCH", "word")
    s = Settings(_env_file=None)
    assert s.ollama_host == "http://gpu-box:11434"
    assert s.retry_max_attempts == 5
    assert s.confirmation_match == "word"


def test_rejects_unknown_confirmation_mode():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, confirmation_match="fuzzy")
