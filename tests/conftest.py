"""Shared fixtures: fake transport, canned provider bodies, isolated settings."""

import json

import pytest

from ai_cmd.config_file import Settings, default_providers
from ai_cmd.llm import config as llm_config
from ai_cmd.llm.transport import TransportResult


class FakeTransport:
    """Records every argv and replays a canned TransportResult."""

    def __init__(self, result=None):
        self.result = result or TransportResult(True, b"{}")
        self.calls = []

    def execute(self, argv):
        self.calls.append(list(argv))
        return self.result

    @property
    def last_body(self):
        argv = self.calls[-1]
        return json.loads(argv[argv.index("-d") + 1])


def anthropic_body(text):
    return json.dumps({
        "id": "msg_01",
        "type": "message",
        "role": "assistant",
        "content": [{"type": "text", "text": text}],
    }).encode()


def openai_body(text):
    return json.dumps({
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [{"index": 0, "message": {"role": "assistant", "content": text}}],
    }).encode()


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """No real API keys or .env files leak into tests."""
    for var in llm_config.API_KEY_ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(llm_config, "_env_paths", [])


@pytest.fixture
def make_settings(tmp_path):
    def _make(provider="anthropic", api_key="sk-test", **overrides):
        keys = {"anthropic": api_key, "openai": api_key} if api_key else {}
        values = {
            "provider": provider,
            "providers": default_providers(keys),
            "history_file": tmp_path / "history.txt",
            "max_history": 100,
        }
        values.update(overrides)
        return Settings(**values)
    return _make


@pytest.fixture
def fake_transport():
    return FakeTransport()
