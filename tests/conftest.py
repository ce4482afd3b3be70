from __future__ import annotations

from types import SimpleNamespace

import pytest

from taxi_manager.assist import AssistClient
from taxi_manager.config import AssistConfig
from taxi_manager.storage import LocalStore


class FakeModels:
    """Stands in for ``client.aio.models``; replies are returned or raised in order."""

    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    async def generate_content(self, *, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return SimpleNamespace(text=reply)


class FakeGenAIClient:
    def __init__(self, *replies):
        self.models = FakeModels(replies)
        self.aio = SimpleNamespace(models=self.models)

    @property
    def calls(self):
        return self.models.calls


@pytest.fixture
def assist_config():
    return AssistConfig(model="test-model", timeout_seconds=1.0, api_key="test-key")


@pytest.fixture
def make_assist(assist_config):
    def factory(*replies):
        fake = FakeGenAIClient(*replies)
        return AssistClient(config=assist_config, client=fake), fake

    return factory


@pytest.fixture
def store(tmp_path):
    return LocalStore(base_dir=tmp_path / "profile")
