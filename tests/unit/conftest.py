"""Shared fakes for the host collaborators and HTTP transport."""

from __future__ import annotations

import json

import httpx
import pytest

from wordwise.core.config import Provider
from wordwise.core.settings import reset_to_defaults, set_active_provider, update_active_config


class FakeEditor:
    def __init__(self, selection: str = "") -> None:
        self.selection = selection
        self.replacements: list[str] = []

    def get_selection(self) -> str:
        return self.selection

    def replace_selection(self, text: str) -> None:
        self.replacements.append(text)
        self.selection = text


class FakeNotifier:
    def __init__(self) -> None:
        self.messages: list[str] = []

    def notify(self, message: str) -> None:
        self.messages.append(message)


class ScriptedModal:
    """Instructions modal that answers immediately (None means cancel)."""

    def __init__(self, answer: str | None) -> None:
        self.answer = answer
        self.opened = 0

    def open(self, request) -> None:
        self.opened += 1
        if self.answer is None:
            request.cancel()
        else:
            request.submit(self.answer)


class MemoryStorage:
    def __init__(self, data: dict | None = None) -> None:
        self.data = data
        self.saves = 0

    def load_data(self) -> dict | None:
        return self.data

    def save_data(self, data: dict) -> None:
        self.data = data
        self.saves += 1


class RecordingTransport:
    """httpx.MockTransport wrapper that keeps every request it saw."""

    def __init__(self, status: int = 200, body: object = None) -> None:
        self.requests: list[httpx.Request] = []
        self.status = status
        self.body = body if body is not None else {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.body, (dict, list)):
            return httpx.Response(self.status, json=self.body)
        return httpx.Response(self.status, text=str(self.body))

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def editor() -> FakeEditor:
    return FakeEditor()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def openai_settings():
    settings = reset_to_defaults()
    set_active_provider(settings, Provider.OPENAI)
    update_active_config(settings, api_key="sk-test")
    return settings


@pytest.fixture
def make_transport():
    """Factory: make_transport(status=200, body={...}) -> RecordingTransport."""
    return RecordingTransport


@pytest.fixture
def make_modal():
    return ScriptedModal


@pytest.fixture
def storage() -> MemoryStorage:
    return MemoryStorage()
