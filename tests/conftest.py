"""Pytest configuration and shared fixtures."""
import os
from collections.abc import Callable

import httpx
import pytest

from foodfinder.chat import ChatSession, ConnectivityMonitor, ConsentGate
from foodfinder.recommend import (
    FetchResult,
    GeminiRecommendationClient,
    Recommendation,
    RecommendationClient,
)
from foodfinder.settings.in_memory import InMemorySettingsStore


class FakeRecommendationClient(RecommendationClient):
    """Records prompts and returns a preset outcome."""

    def __init__(self, outcome: FetchResult | None = None):
        self.outcome = outcome or Recommendation(text="## Pasta Primavera\nA light dish.")
        self.prompts: list[str] = []
        self.closed = False

    @property
    def model(self) -> str:
        return "fake-model"

    async def fetch(self, prompt: str) -> FetchResult:
        self.prompts.append(prompt)
        return self.outcome

    async def close(self) -> None:
        self.closed = True


@pytest.fixture(scope="session")
def api_keys():
    """Return API keys from environment."""
    return {
        "gemini": os.getenv("GEMINI_API_KEY"),
    }


@pytest.fixture
def settings_store():
    """Return an empty in-memory settings store."""
    return InMemorySettingsStore()


@pytest.fixture
def gate(settings_store):
    """Return a consent gate over the in-memory store."""
    return ConsentGate(settings_store)


@pytest.fixture
def fake_client():
    """Return a client that succeeds with a short recommendation."""
    return FakeRecommendationClient()


@pytest.fixture
def monitor():
    """Return a connectivity monitor in the unknown state."""
    return ConnectivityMonitor()


@pytest.fixture
def make_session(fake_client, monitor) -> Callable[..., ChatSession]:
    """Factory for chat sessions with consent already given unless asked otherwise."""

    def _make(
        client: RecommendationClient | None = None,
        acknowledged: bool = True,
        **kwargs,
    ) -> ChatSession:
        store = InMemorySettingsStore(
            {"has_acknowledged_internet_use": True} if acknowledged else None
        )
        return ChatSession(
            client=client or fake_client,
            gate=ConsentGate(store),
            monitor=kwargs.pop("monitor", monitor),
            **kwargs,
        )

    return _make


@pytest.fixture
def mock_gemini():
    """Factory for a Gemini client whose HTTP traffic is served by a handler.

    Captured requests are appended to the returned list.
    """
    def _make(handler: Callable[[httpx.Request], httpx.Response], **kwargs):
        requests: list[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return handler(request)

        client = GeminiRecommendationClient(
            api_key="test-key",
            transport=httpx.MockTransport(_record),
            **kwargs,
        )
        return client, requests

    return _make

