"""Shared test fixtures for the Mana test suite.

Factory-pattern fixtures that return callables accepting **overrides.

Fixtures:
    mock_provider: Factory for MockProvider instances
    make_state: Factory for CharacterState instances
    make_message: Factory for ConversationMessage instances
    make_metrics: Factory for LearningMetrics instances
    make_service: Factory for TutorService instances (seeded, optional AI)
    store: Fresh InMemoryStateStore
    api_client: httpx.AsyncClient for the app, with the two fixtures above injected
"""

import random

import httpx
import pytest
from httpx import ASGITransport

from mana.ai.context import ContextManager
from mana.ai.gateway import AIGateway
from mana.ai.prompts import PromptLoader
from mana.ai.providers.mock import MockProvider
from mana.config import PROJECT_ROOT
from mana.hooks.state_store import InMemoryStateStore
from mana.models import ModelConfig
from mana.schemas import CharacterState, ConversationMessage, LearningMetrics
from mana.tutor.composer import ResponseComposer
from mana.tutor.service import TutorService

PROMPTS_DIR = PROJECT_ROOT / "prompts"
TEST_MODEL = ModelConfig(provider="gemini", model_id="gemini-test-model")


# ---------------------------------------------------------------------------
# MockProvider factory
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_provider():
    """Returns a factory function for creating MockProvider instances."""

    def _make(**kwargs) -> MockProvider:
        return MockProvider(**kwargs)

    return _make


# ---------------------------------------------------------------------------
# Domain model factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_state():
    """Returns a factory for CharacterState. Defaults to a fresh character."""

    def _make(**overrides) -> CharacterState:
        return CharacterState(**overrides)

    return _make


@pytest.fixture
def make_message():
    """Returns a factory for ConversationMessage (default: assistant turn)."""

    def _make(content: str = "2x + 3 = 7 はどう解くの？", **overrides) -> ConversationMessage:
        defaults = {"role": "assistant", "content": content}
        defaults.update(overrides)
        return ConversationMessage(**defaults)

    return _make


@pytest.fixture
def make_metrics():
    """Returns a factory for LearningMetrics from per-topic proficiency."""

    def _make(
        algebra: int = 50,
        geometry: int = 50,
        functions: int = 50,
        probability: int = 50,
        **overrides,
    ) -> LearningMetrics:
        data = {
            "topic_proficiency": {
                "algebra": algebra,
                "geometry": geometry,
                "functions": functions,
                "probability": probability,
            },
        }
        data.update(overrides)
        return LearningMetrics(**data)

    return _make


# ---------------------------------------------------------------------------
# Service factory
# ---------------------------------------------------------------------------


@pytest.fixture
def make_service():
    """Returns a factory for TutorService.

    Pass provider=MockProvider(...) to enable the AI path; the real prompt
    files under prompts/ are used. Template choices are seeded.
    """

    def _make(
        provider: MockProvider | None = None,
        language: str = "ja",
        timeout: float = 1.0,
        seed: int = 7,
    ) -> TutorService:
        composer = ResponseComposer(language=language, rng=random.Random(seed))
        if provider is None:
            return TutorService(composer)
        gateway = AIGateway(provider, TEST_MODEL, timeout=timeout)
        context = ContextManager(
            PromptLoader(PROMPTS_DIR), provider="gemini", language=language
        )
        return TutorService(composer, gateway, context)

    return _make


@pytest.fixture
def store() -> InMemoryStateStore:
    return InMemoryStateStore()


# ---------------------------------------------------------------------------
# API client with injected fakes
# ---------------------------------------------------------------------------


@pytest.fixture
def api_client(make_service, store):
    """Async client for the app with a seeded rule-only service and a fresh store.

    Overrides get_tutor_service / get_state_store for the duration of the
    test. Use as ``async with api_client:``; request the ``store`` fixture
    alongside it to inspect what the routes persisted.
    """
    from mana.api.deps import get_state_store, get_tutor_service
    from mana.main import app

    service = make_service()
    app.dependency_overrides[get_tutor_service] = lambda: service
    app.dependency_overrides[get_state_store] = lambda: store

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    client = httpx.AsyncClient(transport=transport, base_url="http://test")
    yield client
    app.dependency_overrides.clear()
