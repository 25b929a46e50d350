"""Fixtures for contract tests — one parameterized fixture per hook interface.

Each fixture yields a fresh implementation instance. Today there's only the
stub ("stub" param). When the team adds a real implementation (e.g.,
Postgres, Redis), they add a second param value and an elif branch.

TEAM: To test your implementation against the contracts:
    1. Add your param string (e.g., "postgres") to the params list.
    2. Add an elif branch that yields your implementation instance.
    3. Run: python -m pytest mana/tests/contracts/ -v
    All tests should pass. If any fail, your implementation doesn't satisfy
    the contract — read the failing test's docstring for what's expected.

Uses @pytest_asyncio.fixture (not @pytest.fixture) for async fixture support
in strict mode.
"""

from datetime import datetime, timezone

import pytest_asyncio

from mana.hooks.state_store import InMemoryStateStore
from mana.schemas import CharacterState


# ---------------------------------------------------------------------------
# Interface fixtures (parameterized for future implementations)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture(params=["stub"])
async def state_store(request):
    """Yields a StateStore implementation.

    TEAM: Add your store here:
        @pytest_asyncio.fixture(params=["stub", "postgres"])
        async def state_store(request):
            if request.param == "stub":
                yield InMemoryStateStore()
            elif request.param == "postgres":
                store = YourPostgresStateStore(test_dsn)
                yield store
                await store.cleanup()  # if needed
    """
    if request.param == "stub":
        yield InMemoryStateStore()


# ---------------------------------------------------------------------------
# Helper fixtures (shared test data)
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def sample_state():
    """A CharacterState with non-default values for data integrity assertions."""
    return CharacterState(
        name="Mana",
        level=3,
        experience=245,
        understanding={"algebra": 72, "geometry": 15, "functions": 40, "probability": 88},
        mood="excited",
        total_problems=31,
    )


@pytest_asyncio.fixture
async def base_time():
    """A fixed timestamp that message tests offset from."""
    return datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)
