"""In-memory state store — development stub for StateStore.

Python dict-backed storage for character state and conversation history.
Everything is lost on restart; good enough for local development and tests.

TEAM: Replace this with your real store (PostgreSQL, etc.). Subclass
StateStore from mana.hooks.interfaces and implement all abstract methods.

Usage:
    from mana.hooks.state_store import InMemoryStateStore

    store = InMemoryStateStore()
    state = await store.load("user-1")  # default state on first use
    await store.save("user-1", new_state)
"""

from datetime import datetime

from mana.hooks.interfaces import StateStore
from mana.schemas import CharacterState, ConversationMessage


class InMemoryStateStore(StateStore):
    """STUB — dict-backed per-user state, loses data on restart.

    Args:
        max_messages: History entries kept per user; older ones are dropped.
    """

    def __init__(self, max_messages: int = 500) -> None:
        self._states: dict[str, CharacterState] = {}
        self._messages: dict[str, list[ConversationMessage]] = {}
        self._max_messages = max_messages

    async def load(self, user_id: str) -> CharacterState:
        state = self._states.get(user_id)
        if state is None:
            state = CharacterState()
            self._states[user_id] = state
        return state

    async def save(self, user_id: str, state: CharacterState) -> None:
        self._states[user_id] = state

    async def append_message(self, user_id: str, message: ConversationMessage) -> None:
        history = self._messages.setdefault(user_id, [])
        history.append(message)
        if len(history) > self._max_messages:
            del history[: len(history) - self._max_messages]

    async def load_recent_messages(self, user_id: str, n: int) -> list[ConversationMessage]:
        if n <= 0:
            return []
        return list(self._messages.get(user_id, [])[-n:])

    async def count_messages_since(self, user_id: str, since: datetime) -> int:
        return sum(
            1 for message in self._messages.get(user_id, [])
            if message.timestamp >= since
        )

    async def delete_user(self, user_id: str) -> bool:
        had_state = self._states.pop(user_id, None) is not None
        had_messages = self._messages.pop(user_id, None) is not None
        return had_state or had_messages
