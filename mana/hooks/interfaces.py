"""Hook interfaces — abstract base classes for swappable infrastructure.

StateStore is the contract between the tutor logic and persistence. It has
an in-memory stub (hooks/state_store.py) that lets the backend run
end-to-end without a database, and a production implementation that the
team wires in when ready.

Leaf module: imports only from abc, datetime (stdlib) and mana.schemas.

TEAM: To implement a real store, subclass StateStore and implement every
abstract method. Python will raise TypeError at instantiation if any
method is missing — you'll know immediately what's left to do.

Usage:
    from mana.hooks.interfaces import StateStore
"""

from abc import ABC, abstractmethod
from datetime import datetime

from mana.schemas import CharacterState, ConversationMessage


class StateStore(ABC):
    """Per-user character state and conversation history.

    Semantics are last-write-wins per user; callers never assume
    transactions across load/save. Users are identified by an opaque
    string ID.

    TEAM: Replace the stub (InMemoryStateStore) with your database.
    """

    @abstractmethod
    async def load(self, user_id: str) -> CharacterState:
        """Loads a user's character state.

        A user seen for the first time gets the default state (level 1,
        no experience, zero understanding, curious), which is stored.

        Args:
            user_id: The opaque user identifier.

        Returns:
            The stored CharacterState.
        """
        ...

    @abstractmethod
    async def save(self, user_id: str, state: CharacterState) -> None:
        """Stores a user's character state, replacing any previous one."""
        ...

    @abstractmethod
    async def append_message(self, user_id: str, message: ConversationMessage) -> None:
        """Appends one message to the user's conversation history."""
        ...

    @abstractmethod
    async def load_recent_messages(self, user_id: str, n: int) -> list[ConversationMessage]:
        """Returns the user's last n messages, oldest first.

        Args:
            user_id: The opaque user identifier.
            n: Maximum number of messages. n <= 0 returns an empty list.

        Returns:
            Up to n messages in chronological order; empty for unknown users.
        """
        ...

    @abstractmethod
    async def count_messages_since(self, user_id: str, since: datetime) -> int:
        """Counts the user's messages with a timestamp at or after since.

        Used as the activity measure for learning velocity.
        """
        ...

    @abstractmethod
    async def delete_user(self, user_id: str) -> bool:
        """Deletes a user's state and history.

        Returns:
            True if anything was deleted, False if the user was unknown.
        """
        ...
