"""
Conversation data model and storage interface.

A conversation is one companion chat thread, identified to the client by an
opaque 'session_id'. Conversations are never deleted: starting a new chat
supersedes the current one, and the old thread stays queryable.

Concrete implementation: 'InMemoryConversationDatabase'.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class Conversation(BaseModel):
    """A single companion chat thread."""

    id: str
    session_id: str
    create_timestamp: int
    update_timestamp: int


class ConversationDatabase(ABC):
    """Abstract repository for 'Conversation' records."""

    @abstractmethod
    async def create_conversation(self, conversation: Conversation) -> Conversation:
        pass

    @abstractmethod
    async def get_conversation_by_id(self, conversation_id: str) -> Conversation:
        """Raise 'StoreError' if no conversation has this id."""
        pass

    @abstractmethod
    async def get_conversations(self) -> list[Conversation]:
        """All conversations, most recently updated first."""
        pass

    @abstractmethod
    async def update_conversation(self, conversation: Conversation) -> Conversation:
        pass
