"""
Message data model and storage interface.

Messages belong to exactly one conversation and are written once. Replay order
is 'create_timestamp' ascending; records sharing a timestamp keep the order in
which they were stored. 'is_user' separates the user's turns from the
companion's, and 'message_type' tells the client how to present a companion
message (plain reply, safety warning, or resource card).

Concrete implementation: 'InMemoryMessageDatabase'.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel, Field

from aura_companion.conversation_database.data_models.reaction import Reaction, ReactionType


class MessageType(StrEnum):
    NORMAL = "normal"
    WARNING = "warning"
    RESOURCE = "resource"


class Message(BaseModel):
    """A single message within a conversation."""

    id: str
    conversation_id: str
    content: str
    is_user: bool
    message_type: MessageType = MessageType.NORMAL
    create_timestamp: int


class ClientMessage(Message):
    """
    A message as held by a client session, with its reactions attached.

    Reactions are stored in their own table; sessions fetch them in one batch
    per page of messages and keep them here so toggles can update local state.
    """

    reactions: list[Reaction] = Field(default_factory=list)

    @classmethod
    def from_message(cls, message: Message, reactions: list[Reaction] | None = None) -> "ClientMessage":
        fields = {name: getattr(message, name) for name in Message.model_fields}
        return cls(**fields, reactions=reactions or [])

    def has_reaction(self, reaction_type: ReactionType) -> bool:
        return any(r.reaction_type == reaction_type for r in self.reactions)

    def reaction_count(self, reaction_type: ReactionType) -> int:
        return sum(1 for r in self.reactions if r.reaction_type == reaction_type)


class MessageDatabase(ABC):
    """Abstract repository for 'Message' records."""

    @abstractmethod
    async def create_message(self, message: Message) -> Message:
        pass

    @abstractmethod
    async def get_messages_by_conversation_id(self, conversation_id: str) -> list[Message]:
        """Messages of one conversation in replay order."""
        pass

    @abstractmethod
    async def get_message_by_id(self, message_id: str) -> Message:
        pass
