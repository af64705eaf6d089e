"""
Reaction data model and storage interface.

A reaction is a typed acknowledgment on a companion message. Reactions carry
no user identity: at most one record exists per '(message_id, reaction_type)'
pair and "toggling" means adding it when absent and removing it when present.

'toggle_reaction' performs that check-and-write as one conditional operation
at the storage boundary, so two concurrent toggles cannot produce a duplicate
record or a delete of nothing.

Concrete implementation: 'InMemoryReactionDatabase'.
"""

from abc import ABC, abstractmethod
from enum import StrEnum

from pydantic import BaseModel


class ReactionType(StrEnum):
    HELPFUL = "helpful"
    NOT_HELPFUL = "not_helpful"
    HEART = "heart"
    THUMBS_UP = "thumbs_up"
    THUMBS_DOWN = "thumbs_down"


class Reaction(BaseModel):
    """Feedback attached to a companion message."""

    id: str
    message_id: str
    reaction_type: ReactionType
    create_timestamp: int


class ReactionDatabase(ABC):
    """Abstract repository for 'Reaction' records."""

    @abstractmethod
    async def create_reaction(self, reaction: Reaction) -> Reaction:
        pass

    @abstractmethod
    async def get_reactions_by_message_id(self, message_id: str) -> list[Reaction]:
        pass

    @abstractmethod
    async def get_reactions_by_message_ids(self, message_ids: list[str]) -> list[Reaction]:
        """Batched fetch for a page of messages."""
        pass

    @abstractmethod
    async def delete_reactions(self, reaction_ids: list[str]) -> bool:
        pass

    @abstractmethod
    async def toggle_reaction(self, reaction: Reaction) -> Reaction | None:
        """Delete the stored reaction matching 'reaction's message and type, or insert 'reaction'.

        Returns the inserted record, or None when an existing one was removed.
        """
        pass
