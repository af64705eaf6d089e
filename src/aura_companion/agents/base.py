"""
Agent abstractions.

An 'Agent' turns one user message into one companion reply. The query carries
the text plus the little personalization context an agent may use (the user's
display name); the answer carries the reply text, the message type the client
should render it as, and the classification that led to it.
"""

from abc import ABC, abstractmethod

from pydantic import BaseModel

from aura_companion.conversation_database.data_models.message import MessageType
from aura_companion.lexicon import Theme


class QueryWithContext(BaseModel):
    query: str
    display_name: str | None = None


class AgentAnswer(BaseModel):
    content: str
    message_type: MessageType = MessageType.NORMAL
    theme: Theme = Theme.GENERAL
    is_crisis: bool = False


class Agent(ABC):
    """
    Abstract base class for reply generators.

    'answer' must be total: it returns a reply for any query, including the
    empty string, and never raises.
    """

    def __init__(self, description: str = "") -> None:
        self.description = description

    @abstractmethod
    def answer(self, query_with_context: QueryWithContext) -> AgentAnswer:
        pass
