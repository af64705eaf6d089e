"""
Aura companion: a rule-based emotional-support chat engine.

    from aura_companion import CompanionSession
    from aura_companion.conversation_database import (
        InMemoryConversationDatabase, InMemoryMessageDatabase, InMemoryReactionDatabase,
    )

    session = CompanionSession(
        InMemoryConversationDatabase(), InMemoryMessageDatabase(), InMemoryReactionDatabase()
    )
    reply = await session.submit_user_message("I'm so anxious about tomorrow")

Replies are picked from a fixed lexicon by keyword matching; crisis language
always yields the crisis-resources reply. This is not a clinical tool.
"""

from aura_companion.agents import AgentAnswer, CompanionAgent, QueryWithContext
from aura_companion.classifier import Classification, classify, detect_crisis, detect_theme
from aura_companion.config import CompanionSettings, get_settings
from aura_companion.errors import CompanionError, NoActiveUserError, SessionBusyError, StoreError, ValidationError
from aura_companion.feed import FeedPost, FeedSession
from aura_companion.identity import IdentityProvider, StaticIdentityProvider, UserProfile
from aura_companion.lexicon import DEFAULT_LEXICON, Lexicon, Theme, load_lexicon
from aura_companion.reactions import ReactionLedger
from aura_companion.scheduling import TaskScheduler
from aura_companion.session import CompanionSession, SessionState

__all__ = [
    "DEFAULT_LEXICON",
    "AgentAnswer",
    "Classification",
    "CompanionAgent",
    "CompanionError",
    "CompanionSession",
    "CompanionSettings",
    "FeedPost",
    "FeedSession",
    "IdentityProvider",
    "Lexicon",
    "NoActiveUserError",
    "QueryWithContext",
    "ReactionLedger",
    "SessionBusyError",
    "SessionState",
    "StaticIdentityProvider",
    "StoreError",
    "TaskScheduler",
    "Theme",
    "UserProfile",
    "ValidationError",
    "classify",
    "detect_crisis",
    "detect_theme",
    "get_settings",
    "load_lexicon",
]
