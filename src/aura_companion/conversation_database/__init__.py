"""
Conversation store: record models, repository interfaces and in-memory backends.

    from aura_companion.conversation_database import (
        InMemoryConversationDatabase, InMemoryMessageDatabase, InMemoryReactionDatabase,
    )
"""

from aura_companion.conversation_database.data_models.conversation import Conversation, ConversationDatabase
from aura_companion.conversation_database.data_models.message import (
    ClientMessage,
    Message,
    MessageDatabase,
    MessageType,
)
from aura_companion.conversation_database.data_models.post import Comment, CommentDatabase, Post, PostDatabase
from aura_companion.conversation_database.data_models.reaction import Reaction, ReactionDatabase, ReactionType
from aura_companion.conversation_database.in_memory import (
    InMemoryCommentDatabase,
    InMemoryConversationDatabase,
    InMemoryMessageDatabase,
    InMemoryPostDatabase,
    InMemoryReactionDatabase,
)

__all__ = [
    "ClientMessage",
    "Comment",
    "CommentDatabase",
    "Conversation",
    "ConversationDatabase",
    "InMemoryCommentDatabase",
    "InMemoryConversationDatabase",
    "InMemoryMessageDatabase",
    "InMemoryPostDatabase",
    "InMemoryReactionDatabase",
    "Message",
    "MessageDatabase",
    "MessageType",
    "Post",
    "PostDatabase",
    "Reaction",
    "ReactionDatabase",
    "ReactionType",
]
