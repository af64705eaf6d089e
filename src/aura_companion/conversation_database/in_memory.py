"""
In-memory repositories.

Process-local implementations of every repository ABC, used by the demo and
the test-suite and suitable for single-process deployments. Records are copied
on the way in and out, so callers can mutate what they get back without
touching stored state. Query results that are ordered by creation time rely on
Python's stable sort, which keeps insertion order for equal timestamps.
"""

import asyncio
from collections.abc import Iterable
from typing import Any

from aura_companion.conversation_database.data_models.conversation import Conversation, ConversationDatabase
from aura_companion.conversation_database.data_models.message import Message, MessageDatabase
from aura_companion.conversation_database.data_models.post import Comment, CommentDatabase, Post, PostDatabase
from aura_companion.conversation_database.data_models.reaction import Reaction, ReactionDatabase
from aura_companion.errors import StoreError
from aura_companion.utils.time import get_current_timestamp


def _insert(table: dict[str, Any], record: Any, kind: str) -> None:
    if record.id in table:
        raise StoreError(f"{kind} with id {record.id} already exists", context={"id": record.id})
    table[record.id] = record.model_copy(deep=True)


def _lookup(table: dict[str, Any], record_id: str, kind: str) -> Any:
    try:
        return table[record_id]
    except KeyError:
        raise StoreError(f"{kind} with id {record_id} not found", context={"id": record_id}) from None


def _copies(records: Iterable[Any]) -> list[Any]:
    return [record.model_copy(deep=True) for record in records]


class InMemoryConversationDatabase(ConversationDatabase):
    def __init__(self) -> None:
        self._conversations: dict[str, Conversation] = {}

    async def create_conversation(self, conversation: Conversation) -> Conversation:
        _insert(self._conversations, conversation, "Conversation")
        return conversation.model_copy(deep=True)

    async def get_conversation_by_id(self, conversation_id: str) -> Conversation:
        return _lookup(self._conversations, conversation_id, "Conversation").model_copy(deep=True)

    async def get_conversations(self) -> list[Conversation]:
        ordered = sorted(self._conversations.values(), key=lambda c: c.update_timestamp, reverse=True)
        return _copies(ordered)

    async def update_conversation(self, conversation: Conversation) -> Conversation:
        _lookup(self._conversations, conversation.id, "Conversation")
        self._conversations[conversation.id] = conversation.model_copy(deep=True)
        return conversation.model_copy(deep=True)


class InMemoryMessageDatabase(MessageDatabase):
    def __init__(self) -> None:
        self._messages: dict[str, Message] = {}

    async def create_message(self, message: Message) -> Message:
        _insert(self._messages, message, "Message")
        return message.model_copy(deep=True)

    async def get_messages_by_conversation_id(self, conversation_id: str) -> list[Message]:
        messages = [m for m in self._messages.values() if m.conversation_id == conversation_id]
        return _copies(sorted(messages, key=lambda m: m.create_timestamp))

    async def get_message_by_id(self, message_id: str) -> Message:
        return _lookup(self._messages, message_id, "Message").model_copy(deep=True)


class InMemoryReactionDatabase(ReactionDatabase):
    """
    Reaction store whose 'toggle_reaction' is serialized by a single lock.

    Plain 'create_reaction' does not enforce the one-record-per-pair rule, so
    callers that need toggle semantics must go through 'toggle_reaction'.
    """

    def __init__(self) -> None:
        self._reactions: dict[str, Reaction] = {}
        self._toggle_lock = asyncio.Lock()

    async def create_reaction(self, reaction: Reaction) -> Reaction:
        _insert(self._reactions, reaction, "Reaction")
        return reaction.model_copy(deep=True)

    async def get_reactions_by_message_id(self, message_id: str) -> list[Reaction]:
        return await self.get_reactions_by_message_ids([message_id])

    async def get_reactions_by_message_ids(self, message_ids: list[str]) -> list[Reaction]:
        wanted = set(message_ids)
        reactions = [r for r in self._reactions.values() if r.message_id in wanted]
        return _copies(sorted(reactions, key=lambda r: r.create_timestamp))

    async def delete_reactions(self, reaction_ids: list[str]) -> bool:
        removed = [self._reactions.pop(reaction_id, None) for reaction_id in reaction_ids]
        return all(r is not None for r in removed)

    async def toggle_reaction(self, reaction: Reaction) -> Reaction | None:
        async with self._toggle_lock:
            existing = [
                r.id
                for r in self._reactions.values()
                if r.message_id == reaction.message_id and r.reaction_type == reaction.reaction_type
            ]
            if existing:
                await self.delete_reactions(existing)
                return None
            return await self.create_reaction(reaction)


class InMemoryPostDatabase(PostDatabase):
    def __init__(self) -> None:
        self._posts: dict[str, Post] = {}

    async def create_post(self, post: Post) -> Post:
        _insert(self._posts, post, "Post")
        return post.model_copy(deep=True)

    async def get_posts(self) -> list[Post]:
        return _copies(sorted(self._posts.values(), key=lambda p: p.create_timestamp, reverse=True))

    async def get_post_by_id(self, post_id: str) -> Post:
        return _lookup(self._posts, post_id, "Post").model_copy(deep=True)

    async def update_post(self, post_id: str, patch: dict[str, Any]) -> Post:
        post = _lookup(self._posts, post_id, "Post")
        unknown = set(patch) - set(Post.model_fields)
        if unknown:
            raise StoreError(f"Unknown post fields: {sorted(unknown)}", context={"id": post_id})
        updated = post.model_copy(update={**patch, "update_timestamp": get_current_timestamp()}, deep=True)
        self._posts[post_id] = updated
        return updated.model_copy(deep=True)


class InMemoryCommentDatabase(CommentDatabase):
    def __init__(self) -> None:
        self._comments: dict[str, Comment] = {}

    async def create_comment(self, comment: Comment) -> Comment:
        _insert(self._comments, comment, "Comment")
        return comment.model_copy(deep=True)

    async def get_comments_by_post_id(self, post_id: str) -> list[Comment]:
        return await self.get_comments_by_post_ids([post_id])

    async def get_comments_by_post_ids(self, post_ids: list[str]) -> list[Comment]:
        wanted = set(post_ids)
        comments = [c for c in self._comments.values() if c.post_id in wanted]
        return _copies(sorted(comments, key=lambda c: c.create_timestamp))
