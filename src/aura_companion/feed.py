"""
Feed session: hearts and comments on shared posts.

'FeedSession' is the feed view's stateful handle. Post hearts use the same
apply, confirm or revert policy as message reactions: the local counter and
'has_hearted' flag change first, the new count is written to the store, and a
failed write puts both back.

'hearts' is stored on the post; 'has_hearted' exists only in this session and
is reset to False by every 'fetch_posts', so after a restart the user can
heart a post again even though the stored count already includes their
earlier heart.
"""

from collections import defaultdict
from collections.abc import Awaitable
from typing import TypeVar

from loguru import logger
from pydantic import Field

from aura_companion.config import CompanionSettings, get_settings
from aura_companion.conversation_database.data_models.post import Comment, CommentDatabase, Post, PostDatabase
from aura_companion.errors import StoreError, ValidationError
from aura_companion.identity import IdentityProvider, StaticIdentityProvider
from aura_companion.utils.database import generate_uid, with_store_timeout
from aura_companion.utils.locks import KeyedLock
from aura_companion.utils.time import get_current_timestamp

T = TypeVar("T")


class FeedPost(Post):
    """A post as held by the feed view."""

    has_hearted: bool = False
    comments_data: list[Comment] = Field(default_factory=list)

    @classmethod
    def from_post(cls, post: Post, comments: list[Comment] | None = None) -> "FeedPost":
        fields = {name: getattr(post, name) for name in Post.model_fields}
        return cls(**fields, comments_data=comments or [])


class FeedSession:
    def __init__(
        self,
        post_db: PostDatabase,
        comment_db: CommentDatabase,
        identity: IdentityProvider | None = None,
        settings: CompanionSettings | None = None,
    ) -> None:
        self.post_db = post_db
        self.comment_db = comment_db
        self.identity = identity or StaticIdentityProvider()
        self.settings = settings or get_settings()

        self.posts: list[FeedPost] = []
        self.loading = False
        self.error: str | None = None

        self._heart_locks = KeyedLock()

    async def fetch_posts(self) -> list[FeedPost]:
        """Load all posts, newest first, with their comments fetched in one batch."""
        self.loading = True
        try:
            posts = await self._store(self.post_db.get_posts(), "load posts")
            comments: list[Comment] = []
            if posts:
                try:
                    comments = await self._store(
                        self.comment_db.get_comments_by_post_ids([p.id for p in posts]), "load comments"
                    )
                except StoreError:
                    logger.warning("Showing posts without comments")
        finally:
            self.loading = False

        by_post: defaultdict[str, list[Comment]] = defaultdict(list)
        for comment in comments:
            by_post[comment.post_id].append(comment)
        self.posts = [FeedPost.from_post(p, by_post[p.id]) for p in posts]
        return self.posts

    async def toggle_heart(self, post_id: str) -> FeedPost | None:
        """Heart or un-heart a post. Store failures revert the post and are recorded on 'error'."""
        post = self._find(post_id)
        if post is None:
            return None

        async with self._heart_locks.hold(post_id):
            previous_hearted, previous_hearts = post.has_hearted, post.hearts
            post.has_hearted = not previous_hearted
            post.hearts = previous_hearts + 1 if post.has_hearted else max(previous_hearts - 1, 0)

            try:
                updated = await self._store(self.post_db.update_post(post_id, {"hearts": post.hearts}), "update hearts")
            except StoreError:
                post.has_hearted, post.hearts = previous_hearted, previous_hearts
                return None

            post.hearts = updated.hearts
            return post

    async def add_comment(self, post_id: str, content: str) -> Comment:
        """Add a comment as the current user, then bump the post's comment counter.

        The comment insert and the counter update are separate writes; if the
        second fails the comment exists but the counter lags behind.
        """
        user = self.identity.require_user("comment on a post")
        text = content.strip()
        if not text:
            raise ValidationError("Comment cannot be empty")
        if len(text) > self.settings.max_message_length:
            raise ValidationError(f"Comment is longer than {self.settings.max_message_length} characters")
        post = self._find(post_id)
        if post is None:
            raise ValidationError(f"Post {post_id} is not in the feed")

        timestamp = get_current_timestamp()
        comment = await self._store(
            self.comment_db.create_comment(
                Comment(
                    id=generate_uid(),
                    post_id=post_id,
                    content=text,
                    user_name=user.first_name,
                    user_email=user.email,
                    create_timestamp=timestamp,
                    update_timestamp=timestamp,
                )
            ),
            "save a comment",
        )
        updated = await self._store(
            self.post_db.update_post(post_id, {"comments": post.comments + 1}), "update the comment count"
        )

        post.comments = updated.comments
        post.comments_data.append(comment)
        return comment

    async def load_comments_for_post(self, post_id: str) -> list[Comment]:
        comments = await self._store(self.comment_db.get_comments_by_post_id(post_id), "load comments")
        post = self._find(post_id)
        if post is not None:
            post.comments_data = comments
        return comments

    def _find(self, post_id: str) -> FeedPost | None:
        return next((p for p in self.posts if p.id == post_id), None)

    async def _store(self, awaitable: Awaitable[T], action: str) -> T:
        try:
            return await with_store_timeout(awaitable, self.settings.store_timeout, action)
        except StoreError as exc:
            self.error = exc.message
            logger.warning(f"Failed to {action}: {exc.message}")
            raise
