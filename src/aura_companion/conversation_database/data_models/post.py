"""
Feed post and comment data models and storage interfaces.

'hearts' and 'comments' are denormalized counters stored on the post and
written with plain last-write-wins updates; there is no transaction tying a
comment insert to the counter update that follows it.

Concrete implementations: 'InMemoryPostDatabase', 'InMemoryCommentDatabase'.
"""

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, Field


class Post(BaseModel):
    """A feed entry sharing how someone feels."""

    id: str
    content: str
    emotions: list[str] = Field(default_factory=list)
    hearts: int = 0
    comments: int = 0
    user_name: str
    user_email: str = ""
    create_timestamp: int
    update_timestamp: int


class Comment(BaseModel):
    """A reply under a feed post."""

    id: str
    post_id: str
    content: str
    user_name: str
    user_email: str = ""
    create_timestamp: int
    update_timestamp: int


class PostDatabase(ABC):
    """Abstract repository for 'Post' records."""

    @abstractmethod
    async def create_post(self, post: Post) -> Post:
        pass

    @abstractmethod
    async def get_posts(self) -> list[Post]:
        """All posts, newest first."""
        pass

    @abstractmethod
    async def get_post_by_id(self, post_id: str) -> Post:
        pass

    @abstractmethod
    async def update_post(self, post_id: str, patch: dict[str, Any]) -> Post:
        pass


class CommentDatabase(ABC):
    """Abstract repository for 'Comment' records."""

    @abstractmethod
    async def create_comment(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def get_comments_by_post_id(self, post_id: str) -> list[Comment]:
        pass

    @abstractmethod
    async def get_comments_by_post_ids(self, post_ids: list[str]) -> list[Comment]:
        pass
