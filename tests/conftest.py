"""
Shared pytest fixtures for the companion tests.
"""

import asyncio
from collections.abc import AsyncIterator, Callable, Sequence
from typing import Any, TypeVar

import pytest

from aura_companion.config import CompanionSettings
from aura_companion.conversation_database import (
    InMemoryCommentDatabase,
    InMemoryConversationDatabase,
    InMemoryMessageDatabase,
    InMemoryPostDatabase,
    InMemoryReactionDatabase,
    Message,
    Post,
    Reaction,
)
from aura_companion.errors import StoreError
from aura_companion.identity import StaticIdentityProvider, UserProfile
from aura_companion.scheduling import TaskScheduler
from aura_companion.session import CompanionSession
from aura_companion.utils.random_source import RandomSource

T = TypeVar("T")

SAM = UserProfile(id="user-1", first_name="Sam", email="sam@example.com")


# --- Random and time doubles ---


class ScriptedRandom(RandomSource):
    """Returns queued values from 'random()'; 0.99 once the queue is empty, so optional branches stay off."""

    def __init__(self, randoms: Sequence[float] = (), choice_index: int = 0) -> None:
        self.randoms = list(randoms)
        self.choice_index = choice_index
        self.uniform_calls: list[tuple[float, float]] = []

    def random(self) -> float:
        return self.randoms.pop(0) if self.randoms else 0.99

    def uniform(self, low: float, high: float) -> float:
        self.uniform_calls.append((low, high))
        return low

    def choice(self, items: Sequence[T]) -> T:
        return items[min(self.choice_index, len(items) - 1)]


class RecordingSleep:
    """Sleep replacement that records delays and only blocks on the ones listed in 'blocked'."""

    def __init__(self) -> None:
        self.delays: list[float] = []
        self.blocked: set[float] = set()
        self.release = asyncio.Event()

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if delay in self.blocked:
            await self.release.wait()
        await asyncio.sleep(0)


# --- Failing stores ---


class FailingMessageDatabase(InMemoryMessageDatabase):
    def __init__(self) -> None:
        super().__init__()
        self.fail_on_write = False

    async def create_message(self, message: Message) -> Message:
        if self.fail_on_write:
            raise StoreError("message backend unavailable")
        return await super().create_message(message)


class HangingMessageDatabase(InMemoryMessageDatabase):
    """Never completes a write for user messages."""

    async def create_message(self, message: Message) -> Message:
        if message.is_user:
            await asyncio.Event().wait()
        return await super().create_message(message)


class FailingReactionDatabase(InMemoryReactionDatabase):
    def __init__(self) -> None:
        super().__init__()
        self.fail_on_toggle = False

    async def toggle_reaction(self, reaction: Reaction) -> Reaction | None:
        if self.fail_on_toggle:
            raise StoreError("reaction backend unavailable")
        return await super().toggle_reaction(reaction)


class FailingPostDatabase(InMemoryPostDatabase):
    def __init__(self) -> None:
        super().__init__()
        self.fail_on_update = False

    async def update_post(self, post_id: str, patch: dict[str, Any]) -> Post:
        if self.fail_on_update:
            raise StoreError("post backend unavailable")
        return await super().update_post(post_id, patch)


# --- Fixtures ---


@pytest.fixture
def settings() -> CompanionSettings:
    return CompanionSettings(_env_file=None)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def conversation_db() -> InMemoryConversationDatabase:
    return InMemoryConversationDatabase()


@pytest.fixture
def message_db() -> FailingMessageDatabase:
    return FailingMessageDatabase()


@pytest.fixture
def reaction_db() -> FailingReactionDatabase:
    return FailingReactionDatabase()


@pytest.fixture
def post_db() -> FailingPostDatabase:
    return FailingPostDatabase()


@pytest.fixture
def comment_db() -> InMemoryCommentDatabase:
    return InMemoryCommentDatabase()


@pytest.fixture
async def make_session(
    conversation_db: InMemoryConversationDatabase,
    message_db: FailingMessageDatabase,
    reaction_db: FailingReactionDatabase,
    sleep: RecordingSleep,
) -> AsyncIterator[Callable[..., CompanionSession]]:
    """Build a session over the shared stores; keyword overrides go to 'CompanionSettings'."""
    sessions: list[CompanionSession] = []

    def _make(
        random_source: RandomSource | None = None,
        user: UserProfile | None = SAM,
        **overrides: Any,
    ) -> CompanionSession:
        session = CompanionSession(
            conversation_db=conversation_db,
            message_db=overrides.pop("message_db", message_db),
            reaction_db=reaction_db,
            identity=StaticIdentityProvider(user),
            settings=CompanionSettings(_env_file=None, **overrides),
            random_source=random_source or ScriptedRandom(),
            scheduler=TaskScheduler(sleep=sleep),
        )
        sessions.append(session)
        return session

    yield _make

    for session in sessions:
        session.close()
        await session.wait_for_pending()


async def wait_until(condition: Callable[[], bool], attempts: int = 100) -> None:
    """Yield to the event loop until 'condition()' holds."""
    for _ in range(attempts):
        if condition():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition was not met")
