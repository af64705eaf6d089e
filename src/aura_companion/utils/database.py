"""Identifier and persistence-call helpers for stored records."""

import asyncio
import secrets
import string
import uuid
from collections.abc import Awaitable
from typing import TypeVar

from aura_companion.errors import StoreError
from aura_companion.utils.time import get_current_timestamp

T = TypeVar("T")

_SESSION_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits
SESSION_SUFFIX_LENGTH = 9


def generate_uid() -> str:
    return uuid.uuid4().hex


def generate_session_id() -> str:
    """Opaque client token 'session_<ms timestamp>_<9 lowercase alphanumerics>'."""
    suffix = "".join(secrets.choice(_SESSION_SUFFIX_ALPHABET) for _ in range(SESSION_SUFFIX_LENGTH))
    return f"session_{get_current_timestamp()}_{suffix}"


async def with_store_timeout(awaitable: Awaitable[T], timeout: float, action: str) -> T:
    """Await a repository call, turning a timeout into 'StoreError' so callers never hang."""
    try:
        return await asyncio.wait_for(awaitable, timeout)
    except TimeoutError as exc:
        raise StoreError(f"Timed out after {timeout}s trying to {action}", context={"action": action}) from exc
