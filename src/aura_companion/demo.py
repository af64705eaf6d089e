"""
Scripted companion walkthrough.

Runs one conversation against in-memory stores so the whole flow can be
watched in the log: welcome message, a themed exchange, a crisis exchange,
a reaction toggle, the resource listing, and a fresh conversation.

Steps at a glance:
    1  build_session()   - wire stores, identity and settings into a session
    2  chat()            - submit a message and print the reply
    3  react()           - toggle a heart on the latest companion reply
    4  run_demo()        - the full scripted run

Usage:
    python -m aura_companion.demo
    MESSAGE="I feel so alone lately" python -m aura_companion.demo

Settings come from AURA_* variables, e.g. AURA_LATENCY_MIN=0 AURA_LATENCY_MAX=0
to skip the simulated thinking time, or AURA_LOG_LEVEL=DEBUG to see
classification details.
"""

import asyncio
import os

from loguru import logger

from aura_companion.config import CompanionSettings, get_settings
from aura_companion.conversation_database import (
    InMemoryConversationDatabase,
    InMemoryMessageDatabase,
    InMemoryReactionDatabase,
    MessageType,
    ReactionType,
)
from aura_companion.errors import ValidationError
from aura_companion.identity import StaticIdentityProvider, UserProfile
from aura_companion.session import CompanionSession
from aura_companion.utils.logging import configure_logging

DEMO_USER = UserProfile(id="demo-user", first_name="Alex", email="alex@example.com")
CRISIS_MESSAGE = "Some days I feel hopeless and want to end it all"


def build_session(settings: CompanionSettings | None = None) -> CompanionSession:
    settings = settings or get_settings()
    session = CompanionSession(
        conversation_db=InMemoryConversationDatabase(),
        message_db=InMemoryMessageDatabase(),
        reaction_db=InMemoryReactionDatabase(),
        identity=StaticIdentityProvider(DEMO_USER),
        settings=settings,
    )
    logger.info(
        f"Session ready (latency={settings.latency_min}-{settings.latency_max}s  "
        f"follow_up_probability={settings.follow_up_probability})"
    )
    return session


async def chat(session: CompanionSession, text: str) -> None:
    logger.info(f"User: {text!r}")
    try:
        reply = await session.submit_user_message(text)
    except ValidationError as exc:
        logger.warning(f"Message rejected: {exc.message}")
        return
    if reply is None:
        logger.info("No reply (conversation was superseded)")
        return
    print(f"[{reply.message_type}] {reply.content}\n")


async def react(session: CompanionSession) -> None:
    replies = [m for m in session.messages if not m.is_user]
    if not replies:
        return
    latest = replies[-1]
    await session.toggle_reaction(latest.id, ReactionType.HEART)
    logger.info(f"Hearts on latest reply: {latest.reaction_count(ReactionType.HEART)}")


async def run_demo(message: str = "I'm so anxious about tomorrow") -> CompanionSession:
    session = build_session()
    conversation = await session.ensure_conversation()
    logger.info(f"Conversation {conversation.session_id}")
    for welcome in session.messages:
        print(f"[{welcome.message_type}] {welcome.content}\n")

    await chat(session, message)
    await react(session)
    await chat(session, CRISIS_MESSAGE)

    resources = await session.share_resources()
    print(f"[{resources.message_type}] {resources.content}\n")

    await session.wait_for_pending()
    follow_ups = [m for m in session.messages if m.message_type == MessageType.RESOURCE and m.id != resources.id]
    for follow_up in follow_ups:
        print(f"[{follow_up.message_type}] {follow_up.content}\n")
    logger.info(f"Coping follow-ups received: {len(follow_ups)}")

    await session.start_new_conversation()
    logger.info(f"Started over with {session.current_conversation.session_id}")  # type: ignore[union-attr]
    logger.info("Demo done")
    return session


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    asyncio.run(run_demo(os.getenv("MESSAGE", "I'm so anxious about tomorrow")))
