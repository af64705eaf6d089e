"""
Companion session (stateful handle).

'CompanionSession' is the single entry point a chat view talks to. It owns the
active conversation and its in-memory message list, and coordinates the
conversation, message and reaction repositories with the 'CompanionAgent':

    'submit_user_message'    - persist the user's text, wait a simulated
                               "thinking" delay, persist the companion's reply
                               and possibly schedule a coping-strategy follow-up.
    'toggle_reaction'        - flip a reaction on a message via 'ReactionLedger'.
    'start_new_conversation' - supersede the active conversation.
    'resume_conversation'    - reopen a stored conversation.

State moves IDLE -> AWAITING_CONVERSATION -> READY -> RESPONDING -> READY.
Only one reply is in flight at a time; a message submitted meanwhile is
rejected with 'SessionBusyError'. The reply and the follow-up run as
scheduler tasks filed under the conversation id, so superseding a conversation
cancels whatever was still pending for it. The follow-up is not tied to the
RESPONDING state: a later exchange may be answered before it arrives.

The public attributes 'messages', 'current_conversation', 'loading', 'error'
and 'responding' are the view's read model.
"""

import asyncio
from collections import defaultdict
from collections.abc import Awaitable
from enum import StrEnum
from typing import TypeVar

from loguru import logger

from aura_companion.agents.base import AgentAnswer, QueryWithContext
from aura_companion.agents.companion import CompanionAgent
from aura_companion.config import CompanionSettings, get_settings
from aura_companion.conversation_database.data_models.conversation import Conversation, ConversationDatabase
from aura_companion.conversation_database.data_models.message import (
    ClientMessage,
    Message,
    MessageDatabase,
    MessageType,
)
from aura_companion.conversation_database.data_models.reaction import Reaction, ReactionDatabase, ReactionType
from aura_companion.errors import SessionBusyError, StoreError, ValidationError
from aura_companion.identity import IdentityProvider, StaticIdentityProvider
from aura_companion.lexicon import load_lexicon
from aura_companion.reactions import ReactionLedger
from aura_companion.scheduling import TaskScheduler
from aura_companion.utils.database import generate_session_id, generate_uid, with_store_timeout
from aura_companion.utils.random_source import RandomSource, SeededRandomSource
from aura_companion.utils.time import get_current_timestamp

T = TypeVar("T")


class SessionState(StrEnum):
    IDLE = "idle"
    AWAITING_CONVERSATION = "awaiting_conversation"
    READY = "ready"
    RESPONDING = "responding"


class CompanionSession:
    def __init__(
        self,
        conversation_db: ConversationDatabase,
        message_db: MessageDatabase,
        reaction_db: ReactionDatabase,
        agent: CompanionAgent | None = None,
        identity: IdentityProvider | None = None,
        settings: CompanionSettings | None = None,
        random_source: RandomSource | None = None,
        scheduler: TaskScheduler | None = None,
    ) -> None:
        self.conversation_db = conversation_db
        self.message_db = message_db
        self.reaction_db = reaction_db
        self.settings = settings or get_settings()
        self.random_source = random_source or SeededRandomSource()
        self.agent = agent or CompanionAgent(
            lexicon=load_lexicon(self.settings.lexicon_path),
            random_source=self.random_source,
            personalization_probability=self.settings.personalization_probability,
            follow_up_probability=self.settings.follow_up_probability,
        )
        self.identity = identity or StaticIdentityProvider()
        self.scheduler = scheduler or TaskScheduler()
        self.reaction_ledger = ReactionLedger(reaction_db, store_timeout=self.settings.store_timeout)

        self.messages: list[ClientMessage] = []
        self.current_conversation: Conversation | None = None
        self.loading = False
        self.error: str | None = None
        self.responding = False

        self._state = SessionState.IDLE
        self._conversation_lock = asyncio.Lock()
        self._welcome_pending = False

    @property
    def state(self) -> SessionState:
        return SessionState.RESPONDING if self.responding else self._state

    # ------------------------------------------------------------------
    # Conversation lifecycle
    # ------------------------------------------------------------------

    async def ensure_conversation(self) -> Conversation:
        """Return the active conversation, creating one if there is none.

        A welcome message whose earlier write failed is retried here, as long
        as the conversation is still empty.
        """
        async with self._conversation_lock:
            if self.current_conversation is None:
                return await self._open_new_conversation()
            await self._inject_welcome(self.current_conversation)
            return self.current_conversation

    async def start_new_conversation(self) -> Conversation:
        """Supersede the active conversation with a fresh one.

        Pending reply and follow-up tasks of the superseded conversation are
        cancelled. The old conversation stays in the store.
        """
        async with self._conversation_lock:
            previous = self.current_conversation
            if previous is not None:
                self.scheduler.cancel(previous.id)
                logger.info(f"Conversation {previous.id} superseded")
            self.current_conversation = None
            self.messages = []
            return await self._open_new_conversation()

    async def resume_conversation(self, conversation_id: str) -> Conversation:
        """Make a stored conversation the active one and load its messages."""
        async with self._conversation_lock:
            self._state = SessionState.AWAITING_CONVERSATION
            try:
                conversation = await self._store(
                    self.conversation_db.get_conversation_by_id(conversation_id), "load a conversation"
                )
            except StoreError:
                self._state = SessionState.READY if self.current_conversation else SessionState.IDLE
                raise

            previous = self.current_conversation
            if previous is not None and previous.id != conversation.id:
                self.scheduler.cancel(previous.id)
            self.current_conversation = conversation
            self.messages = []
            self._welcome_pending = False
            self._state = SessionState.READY
            await self.load_messages()
            self._welcome_pending = not self.messages
            await self._inject_welcome(conversation)
            return conversation

    async def _open_new_conversation(self) -> Conversation:
        self._state = SessionState.AWAITING_CONVERSATION
        timestamp = get_current_timestamp()
        try:
            conversation = await self._store(
                self.conversation_db.create_conversation(
                    Conversation(
                        id=generate_uid(),
                        session_id=generate_session_id(),
                        create_timestamp=timestamp,
                        update_timestamp=timestamp,
                    )
                ),
                "create a conversation",
            )
        except StoreError:
            self._state = SessionState.IDLE
            raise

        self.current_conversation = conversation
        self.messages = []
        self._welcome_pending = True
        self._state = SessionState.READY
        logger.info(f"Conversation {conversation.id} started (session_id={conversation.session_id})")
        await self._inject_welcome(conversation)
        return conversation

    async def _inject_welcome(self, conversation: Conversation) -> None:
        # a failed write leaves the welcome pending; it is only ever written into an empty thread
        if not self._welcome_pending:
            return
        if self.messages:
            self._welcome_pending = False
            return
        user = self.identity.get_current_user()
        if user is None:
            return
        try:
            await self._persist_answer(conversation, self.agent.welcome_message(user.first_name))
        except StoreError:
            logger.warning(f"Welcome for conversation {conversation.id} not saved, retrying on next use")
            return
        self._welcome_pending = False

    async def load_messages(self) -> list[ClientMessage]:
        """Reload the active conversation's messages with their reactions, in replay order."""
        conversation = self.current_conversation
        if conversation is None:
            return []

        self.loading = True
        try:
            stored = await self._store(
                self.message_db.get_messages_by_conversation_id(conversation.id), "load messages"
            )
            reactions: list[Reaction] = []
            if stored:
                reactions = await self._store(
                    self.reaction_db.get_reactions_by_message_ids([m.id for m in stored]), "load reactions"
                )
        finally:
            self.loading = False

        by_message: defaultdict[str, list[Reaction]] = defaultdict(list)
        for reaction in reactions:
            by_message[reaction.message_id].append(reaction)
        self.messages = [ClientMessage.from_message(m, by_message[m.id]) for m in stored]
        return self.messages

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def submit_user_message(self, text: str) -> ClientMessage | None:
        """Persist the user's message and return the companion's persisted reply.

        Returns None when the conversation was superseded before the reply
        was written. Raises 'ValidationError' for empty or oversized input,
        'SessionBusyError' while a reply is in flight, and 'StoreError' when a
        write fails; in every case 'responding' is False again afterwards.
        """
        content = self._validate(text)
        if self.responding:
            raise SessionBusyError()

        self.responding = True
        self.error = None
        try:
            conversation = await self.ensure_conversation()
            await self._persist(conversation, content, is_user=True, message_type=MessageType.NORMAL)
            if self.current_conversation is None or self.current_conversation.id != conversation.id:
                logger.info(f"Conversation {conversation.id} superseded before a reply was scheduled")
                return None

            query = QueryWithContext(query=content, display_name=self._display_name())
            latency = self.random_source.uniform(self.settings.latency_min, self.settings.latency_max)
            reply_task = self.scheduler.schedule(
                conversation.id,
                latency,
                lambda: self._reply(conversation, query),
                name=f"reply:{conversation.id}",
            )
            try:
                return await reply_task
            except asyncio.CancelledError:
                current = asyncio.current_task()
                if reply_task.cancelled() and current is not None and not current.cancelling():
                    logger.info(f"Reply for conversation {conversation.id} cancelled")
                    return None
                raise
        finally:
            self.responding = False

    async def _reply(self, conversation: Conversation, query: QueryWithContext) -> ClientMessage:
        answer = self.agent.answer(query)
        reply = await self._persist_answer(conversation, answer)
        logger.info(f"Reply persisted (conversation={conversation.id}  type={answer.message_type}  theme={answer.theme})")

        follow_up = self.agent.plan_follow_up(query)
        if follow_up is not None:
            self.scheduler.schedule(
                conversation.id,
                self.settings.follow_up_delay,
                lambda: self._deliver_follow_up(conversation, follow_up),
                name=f"follow-up:{conversation.id}",
            )
        return reply

    async def _deliver_follow_up(self, conversation: Conversation, follow_up: AgentAnswer) -> ClientMessage | None:
        # nobody awaits this task, so a failed write is recorded on the session instead of raised
        try:
            return await self._persist_answer(conversation, follow_up)
        except StoreError as exc:
            logger.warning(f"Follow-up for conversation {conversation.id} not saved: {exc.message}")
            return None

    async def share_resources(self) -> ClientMessage:
        """Post the list of professional resources into the active conversation."""
        conversation = await self.ensure_conversation()
        return await self._persist_answer(conversation, self.agent.resources_message())

    # ------------------------------------------------------------------
    # Reactions
    # ------------------------------------------------------------------

    async def toggle_reaction(self, message_id: str, reaction_type: ReactionType) -> Reaction | None:
        """Toggle a reaction on a message of the active conversation.

        Store failures are recorded on 'error' and not raised; the local
        reaction state is reverted to what it was before the toggle.
        """
        message = next((m for m in self.messages if m.id == message_id), None)
        if message is None:
            raise ValidationError(f"Message {message_id} is not part of the active conversation")
        try:
            return await self.reaction_ledger.toggle(message, reaction_type)
        except StoreError as exc:
            self.error = exc.message
            return None

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    async def wait_for_pending(self) -> None:
        """Wait for every scheduled reply and follow-up to finish."""
        await self.scheduler.join()

    def close(self) -> None:
        self.scheduler.cancel_all()

    def _validate(self, text: str) -> str:
        content = text.strip()
        if not content:
            raise ValidationError("Message cannot be empty")
        limit = self.settings.max_message_length
        if len(content) > limit:
            raise ValidationError(
                f"Message is {len(content)} characters long; the limit is {limit}",
                context={"length": len(content), "limit": limit},
            )
        return content

    def _display_name(self) -> str | None:
        user = self.identity.get_current_user()
        return user.first_name if user else None

    async def _persist_answer(self, conversation: Conversation, answer: AgentAnswer) -> ClientMessage:
        return await self._persist(conversation, answer.content, is_user=False, message_type=answer.message_type)

    async def _persist(
        self, conversation: Conversation, content: str, is_user: bool, message_type: MessageType
    ) -> ClientMessage:
        stored = await self._store(
            self.message_db.create_message(
                Message(
                    id=generate_uid(),
                    conversation_id=conversation.id,
                    content=content,
                    is_user=is_user,
                    message_type=message_type,
                    create_timestamp=get_current_timestamp(),
                )
            ),
            "save a message",
        )
        message = ClientMessage.from_message(stored)
        # writes for a superseded conversation stay in the store but not in the visible thread
        if self.current_conversation is not None and self.current_conversation.id == conversation.id:
            self.messages.append(message)
        return message

    async def _store(self, awaitable: Awaitable[T], action: str) -> T:
        """Run a repository call under the store timeout, recording failures on 'error'."""
        try:
            return await with_store_timeout(awaitable, self.settings.store_timeout, action)
        except StoreError as exc:
            self.error = exc.message
            logger.warning(f"Failed to {action}: {exc.message}")
            raise
