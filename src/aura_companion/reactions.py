"""
Reaction ledger.

Keeps a session's local view of message reactions in step with the reaction
store. A toggle is applied to the local 'ClientMessage' first, then confirmed
through the store's conditional 'toggle_reaction'; the confirmed record
replaces the optimistic one, and a failed write restores the previous local
state before the error propagates. The feed's heart counter follows the same
apply, confirm or revert policy (see 'aura_companion.feed').

Toggles on the same '(message_id, reaction_type)' key are serialized, so two
quick taps are applied one after the other. Reactions have no actor: a toggle
answers "does any reaction of this type exist on this message", which is
shared by everyone who can see the message.
"""

from loguru import logger

from aura_companion.conversation_database.data_models.message import ClientMessage
from aura_companion.conversation_database.data_models.reaction import Reaction, ReactionDatabase, ReactionType
from aura_companion.errors import StoreError
from aura_companion.utils.database import generate_uid, with_store_timeout
from aura_companion.utils.locks import KeyedLock
from aura_companion.utils.time import get_current_timestamp


class ReactionLedger:
    def __init__(self, reaction_db: ReactionDatabase, store_timeout: float = 10.0) -> None:
        self.reaction_db = reaction_db
        self.store_timeout = store_timeout
        self._locks = KeyedLock()

    async def toggle(self, message: ClientMessage, reaction_type: ReactionType) -> Reaction | None:
        """Flip 'reaction_type' on 'message'.

        Returns the stored reaction when the toggle added one, None when it
        removed one. 'message.reactions' reflects the confirmed state on return
        and is restored for this reaction type if the store raises 'StoreError'.
        """
        async with self._locks.hold((message.id, reaction_type)):
            previous = [r for r in message.reactions if r.reaction_type == reaction_type]
            candidate = Reaction(
                id=generate_uid(),
                message_id=message.id,
                reaction_type=reaction_type,
                create_timestamp=get_current_timestamp(),
            )
            self._replace(message, reaction_type, [] if previous else [candidate])

            try:
                confirmed = await with_store_timeout(
                    self.reaction_db.toggle_reaction(candidate), self.store_timeout, "toggle a reaction"
                )
            except StoreError:
                self._replace(message, reaction_type, previous)
                logger.warning(f"Reverted {reaction_type} toggle on message {message.id}")
                raise

            self._replace(message, reaction_type, [confirmed] if confirmed else [])
            logger.debug(f"Reaction {reaction_type} {'added to' if confirmed else 'removed from'} message {message.id}")
            return confirmed

    @staticmethod
    def _replace(message: ClientMessage, reaction_type: ReactionType, reactions: list[Reaction]) -> None:
        # other reaction types may have been toggled meanwhile; only this type's entries are rewritten
        message.reactions = [r for r in message.reactions if r.reaction_type != reaction_type] + reactions
