"""
Rule-based companion agent.

'CompanionAgent' answers from the lexicon's canned response banks:

    1  crisis language present  -> fixed crisis template, type 'warning'
    2  otherwise                -> one template from the detected theme's bank,
                                   type 'normal', sometimes prefixed with the
                                   user's first name
    3  'plan_follow_up'         -> sometimes a coping strategy for the same
                                   theme (or a general one), type 'resource'

Steps 2 and 3 draw from the injected 'RandomSource' independently of each
other. The crisis reply consumes no random draws, so its content depends only
on the display name.
"""

from loguru import logger

from aura_companion.agents.base import Agent, AgentAnswer, QueryWithContext
from aura_companion.classifier import classify, detect_theme
from aura_companion.conversation_database.data_models.message import MessageType
from aura_companion.lexicon import DEFAULT_LEXICON, Lexicon
from aura_companion.utils.random_source import RandomSource, SeededRandomSource

DEFAULT_PERSONALIZATION_PROBABILITY = 0.3
DEFAULT_FOLLOW_UP_PROBABILITY = 0.3


def first_name_of(display_name: str | None) -> str | None:
    if not display_name or not display_name.strip():
        return None
    return display_name.split()[0]


def lower_first(text: str) -> str:
    return text[:1].lower() + text[1:]


class CompanionAgent(Agent):
    """
    Agent that selects and personalizes canned emotional-support replies.

    Attributes:
        lexicon: Keywords, response banks and templates. Never mutated.
        random_source: Source of every random draw the agent makes.
        personalization_probability: Chance that a normal reply is prefixed
            with the user's first name.
        follow_up_probability: Chance that 'plan_follow_up' returns a coping
            strategy.
    """

    def __init__(
        self,
        lexicon: Lexicon = DEFAULT_LEXICON,
        random_source: RandomSource | None = None,
        personalization_probability: float = DEFAULT_PERSONALIZATION_PROBABILITY,
        follow_up_probability: float = DEFAULT_FOLLOW_UP_PROBABILITY,
        description: str = "Scripted emotional-support companion",
    ) -> None:
        super().__init__(description)
        self.lexicon = lexicon
        self.random_source = random_source or SeededRandomSource()
        self.personalization_probability = personalization_probability
        self.follow_up_probability = follow_up_probability

    def answer(self, query_with_context: QueryWithContext) -> AgentAnswer:
        classification = classify(query_with_context.query, self.lexicon)
        first_name = first_name_of(query_with_context.display_name)

        if classification.is_crisis:
            logger.warning("Crisis language detected, replying with crisis resources")
            content = self.lexicon.crisis_template
            if first_name:
                content = f"{first_name}, {content}"
            return AgentAnswer(
                content=content,
                message_type=MessageType.WARNING,
                theme=classification.theme,
                is_crisis=True,
            )

        content = self.random_source.choice(self.lexicon.responses_for(classification.theme))
        # drawn even without a name so the sequence of draws does not depend on the profile
        personalize = self.random_source.random() < self.personalization_probability
        if personalize and first_name:
            content = f"{first_name}, {lower_first(content)}"

        logger.debug(f"Reply selected (theme={classification.theme}  personalized={personalize and bool(first_name)})")
        return AgentAnswer(content=content, message_type=MessageType.NORMAL, theme=classification.theme)

    def plan_follow_up(self, query_with_context: QueryWithContext) -> AgentAnswer | None:
        """Decide whether a coping-strategy message should follow the reply, and which one."""
        if self.random_source.random() >= self.follow_up_probability:
            return None

        theme = detect_theme(query_with_context.query, self.lexicon)
        strategies = self.lexicon.strategies_for(theme)
        if not strategies:
            return None

        strategy = self.random_source.choice(strategies)
        logger.debug(f"Follow-up planned: {strategy.name!r} (theme={theme})")
        return AgentAnswer(
            content=self.lexicon.coping_template.format(name=strategy.name, description=strategy.description),
            message_type=MessageType.RESOURCE,
            theme=theme,
        )

    def resources_message(self) -> AgentAnswer:
        """A 'resource' message listing every professional resource in the lexicon."""
        entries = [f"**{r.name}**\n{r.contact}\n{r.description}" for r in self.lexicon.professional_resources]
        content = "\n\n".join([self.lexicon.resources_intro, *entries, self.lexicon.resources_outro])
        return AgentAnswer(content=content, message_type=MessageType.RESOURCE)

    def welcome_message(self, display_name: str | None) -> AgentAnswer:
        """The one-off disclaimer that opens a fresh conversation."""
        first_name = first_name_of(display_name) or "there"
        return AgentAnswer(
            content=self.lexicon.welcome_template.format(first_name=first_name),
            message_type=MessageType.WARNING,
        )
