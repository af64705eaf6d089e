from aura_companion.agents.base import Agent, AgentAnswer, QueryWithContext
from aura_companion.agents.companion import CompanionAgent

__all__ = ["Agent", "AgentAnswer", "CompanionAgent", "QueryWithContext"]
