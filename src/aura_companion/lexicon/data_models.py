"""
Lexicon data model.

A 'Lexicon' bundles every piece of static text the companion relies on:
keyword lists for theme and crisis detection, per-theme response banks, the
coping-strategy and professional-resource catalogs, and the fixed message
templates. It is validated once when constructed and is immutable afterwards,
so the classifier and the response agent stay pure functions of their input.

'THEME_PRIORITY' is the tie-break order for theme detection: when a message
contains keywords from several themes, the theme listed first wins.
"""

from enum import StrEnum
from pathlib import Path
from types import MappingProxyType
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, PlainSerializer, model_validator


class Theme(StrEnum):
    """Emotional categories used to pick a response bank."""

    ANXIETY = "anxiety"
    SADNESS = "sadness"
    STRESS = "stress"
    LONELINESS = "loneliness"
    ANGER = "anger"
    OVERWHELM = "overwhelm"
    GENERAL = "general"


THEME_PRIORITY: tuple[Theme, ...] = (
    Theme.ANXIETY,
    Theme.SADNESS,
    Theme.STRESS,
    Theme.LONELINESS,
    Theme.ANGER,
    Theme.OVERWHELM,
)


# per-theme tables are stored as read-only views and dumped back as plain dicts
ThemeTable = Annotated[
    dict[Theme, tuple[str, ...]],
    AfterValidator(MappingProxyType),
    PlainSerializer(dict, return_type=dict[Theme, tuple[str, ...]]),
]


class CopingStrategy(BaseModel):
    """A short self-help technique offered as a follow-up message."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    applies_to_theme: Theme


class ProfessionalResource(BaseModel):
    """A hotline or directory listed in welcome and resource messages."""

    model_config = ConfigDict(frozen=True)

    name: str
    contact: str
    description: str


class Lexicon(BaseModel):
    """
    Read-only bundle of keywords, response banks, catalogs and templates.

    Attributes:
        theme_keywords: Ordered keyword list per theme. 'general' has none.
        crisis_keywords: Flat list; any single substring match means crisis.
        responses: Response templates per theme. A theme with an empty bank
            falls back to the 'general' bank, which must not be empty.
        crisis_template: Fixed reply used whenever crisis language is present.
        welcome_template: Disclaimer injected into a fresh conversation.
            Formatted with 'first_name'.
        coping_template: Follow-up body, formatted with 'name' and 'description'.
        resources_intro / resources_outro: Frame around the resource listing.
    """

    model_config = ConfigDict(frozen=True)

    theme_keywords: ThemeTable
    crisis_keywords: tuple[str, ...]
    responses: ThemeTable
    crisis_template: str
    welcome_template: str
    coping_template: str
    resources_intro: str
    resources_outro: str
    coping_strategies: tuple[CopingStrategy, ...] = Field(default_factory=tuple)
    professional_resources: tuple[ProfessionalResource, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_general_bank(self) -> "Lexicon":
        if not self.responses.get(Theme.GENERAL):
            raise ValueError("the 'general' response bank must contain at least one template")
        return self

    @model_validator(mode="after")
    def _check_placeholders(self) -> "Lexicon":
        # templates are formatted at reply time, where a bad placeholder must not raise
        try:
            self.welcome_template.format(first_name="")
            self.coping_template.format(name="", description="")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"template has an unsupported placeholder: {exc}") from exc
        return self

    @classmethod
    def from_json_file(cls, path: Path) -> "Lexicon":
        """Load and validate a substitute lexicon from a JSON document."""
        return cls.model_validate_json(path.read_text(encoding="utf-8"))

    def keywords_for(self, theme: Theme) -> tuple[str, ...]:
        return self.theme_keywords.get(theme, ())

    def responses_for(self, theme: Theme) -> tuple[str, ...]:
        return self.responses.get(theme) or self.responses[Theme.GENERAL]

    def strategies_for(self, theme: Theme) -> list[CopingStrategy]:
        """Strategies tagged with 'theme' or with 'general', in catalog order."""
        return [s for s in self.coping_strategies if s.applies_to_theme in (theme, Theme.GENERAL)]
