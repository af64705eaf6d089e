"""
Static lexicon used by the classifier and the companion agent.

    from aura_companion.lexicon import DEFAULT_LEXICON, load_lexicon

'load_lexicon' returns the built-in lexicon unless a JSON file is given, which
lets deployments and tests substitute their own keywords and templates.
"""

from pathlib import Path

from loguru import logger

from aura_companion.lexicon.data_models import (
    THEME_PRIORITY,
    CopingStrategy,
    Lexicon,
    ProfessionalResource,
    Theme,
)
from aura_companion.lexicon.default import DEFAULT_LEXICON


def load_lexicon(path: Path | None = None) -> Lexicon:
    if path is None:
        return DEFAULT_LEXICON
    logger.info(f"Loading lexicon from {path}")
    return Lexicon.from_json_file(path)


__all__ = [
    "DEFAULT_LEXICON",
    "THEME_PRIORITY",
    "CopingStrategy",
    "Lexicon",
    "ProfessionalResource",
    "Theme",
    "load_lexicon",
]
