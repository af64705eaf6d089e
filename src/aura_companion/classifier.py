"""
Keyword classifier for user messages.

Both detectors are plain substring tests over the lower-cased text, driven
entirely by the supplied 'Lexicon'. They are deterministic, never raise, and
accept any string including the empty one.

Theme detection walks 'THEME_PRIORITY' and returns the first theme with a
matching keyword, so "anxious and stressed" is 'anxiety'. Crisis detection has
no negation handling: "I do not want to die" is still a crisis.
"""

from pydantic import BaseModel

from aura_companion.lexicon import DEFAULT_LEXICON, THEME_PRIORITY, Lexicon, Theme


class Classification(BaseModel):
    theme: Theme
    is_crisis: bool


def detect_theme(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Theme:
    lower_text = text.lower()
    for theme in THEME_PRIORITY:
        if any(keyword.lower() in lower_text for keyword in lexicon.keywords_for(theme)):
            return theme
    return Theme.GENERAL


def detect_crisis(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> bool:
    lower_text = text.lower()
    return any(keyword.lower() in lower_text for keyword in lexicon.crisis_keywords)


def classify(text: str, lexicon: Lexicon = DEFAULT_LEXICON) -> Classification:
    return Classification(theme=detect_theme(text, lexicon), is_crisis=detect_crisis(text, lexicon))
