import pytest

from aura_companion.classifier import classify, detect_crisis, detect_theme
from aura_companion.lexicon import DEFAULT_LEXICON, Theme


@pytest.mark.parametrize(
    "text, expected",
    [
        ("I'm so anxious about tomorrow", Theme.ANXIETY),
        ("I feel so alone lately", Theme.LONELINESS),
        ("I'm FURIOUS with my landlord", Theme.ANGER),
        ("Been crying all evening", Theme.SADNESS),
        ("I can't handle this week", Theme.OVERWHELM),
        ("What a lovely afternoon", Theme.GENERAL),
        ("", Theme.GENERAL),
    ],
)
def test_detect_theme(text, expected):
    assert detect_theme(text) == expected


def test_first_theme_in_priority_order_wins():
    assert detect_theme("anxious and stressed") == Theme.ANXIETY
    assert detect_theme("lonely and angry") == Theme.LONELINESS


def test_overwhelmed_is_shadowed_by_stress():
    # 'overwhelmed' is listed under stress, which comes first
    assert detect_theme("I feel overwhelmed") == Theme.STRESS


@pytest.mark.parametrize(
    "text",
    ["I want to kill myself", "I WANT TO DIE", "everything feels hopeless", "I do not want to die"],
)
def test_detect_crisis_positive(text):
    assert detect_crisis(text) is True


@pytest.mark.parametrize("text", ["nothing alarming here", "", "I'm a bit tired"])
def test_detect_crisis_negative(text):
    assert detect_crisis(text) is False


def test_keywords_are_compared_case_insensitively():
    lexicon = DEFAULT_LEXICON.model_copy(update={"crisis_keywords": ("Red Flag",)})
    assert detect_crisis("there is a red flag here", lexicon) is True
    assert detect_crisis("I want to die", lexicon) is False


def test_classify_combines_both_detectors():
    result = classify("I'm anxious and want to end it all")
    assert result.theme == Theme.ANXIETY
    assert result.is_crisis is True

    calm = classify("")
    assert calm.theme == Theme.GENERAL
    assert calm.is_crisis is False
