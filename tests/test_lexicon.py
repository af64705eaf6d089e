import pydantic
import pytest

from aura_companion.lexicon import DEFAULT_LEXICON, THEME_PRIORITY, Lexicon, Theme, load_lexicon


def test_default_lexicon_contents():
    assert len(DEFAULT_LEXICON.crisis_keywords) == 12
    assert len(DEFAULT_LEXICON.coping_strategies) == 5
    assert len(DEFAULT_LEXICON.professional_resources) == 4
    assert len(DEFAULT_LEXICON.responses[Theme.GENERAL]) == 5
    for theme in THEME_PRIORITY:
        assert DEFAULT_LEXICON.keywords_for(theme)
        assert len(DEFAULT_LEXICON.responses[theme]) == 3
    assert DEFAULT_LEXICON.keywords_for(Theme.GENERAL) == ()


def test_lexicon_is_immutable():
    with pytest.raises(pydantic.ValidationError):
        DEFAULT_LEXICON.crisis_template = "changed"


def test_empty_theme_bank_falls_back_to_general():
    lexicon = DEFAULT_LEXICON.model_copy(update={"responses": {**DEFAULT_LEXICON.responses, Theme.ANGER: ()}})
    assert lexicon.responses_for(Theme.ANGER) == DEFAULT_LEXICON.responses[Theme.GENERAL]


def test_general_bank_is_required():
    data = DEFAULT_LEXICON.model_dump()
    data["responses"][Theme.GENERAL] = ()
    with pytest.raises(pydantic.ValidationError, match="general"):
        Lexicon.model_validate(data)


def test_templates_with_unknown_placeholders_are_rejected():
    data = DEFAULT_LEXICON.model_dump()
    data["welcome_template"] = "Hello {nickname}"
    with pytest.raises(pydantic.ValidationError, match="placeholder"):
        Lexicon.model_validate(data)


def test_strategies_for_theme_include_general_ones():
    names = [s.name for s in DEFAULT_LEXICON.strategies_for(Theme.ANXIETY)]
    assert names == ["Box Breathing", "5-4-3-2-1 Grounding", "Self-Compassion Break", "Emotional Check-in"]

    lonely = [s.name for s in DEFAULT_LEXICON.strategies_for(Theme.LONELINESS)]
    assert lonely == ["Self-Compassion Break", "Emotional Check-in"]


def test_load_lexicon_defaults_to_builtin():
    assert load_lexicon() is DEFAULT_LEXICON


def test_load_lexicon_from_json_file(tmp_path):
    custom = DEFAULT_LEXICON.model_copy(update={"crisis_keywords": ("unsafe",)})
    path = tmp_path / "lexicon.json"
    path.write_text(custom.model_dump_json(), encoding="utf-8")

    loaded = load_lexicon(path)

    assert loaded.crisis_keywords == ("unsafe",)
    assert loaded.responses_for(Theme.STRESS) == DEFAULT_LEXICON.responses[Theme.STRESS]
    assert loaded.strategies_for(Theme.STRESS) == DEFAULT_LEXICON.strategies_for(Theme.STRESS)


def test_theme_tables_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_LEXICON.responses[Theme.ANXIETY] = ()
    with pytest.raises(TypeError):
        DEFAULT_LEXICON.theme_keywords[Theme.ANGER] = ("cross",)

    assert DEFAULT_LEXICON.responses_for(Theme.ANXIETY)
    assert type(DEFAULT_LEXICON.model_dump()["responses"]) is dict
