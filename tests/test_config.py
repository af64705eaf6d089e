import pydantic
import pytest

from aura_companion.config import CompanionSettings, get_settings


def test_defaults(settings):
    assert settings.personalization_probability == 0.3
    assert settings.follow_up_probability == 0.3
    assert settings.follow_up_delay == 2.0
    assert (settings.latency_min, settings.latency_max) == (1.5, 2.5)
    assert settings.max_message_length == 500
    assert settings.lexicon_path is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("AURA_FOLLOW_UP_PROBABILITY", "0.5")
    monkeypatch.setenv("AURA_MAX_MESSAGE_LENGTH", "280")

    settings = CompanionSettings(_env_file=None)

    assert settings.follow_up_probability == 0.5
    assert settings.max_message_length == 280


def test_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("AURA_LATENCY_MIN=0\nAURA_LATENCY_MAX=0\n", encoding="utf-8")

    settings = CompanionSettings(_env_file=env_file)

    assert (settings.latency_min, settings.latency_max) == (0, 0)


def test_latency_window_must_be_ordered():
    with pytest.raises(pydantic.ValidationError, match="latency_min"):
        CompanionSettings(_env_file=None, latency_min=3.0, latency_max=2.0)


@pytest.mark.parametrize("value", [-0.1, 1.5])
def test_probabilities_are_bounded(value):
    with pytest.raises(pydantic.ValidationError):
        CompanionSettings(_env_file=None, follow_up_probability=value)


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
