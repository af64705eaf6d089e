import pytest

from aura_companion.config import get_settings
from aura_companion.conversation_database import MessageType
from aura_companion.demo import run_demo


@pytest.fixture
def instant_settings(monkeypatch):
    for name in ("AURA_LATENCY_MIN", "AURA_LATENCY_MAX", "AURA_FOLLOW_UP_DELAY"):
        monkeypatch.setenv(name, "0")
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


async def test_run_demo(instant_settings, capsys):
    session = await run_demo("I feel so alone lately")

    printed = capsys.readouterr().out
    assert "Hello Alex!" in printed
    assert "741741" in printed
    assert session.current_conversation is not None
    assert [m.message_type for m in session.messages] == [MessageType.WARNING]
