"""Test suite for reply composition."""

import pytest

from chat_session_engine.domain.models import Settings, Tone
from chat_session_engine.services.composer import (
    CLOSING_LINE,
    LEAD_LINES,
    PLAYFUL_CLOSING_LINE,
    ResponseComposer,
    compose,
)


def test_lead_table_covers_every_tone():
    assert set(LEAD_LINES) == set(Tone)


def test_balanced_reply(nova_catalog):
    """Balanced reply echoes the prompt, names the model and closes politely."""
    reply = ResponseComposer(nova_catalog).compose("Hello", Settings(model="nova-3"))

    assert reply.startswith("Here you go with a balanced take: Hello")
    assert "Nova 3" in reply
    assert reply.endswith("Happy to refine further.")


def test_concise_reply_starts_with_quick_answer():
    reply = compose("What is 2 + 2?", Settings(tone=Tone.CONCISE))
    assert reply.startswith("Quick answer:")
    assert "What is 2 + 2?" in reply


@pytest.mark.parametrize("tone", list(Tone))
def test_closing_line_depends_only_on_playful(tone):
    """Playful gets its own closing; every other tone shares one."""
    reply = compose("Share a fun fact", Settings(tone=tone))
    if tone is Tone.PLAYFUL:
        assert reply.endswith(PLAYFUL_CLOSING_LINE)
    else:
        assert reply.endswith(CLOSING_LINE)


def test_body_has_three_bullets():
    """The body restates model label and tone in three bullets."""
    reply = compose("Hello", Settings(model="atlas-pro", tone=Tone.DETAILED))
    bullets = [line for line in reply.splitlines() if line.startswith("- ")]

    assert len(bullets) == 3
    assert "Atlas Pro" in bullets[0]
    assert "Detailed" in bullets[1]


def test_compose_is_deterministic():
    """Identical inputs give byte-identical output."""
    settings = Settings(model="orion-mini", tone=Tone.PLAYFUL)
    replies = {compose("Tell me about octopuses", settings) for _ in range(5)}
    assert len(replies) == 1


def test_unknown_model_renders_raw_id():
    reply = ResponseComposer().compose("Hi", Settings(model="retired-model"))
    assert "retired-model" in reply
