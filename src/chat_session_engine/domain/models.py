"""Domain models for the chat session engine."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Tuple
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["user", "assistant"]


def utc_now() -> datetime:
    """Default clock for message timestamps."""
    return datetime.now(timezone.utc)


class Tone(str, Enum):
    """Style modifier applied to composed replies."""

    BALANCED = "Balanced"
    CONCISE = "Concise"
    DETAILED = "Detailed"
    PLAYFUL = "Playful"


class ModelOption(BaseModel):
    """Entry of the static model catalog."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    description: str


MODEL_CATALOG: Tuple[ModelOption, ...] = (
    ModelOption(id="nova-3", label="Nova 3", description="Balanced everyday assistant"),
    ModelOption(id="orion-mini", label="Orion Mini", description="Fast, lightweight replies"),
    ModelOption(id="atlas-pro", label="Atlas Pro", description="Deeper answers for long prompts"),
)


class Message(BaseModel):
    """Message model."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    role: Role
    text: str
    created_at: datetime = Field(default_factory=utc_now)


class Settings(BaseModel):
    """Snapshot of the user-configurable behavior switches."""

    model_config = ConfigDict(frozen=True)

    model: str = MODEL_CATALOG[0].id
    tone: Tone = Tone.BALANCED
    show_timestamps: bool = True
    simulate_delay: bool = True


class SessionStatus(BaseModel):
    """Status line shown next to the conversation."""

    model_config = ConfigDict(frozen=True)

    status_text: str = "Ready"
    is_accent: bool = False
    is_sending: bool = False


class SessionSnapshot(BaseModel):
    """Everything a renderer needs to draw the session."""

    model_config = ConfigDict(frozen=True)

    messages: Tuple[Message, ...] = ()
    settings: Settings = Field(default_factory=Settings)
    status: SessionStatus = Field(default_factory=SessionStatus)
