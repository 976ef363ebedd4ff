"""Local, deterministic conversational session engine."""

from .config import EngineConfig
from .domain.models import (
    MODEL_CATALOG,
    Message,
    ModelOption,
    SessionSnapshot,
    SessionStatus,
    Settings,
    Tone,
)
from .repositories.memory import InMemoryMessageStore
from .services.composer import ResponseComposer, compose
from .services.scheduler import DelayScheduler, LoopTimer, reply_delay_ms
from .services.session import SessionController, SettingKind
from .services.settings import InvalidModelId, InvalidTone, SettingsStore

__version__ = "0.1.0"

__all__ = [
    "DelayScheduler",
    "EngineConfig",
    "InMemoryMessageStore",
    "InvalidModelId",
    "InvalidTone",
    "LoopTimer",
    "MODEL_CATALOG",
    "Message",
    "ModelOption",
    "ResponseComposer",
    "SessionController",
    "SessionSnapshot",
    "SessionStatus",
    "SettingKind",
    "Settings",
    "SettingsStore",
    "Tone",
    "compose",
    "reply_delay_ms",
]
