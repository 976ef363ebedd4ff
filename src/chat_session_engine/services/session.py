"""
Session Controller Module

Orchestrates one in-memory conversation: accepts user intents, keeps the
message log and settings up to date, drives the reply timer, and publishes
a read-only snapshot after every change.

Lifecycle:
- Ready: input accepted
- Sending: a reply is owed; further submissions are ignored until the reply
  lands or the conversation is cleared
"""

import asyncio
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Union
from uuid import UUID

import structlog

from ..config import EngineConfig
from ..domain.models import ModelOption, SessionSnapshot, SessionStatus, Settings, Tone
from ..repositories.base import MessageStore
from ..repositories.memory import InMemoryMessageStore
from .composer import ResponseComposer
from .scheduler import DelayScheduler, Timer, reply_delay_ms
from .settings import SettingsStore

logger = structlog.get_logger()

READY_STATUS = SessionStatus()

Listener = Callable[[SessionSnapshot], None]


class SettingKind(str, Enum):
    """Settings that can be changed through ``change_setting``."""

    MODEL = "model"
    TONE = "tone"
    SHOW_TIMESTAMPS = "show_timestamps"
    SIMULATE_DELAY = "simulate_delay"


class SessionController:
    """Single-conversation engine behind the chat interface."""

    def __init__(
        self,
        store: Optional[MessageStore] = None,
        settings: Optional[SettingsStore] = None,
        composer: Optional[ResponseComposer] = None,
        scheduler: Optional[DelayScheduler] = None,
        *,
        id_factory: Optional[Callable[[], UUID]] = None,
        clock: Optional[Callable[[], datetime]] = None,
        timer: Optional[Timer] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        if scheduler is not None and timer is not None:
            raise ValueError("Pass either scheduler or timer, not both")
        self._store = store or InMemoryMessageStore(id_factory=id_factory, clock=clock)
        self._settings = settings or SettingsStore()
        self._composer = composer or ResponseComposer(self._settings.catalog)
        self._scheduler = scheduler or DelayScheduler(timer)
        self._config = config or EngineConfig()
        self._status = READY_STATUS
        # Bumped by every submit and clear; a reply only lands for the latest request
        self._request = 0
        self._listeners: List[Listener] = []
        self._idle = asyncio.Event()
        self._idle.set()
        logger.info("session_initialized", model=self._settings.get().model)

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_sending(self) -> bool:
        return self._status.is_sending

    def snapshot(self) -> SessionSnapshot:
        """Current messages, settings and status as one immutable value."""
        return SessionSnapshot(
            messages=self._store.snapshot(),
            settings=self._settings.get(),
            status=self._status,
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def submit(self, raw_text: str) -> bool:
        """Post a user message and owe a reply.

        Returns False when the text is blank or a reply is still pending.
        """
        text = (raw_text or "").strip()
        if not text:
            logger.debug("empty_submission_ignored")
            return False
        if self._status.is_sending:
            logger.info("submission_rejected_while_sending", text_length=len(text))
            return False

        self._store.append("user", text)
        captured = self._settings.get()
        label = self._composer.model_label(captured.model)
        self._set_status(
            SessionStatus(status_text=f"Thinking with {label}", is_accent=True, is_sending=True),
            notify=False,
        )
        self._idle.clear()
        self._request += 1
        request = self._request

        def respond() -> None:
            self._deliver_reply(request, text, captured)

        if captured.simulate_delay:
            duration = reply_delay_ms(len(text), self._config)
            logger.info("reply_pending", model=captured.model, tone=captured.tone.value, duration_ms=duration)
            self._scheduler.schedule(duration, respond)
            self._notify()
        else:
            # Listeners may clear the session here; respond then sees a stale request
            self._notify()
            self._scheduler.run_immediately(respond)
        return True

    def clear(self) -> None:
        """Cancel any pending reply and empty the conversation."""
        was_sending = self._status.is_sending
        self._request += 1
        self._scheduler.cancel()
        self._store.clear()
        self._set_status(READY_STATUS, notify=False)
        self._idle.set()
        logger.info("session_cleared", cancelled_reply=was_sending)
        self._notify()

    def change_setting(self, kind: Union[SettingKind, str], value: Any) -> Any:
        """Apply a settings change coming from the settings UI."""
        kind = SettingKind(kind)
        if kind is SettingKind.MODEL:
            return self.set_model(value)
        elif kind is SettingKind.TONE:
            return self.set_tone(value)
        elif kind is SettingKind.SHOW_TIMESTAMPS:
            return self.set_show_timestamps(value)
        else:
            return self.set_simulate_delay(value)

    def set_model(self, model_id: str) -> ModelOption:
        option = self._settings.set_model(model_id)
        self._set_status(
            SessionStatus(
                status_text=f"Switched to {option.label}: {option.description}",
                is_accent=True,
                is_sending=self._status.is_sending,
            )
        )
        return option

    def set_tone(self, tone: Union[Tone, str]) -> Tone:
        parsed = self._settings.set_tone(tone)
        self._notify()
        return parsed

    def set_show_timestamps(self, value: bool) -> None:
        self._settings.set_show_timestamps(value)
        self._notify()

    def set_simulate_delay(self, value: bool) -> None:
        self._settings.set_simulate_delay(value)
        self._notify()

    async def wait_until_idle(self) -> None:
        """Wait until no reply is pending."""
        await self._idle.wait()

    def _deliver_reply(self, request: int, prompt: str, settings: Settings) -> None:
        if request != self._request or not self._status.is_sending:
            logger.info("stale_reply_dropped", request=request)
            return
        reply = self._composer.compose(prompt, settings)
        self._store.append("assistant", reply)
        self._set_status(READY_STATUS, notify=False)
        self._idle.set()
        logger.info(
            "reply_delivered",
            model=settings.model,
            prompt_length=len(prompt),
            reply_length=len(reply),
        )
        self._notify()

    def _set_status(self, status: SessionStatus, notify: bool = True) -> None:
        self._status = status
        if notify:
            self._notify()

    def _notify(self) -> None:
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error("listener_error", error=str(e))
