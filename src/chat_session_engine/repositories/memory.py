"""In-memory message store implementation."""

from datetime import datetime
from typing import Callable, List, Optional, Tuple
from uuid import UUID, uuid4

import structlog

from ..domain.models import Message, Role, utc_now
from .base import MessageStore

logger = structlog.get_logger()

IdFactory = Callable[[], UUID]
Clock = Callable[[], datetime]


class InMemoryMessageStore(MessageStore):
    """Append-only conversation log kept in process memory.

    Ids and timestamps come from injected callables so tests can supply a
    deterministic sequence and a frozen clock.
    """

    def __init__(
        self,
        id_factory: Optional[IdFactory] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self._id_factory = id_factory or uuid4
        self._clock = clock or utc_now
        self._messages: List[Message] = []
        logger.info("message_store_initialized")

    def append(self, role: Role, text: str) -> Message:
        """Create a message with a fresh id and timestamp and append it."""
        message = Message(
            id=self._id_factory(),
            role=role,
            text=text,
            created_at=self._clock(),
        )
        self._messages.append(message)
        logger.info(
            "message_appended",
            message_id=str(message.id),
            message_role=role,
            message_count=len(self._messages),
        )
        return message

    def clear(self) -> None:
        """Empty the log."""
        if not self._messages:
            return
        removed = len(self._messages)
        self._messages = []
        logger.info("message_store_cleared", removed=removed)

    def snapshot(self) -> Tuple[Message, ...]:
        """Return an immutable copy of the log in insertion order."""
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
