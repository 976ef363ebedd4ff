"""Base message store interface."""

from abc import ABC, abstractmethod
from typing import Tuple

from ..domain.models import Message, Role


class MessageStore(ABC):
    """Abstract base class for conversation logs."""

    @abstractmethod
    def append(self, role: Role, text: str) -> Message:
        """Create a message and append it to the log."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Remove every message from the log."""
        pass

    @abstractmethod
    def snapshot(self) -> Tuple[Message, ...]:
        """Return the log in insertion order."""
        pass

    def __len__(self) -> int:
        return len(self.snapshot())
