"""
Toast Notifications

Every console action reports its outcome as a short user-facing message.
Messages are queued here and drained by the next console response.
"""

import logging
from dataclasses import dataclass, asdict
from enum import Enum

logger = logging.getLogger(__name__)


class ToastLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


@dataclass
class Toast:
    level: ToastLevel
    message: str

    def to_dict(self) -> dict:
        data = asdict(self)
        data["level"] = self.level.value
        return data


class ToastQueue:
    """FIFO of pending toasts."""

    def __init__(self) -> None:
        self._items: list[Toast] = []

    def success(self, message: str) -> None:
        self._push(ToastLevel.SUCCESS, message)

    def error(self, message: str) -> None:
        self._push(ToastLevel.ERROR, message)

    def info(self, message: str) -> None:
        self._push(ToastLevel.INFO, message)

    def _push(self, level: ToastLevel, message: str) -> None:
        logger.debug(f"Toast [{level.value}]: {message}")
        self._items.append(Toast(level=level, message=message))

    def peek(self) -> list[Toast]:
        return list(self._items)

    def drain(self) -> list[Toast]:
        """Return and forget all pending toasts."""
        items, self._items = self._items, []
        return items

    def __len__(self) -> int:
        return len(self._items)
