"""
Confirmation Gate

Irreversible console actions (deleting a category, menu or the account,
clearing a table's orders, deactivating a kiosk) go through one generic
prompt: the caller supplies a message and a callback, and the callback
runs only when the operator explicitly confirms.

States:
    CLOSED --open(message, callback)--> OPEN --confirm | cancel--> CLOSED

The callback fires at most once per opening. Confirming or cancelling a
closed gate does nothing. Opening an already open gate replaces the
pending request.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[], Awaitable[None]]


class GateState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"


@dataclass
class PendingConfirmation:
    """The prompt currently shown to the operator."""
    message: str
    on_confirm: ConfirmCallback

    def to_dict(self) -> dict:
        return {"message": self.message}


class ConfirmGate:
    """Modal confirmation controller with exactly two outcomes."""

    def __init__(self) -> None:
        self._pending: Optional[PendingConfirmation] = None

    @property
    def state(self) -> GateState:
        return GateState.OPEN if self._pending else GateState.CLOSED

    @property
    def is_open(self) -> bool:
        return self._pending is not None

    @property
    def pending(self) -> Optional[PendingConfirmation]:
        return self._pending

    def open(self, message: str, on_confirm: ConfirmCallback) -> PendingConfirmation:
        """Show the prompt; nothing runs until confirm()."""
        if self._pending:
            logger.debug(f"Replacing pending confirmation: {self._pending.message}")
        self._pending = PendingConfirmation(message=message, on_confirm=on_confirm)
        return self._pending

    async def confirm(self) -> bool:
        """
        Close the prompt and run its callback.

        Returns:
            bool: True if a callback ran, False if the gate was closed
        """
        pending = self._pending
        if pending is None:
            return False

        # Close before awaiting so a second confirm cannot reach the same callback.
        self._pending = None
        logger.info(f"Confirmed: {pending.message}")
        await pending.on_confirm()
        return True

    def cancel(self) -> bool:
        """Close the prompt without running anything."""
        pending = self._pending
        self._pending = None
        if pending:
            logger.info(f"Cancelled: {pending.message}")
        return pending is not None
