"""
Screen base class.

A screen keeps its own list/record in memory, mutates it only through its
own handlers, and reports every outcome as a toast. Handlers never raise:
each one catches, logs and reports its own failure.
"""

import logging
from typing import Optional

from kiosk_admin.confirm import ConfirmGate
from kiosk_admin.services.backend import BackendClient, BackendError
from kiosk_admin.services.menu_autofill import AutoFillError
from kiosk_admin.toasts import ToastQueue

logger = logging.getLogger(__name__)

# Errors whose message is written for the operator.
REPORTABLE_ERRORS = (BackendError, AutoFillError)


class BaseScreen:
    """Common wiring shared by all console screens."""

    name = "screen"

    def __init__(
        self,
        backend: BackendClient,
        toasts: ToastQueue,
        gate: Optional[ConfirmGate] = None,
    ):
        self.backend = backend
        self.toasts = toasts
        self.gate = gate or ConfirmGate()

    def report_failure(
        self,
        action: str,
        error: Exception,
        fallback: str,
        show_detail: bool = True,
    ) -> None:
        """
        Log a failed action and queue an error toast.

        Args:
            action: What was attempted (for the log line)
            error: The exception caught by the handler
            fallback: Message used when the error carries none
            show_detail: Prefer the error's own message when it has one
        """
        logger.error(f"[{self.name}] {action} failed: {error}")
        message = fallback
        if show_detail and isinstance(error, REPORTABLE_ERRORS) and str(error):
            message = str(error)
        self.toasts.error(message)

    def snapshot(self) -> dict:
        """JSON-ready view of the screen state."""
        raise NotImplementedError
