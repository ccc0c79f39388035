from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Protocol

from ..core.enums import ErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerNotice:
    kind: ErrorKind
    text: str
    event_id: Optional[int] = None


class NotificationSink(Protocol):
    """Fire-and-forget delivery (chat bot, e-mail, ...)."""

    def notify(self, employee_id: str, message: LedgerNotice) -> None:
        raise NotImplementedError


def notify_safely(sink: Optional[NotificationSink], employee_id: str, message: LedgerNotice) -> None:
    """Deliver a notice; delivery failures are logged, never raised."""
    if sink is None:
        return
    try:
        sink.notify(employee_id, message)
    except Exception:
        logger.exception(
            "notification delivery failed",
            extra={"employee_id": employee_id, "notice_kind": message.kind.value},
        )
