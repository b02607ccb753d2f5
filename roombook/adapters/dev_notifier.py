"""
Dev Notifier Adapter.

Logs booking and cancellation confirmations instead of delivering them.
Used for local development and testing.

Key behaviors:
- Logs each confirmation at a configurable level
- Stores confirmations in memory for test assertions
- Can be switched to failing mode to exercise best-effort delivery
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Literal

from roombook.components.booking.ports import NotificationError
from roombook.domain.entities import Booking

logger = logging.getLogger(__name__)

NotificationKind = Literal["booking", "cancellation"]


@dataclass(frozen=True)
class SentNotification:
    """Record of a logged confirmation."""

    kind: NotificationKind
    booking: Booking


@dataclass
class DevNotifier:
    """Notifier that logs instead of delivering. Implements NotifierPort."""

    sent: list[SentNotification] = field(default_factory=list)
    log_level: int = logging.INFO
    fail: bool = False  # Raise NotificationError on every send

    def send_booking_confirmation(self, booking: Booking) -> None:
        self._record("booking", booking)

    def send_cancellation_confirmation(self, booking: Booking) -> None:
        self._record("cancellation", booking)

    def _record(self, kind: NotificationKind, booking: Booking) -> None:
        if self.fail:
            raise NotificationError(f"Dev notifier set to fail ({kind} {booking.id})")

        self.sent.append(SentNotification(kind=kind, booking=booking))
        logger.log(
            self.log_level,
            "NOTIFY (dev): %s booking=%s room=%s start=%s end=%s",
            kind,
            booking.id,
            booking.room_id,
            booking.start_time.isoformat(),
            booking.end_time.isoformat(),
        )

    # --- Test Helper Methods ---

    def of_kind(self, kind: NotificationKind) -> list[SentNotification]:
        return [n for n in self.sent if n.kind == kind]

    def clear(self) -> None:
        self.sent.clear()
