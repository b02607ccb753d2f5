"""
Email Notifier.

Implements NotifierPort by rendering confirmations as plain-text emails
and handing them to an EmailPort. A FAILED email result is raised as
NotificationError; BookingSystem absorbs it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from roombook.components.booking.ports import NotificationError
from roombook.core.ports.email import EmailPort
from roombook.domain.entities import Booking

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M %Z"

BOOKING_SUBJECT = "Booking confirmed: room {room_id}"
CANCELLATION_SUBJECT = "Booking cancelled: room {room_id}"


def render_booking_body(booking: Booking) -> str:
    return (
        f"Your booking {booking.id} for room {booking.room_id} is confirmed.\n"
        f"From: {booking.start_time.strftime(TIME_FORMAT).strip()}\n"
        f"To:   {booking.end_time.strftime(TIME_FORMAT).strip()}\n"
    )


def render_cancellation_body(booking: Booking) -> str:
    return (
        f"Your booking {booking.id} for room {booking.room_id} has been cancelled.\n"
        f"It was scheduled from {booking.start_time.strftime(TIME_FORMAT).strip()}"
        f" to {booking.end_time.strftime(TIME_FORMAT).strip()}.\n"
    )


@dataclass
class EmailNotifier:
    email: EmailPort
    recipient: str

    def send_booking_confirmation(self, booking: Booking) -> None:
        self._send(
            BOOKING_SUBJECT.format(room_id=booking.room_id),
            render_booking_body(booking),
        )

    def send_cancellation_confirmation(self, booking: Booking) -> None:
        self._send(
            CANCELLATION_SUBJECT.format(room_id=booking.room_id),
            render_cancellation_body(booking),
        )

    def _send(self, subject: str, body: str) -> None:
        result = self.email.send_email(
            recipient=self.recipient,
            subject=subject,
            body_text=body,
        )
        if result.is_failure:
            raise NotificationError(
                f"Email to {self.recipient} failed: {result.error or 'unknown error'}"
            )
        logger.debug("Notification email %s: %s", result.status.value, subject)
