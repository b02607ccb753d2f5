"""
Email Adapter Interface.

Protocol-based interface for sending transactional emails.
Used by EmailNotifier for booking and cancellation confirmations.

Implementation strategies:
1. DevEmailAdapter: Logs emails to console (dev/test)
2. SMTP or provider API adapters (not shipped)

All strategies implement the same EmailPort interface.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol


class EmailStatus(Enum):
    """Email send result status."""

    FAILED = "failed"
    SKIPPED = "skipped"  # Dev adapter or dry-run


@dataclass
class EmailResult:
    """Result of an email send attempt."""

    status: EmailStatus
    message_id: str | None = None  # Provider's message ID
    error: str | None = None
    recipient: str = ""

    @property
    def is_failure(self) -> bool:
        return self.status == EmailStatus.FAILED

    @classmethod
    def skipped(
        cls, recipient: str, message_id: str | None = None, reason: str = "Dev mode"
    ) -> EmailResult:
        """Create a skipped result (dev adapter)."""
        return cls(
            status=EmailStatus.SKIPPED,
            message_id=message_id,
            recipient=recipient,
            error=reason,
        )

    @classmethod
    def failed(cls, recipient: str, error: str) -> EmailResult:
        """Create a failed result."""
        return cls(
            status=EmailStatus.FAILED,
            recipient=recipient,
            error=error,
        )


class EmailPort(Protocol):
    """
    Email sending interface.

    Implementations:
    - DevEmailAdapter: Logs to console (dev/test)
    """

    def send_email(
        self,
        recipient: str,
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> EmailResult:
        """
        Send a transactional email.

        Args:
            recipient: Email address of recipient
            subject: Email subject line
            body_text: Plain text body
            body_html: HTML body (optional)

        Returns:
            EmailResult with send outcome

        Notes:
            - Must not raise exceptions; return failed status instead
        """
        ...
