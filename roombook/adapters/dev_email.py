"""
Dev Email Adapter.

Logs emails to console instead of sending.
Used for local development and testing.

Key behaviors:
- Logs email details at a configurable level
- Returns a SKIPPED result, never a delivery
- Stores emails in memory for test assertions
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

from roombook.core.ports.email import EmailResult

logger = logging.getLogger(__name__)


@dataclass
class SentEmail:
    """Record of a logged email for test assertions."""

    id: str
    recipient: str
    subject: str
    body_text: str
    body_html: str
    logged_at: datetime


@dataclass
class DevEmailAdapter:
    """
    Dev email adapter that logs instead of sending.

    Implements EmailPort protocol.
    """

    # In-memory storage for test assertions
    sent_emails: list[SentEmail] = field(default_factory=list)

    # Configuration
    log_level: int = logging.INFO
    log_body: bool = True  # Whether to log body content
    body_preview_length: int = 100  # Max chars of body to log

    def send_email(
        self,
        recipient: str,
        subject: str,
        body_text: str,
        body_html: str | None = None,
    ) -> EmailResult:
        """
        Log an email instead of sending.

        Returns:
            EmailResult with SKIPPED status
        """
        message_id = f"dev-{uuid4().hex[:12]}"

        self.sent_emails.append(
            SentEmail(
                id=message_id,
                recipient=recipient,
                subject=subject,
                body_text=body_text,
                body_html=body_html or "",
                logged_at=datetime.now(UTC),
            )
        )

        self._log_email(
            recipient=recipient,
            subject=subject,
            body_text=body_text,
            message_id=message_id,
        )

        return EmailResult.skipped(
            recipient,
            message_id=message_id,
            reason="Dev mode - email logged, not sent",
        )

    def _log_email(
        self,
        recipient: str,
        subject: str,
        body_text: str,
        message_id: str,
    ) -> None:
        """Log email details to console."""
        parts = [
            f"EMAIL (dev): To={recipient}",
            f"Subject={subject}",
        ]

        if self.log_body and body_text:
            preview = body_text[: self.body_preview_length]
            if len(body_text) > self.body_preview_length:
                preview += "..."
            parts.append(f"Body={preview}")

        parts.append(f"MessageID={message_id}")

        logger.log(self.log_level, ", ".join(parts))

    # --- Test Helper Methods ---

    def get_last_email(self) -> SentEmail | None:
        """Get the most recently logged email."""
        return self.sent_emails[-1] if self.sent_emails else None

    def clear(self) -> None:
        """Clear all stored emails (for test isolation)."""
        self.sent_emails.clear()

    @property
    def email_count(self) -> int:
        """Get the number of logged emails."""
        return len(self.sent_emails)
