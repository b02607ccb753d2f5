from __future__ import annotations

import logging
from dataclasses import dataclass

from roombook.adapters.clock import SystemClock
from roombook.adapters.dev_email import DevEmailAdapter
from roombook.adapters.dev_notifier import DevNotifier
from roombook.adapters.email_notifier import EmailNotifier
from roombook.adapters.sqlite.repos import SQLiteRoomRepo
from roombook.components.booking import (
    BookingSystem,
    ClockPort,
    NotifierPort,
    RoomRepoPort,
)
from roombook.rules.models import NotificationRules, Rules


def build_notifier(rules: NotificationRules) -> NotifierPort:
    level = logging.getLevelName(rules.log_level)
    if rules.transport == "email":
        # Validated by NotificationRules
        assert rules.recipient is not None
        return EmailNotifier(
            email=DevEmailAdapter(log_level=level),
            recipient=rules.recipient,
        )
    return DevNotifier(log_level=level)


@dataclass
class ServiceContext:
    booking_system: BookingSystem
    room_repo: RoomRepoPort
    notifier: NotifierPort
    clock: ClockPort
    rules: Rules

    @classmethod
    def create(
        cls, db_path: str, rules: Rules, clock: ClockPort | None = None
    ) -> ServiceContext:
        room_repo = SQLiteRoomRepo(db_path)
        notifier = build_notifier(rules.notifications)
        clock = clock or SystemClock()

        return cls(
            booking_system=BookingSystem(clock=clock, repo=room_repo, notifier=notifier),
            room_repo=room_repo,
            notifier=notifier,
            clock=clock,
            rules=rules,
        )
