import argparse
import logging
import sys
from datetime import UTC, datetime

from roombook.app_shell.config import Settings, configure_logging, prepare_storage
from roombook.app_shell.context import ServiceContext
from roombook.components.booking import (
    AvailableRoomsInput,
    BookRoomInput,
    CancelBookingInput,
    run_available_rooms,
    run_book_room,
    run_cancel,
)
from roombook.domain.entities import Room
from roombook.rules.loader import load_rules

logger = logging.getLogger("cli")


def parse_time(value: str) -> datetime:
    """ISO 8601 timestamp; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid ISO 8601 time: {value}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def get_context(settings: Settings) -> ServiceContext:
    if not settings.rules_path.exists():
        logger.error(f"Rules file {settings.rules_path} not found.")
        sys.exit(1)

    rules = load_rules(settings.rules_path)
    configure_logging(rules)
    db_path = prepare_storage(settings, rules)
    return ServiceContext.create(db_path, rules)


def handle_add_room(ctx: ServiceContext, args: argparse.Namespace) -> int:
    if ctx.room_repo.get_by_id(args.room_id) is not None:
        logger.error(f"Room {args.room_id} already exists.")
        return 1

    ctx.room_repo.save(Room(id=args.room_id, name=args.name))
    print(f"Room '{args.room_id}' added.")
    return 0


def handle_rooms(ctx: ServiceContext, args: argparse.Namespace) -> int:
    rooms = ctx.room_repo.list_all()
    if not rooms:
        print("No rooms.")
    for room in rooms:
        print(f"{room.id}\t{room.name}\t{len(room.bookings)} booking(s)")
        for booking in room.bookings:
            print(f"  {booking.id}  {booking.start_time.isoformat()} -> {booking.end_time.isoformat()}")
    return 0


def handle_available(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = run_available_rooms(
        AvailableRoomsInput(start_time=args.start, end_time=args.end),
        repo=ctx.room_repo,
        clock=ctx.clock,
        notifier=ctx.notifier,
    )
    if not result.success:
        for err in result.errors:
            logger.error(err.message)
        return 1

    for room in result.rooms:
        print(f"{room.id}\t{room.name}")
    print(f"{len(result.rooms)} room(s) available.")
    return 0


def handle_book(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = run_book_room(
        BookRoomInput(room_id=args.room_id, start_time=args.start, end_time=args.end),
        repo=ctx.room_repo,
        clock=ctx.clock,
        notifier=ctx.notifier,
    )
    if not result.success or result.booking is None:
        for err in result.errors:
            logger.error(err.message)
        return 1

    print(f"Booked room '{args.room_id}'.")
    print(f"Booking id: {result.booking.id}")
    return 0


def handle_cancel(ctx: ServiceContext, args: argparse.Namespace) -> int:
    result = run_cancel(
        CancelBookingInput(booking_id=args.booking_id),
        repo=ctx.room_repo,
        clock=ctx.clock,
        notifier=ctx.notifier,
    )
    if not result.success:
        for err in result.errors:
            logger.error(err.message)
        return 1

    print(f"Booking {args.booking_id} cancelled.")
    return 0


HANDLERS = {
    "add-room": handle_add_room,
    "rooms": handle_rooms,
    "available": handle_available,
    "book": handle_book,
    "cancel": handle_cancel,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Roombook CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # migrate
    subparsers.add_parser("migrate", help="Apply pending database migrations")

    # add-room
    add_room_parser = subparsers.add_parser("add-room", help="Register a room")
    add_room_parser.add_argument("room_id", help="Stable room identifier")
    add_room_parser.add_argument("name", help="Display name")

    # rooms
    subparsers.add_parser("rooms", help="List rooms and their bookings")

    # available
    available_parser = subparsers.add_parser("available", help="List rooms free over an interval")
    available_parser.add_argument("start", type=parse_time, help="Start (ISO 8601)")
    available_parser.add_argument("end", type=parse_time, help="End (ISO 8601, exclusive)")

    # book
    book_parser = subparsers.add_parser("book", help="Book a room")
    book_parser.add_argument("room_id", help="Room to book")
    book_parser.add_argument("start", type=parse_time, help="Start (ISO 8601)")
    book_parser.add_argument("end", type=parse_time, help="End (ISO 8601, exclusive)")

    # cancel
    cancel_parser = subparsers.add_parser("cancel", help="Cancel a booking that has not started")
    cancel_parser.add_argument("booking_id", help="Booking to cancel")

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    # Storage is prepared (and migrated) for every command
    ctx = get_context(Settings())

    if args.command == "migrate":
        print("Migrations applied.")
        return 0

    return HANDLERS[args.command](ctx, args)


if __name__ == "__main__":
    sys.exit(main())
