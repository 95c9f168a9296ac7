"""
Command-line front end for the seat booking service.

Stores the booking table as a CSV file under --data-dir (default from
DATA_DIR). Every invocation is one session: it builds its own
BookingService, runs one command and exits.

Usage:
    python -m seat_booking.cli book alice C3 --slot FULL_DAY --date 2025-06-10
    python -m seat_booking.cli seats --date 2025-06-10
    python -m seat_booking.cli cancel alice BOOK_1749513600000_K3F9ZQ
    python -m seat_booking.cli export --output bookings.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from seat_booking.config import settings
from seat_booking.logging_context import session_scope
from seat_booking.schemas.booking_schema import BookingRecord, TimeSlot
from seat_booking.seating import SeatingLayout, available_seats
from seat_booking.services.booking_service import BookingService
from seat_booking.storage.blob_store import FileBlobStore
from seat_booking.utils import is_iso_date, normalize_user_id, validate_user_id

logger = logging.getLogger(__name__)

GREEN = "\033[92m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"


def _fail(message: str) -> int:
    sys.stderr.write(f"{RED}{message}{RESET}\n")
    return 1


def _format_booking(booking: BookingRecord) -> str:
    return (
        f"{booking.id}  {booking.date}  {booking.seat_id:<3} "
        f"{booking.time_slot.value:<8} {booking.status.value}"
    )


def _check_user(raw: str) -> tuple[Optional[str], Optional[str]]:
    error = validate_user_id(raw, settings.booking.min_user_id_length)
    if error:
        return None, error
    return normalize_user_id(raw), None


def _check_date(raw: Optional[str]) -> Optional[str]:
    if raw is not None and not is_iso_date(raw):
        return f"Invalid date {raw!r}, expected YYYY-MM-DD."
    return None


def cmd_book(service: BookingService, args: argparse.Namespace) -> int:
    user_id, error = _check_user(args.user)
    if error:
        return _fail(error)
    error = _check_date(args.date)
    if error:
        return _fail(error)
    seat_id = args.seat.upper()
    if not SeatingLayout.from_config().is_valid_seat_id(seat_id):
        return _fail(f"Unknown seat {args.seat!r}.")

    with session_scope(f"SESSION-{user_id}"):
        result = service.create_booking(user_id, seat_id, args.slot, args.date)
    if not result.success:
        return _fail(result.error or "Booking failed.")
    print(f"{GREEN}Booked {_format_booking(result.booking)}{RESET}")
    return 0


def cmd_cancel(service: BookingService, args: argparse.Namespace) -> int:
    user_id, error = _check_user(args.user)
    if error:
        return _fail(error)
    with session_scope(f"SESSION-{user_id}"):
        result = service.cancel_booking(args.booking_id, user_id)
    if not result.success:
        return _fail(result.error or "Cancellation failed.")
    print(f"{GREEN}Cancelled {args.booking_id}{RESET}")
    return 0


def cmd_reserved(service: BookingService, args: argparse.Namespace) -> int:
    error = _check_date(args.date)
    if error:
        return _fail(error)
    for seat_id in service.get_reserved_seats(args.date):
        print(seat_id)
    return 0


def cmd_seats(service: BookingService, args: argparse.Namespace) -> int:
    """Print the layout row by row, marking reserved seats."""
    error = _check_date(args.date)
    if error:
        return _fail(error)
    layout = SeatingLayout.from_config()
    reserved = service.get_reserved_seats(args.date)
    free = set(available_seats(layout, reserved))
    for row in layout.table_rows():
        cells = []
        for letter in row.table_letters:
            seats = [
                f"{seat}" if seat in free else f"{DIM}{seat}*{RESET}"
                for seat in layout.seat_ids()
                if seat[0] == letter
            ]
            cells.append(" ".join(seats))
        print("   |   ".join(cells))
    print(f"{len(free)} of {len(layout.seat_ids())} seats available (* = reserved)")
    return 0


def cmd_user(service: BookingService, args: argparse.Namespace) -> int:
    user_id, error = _check_user(args.user)
    if error:
        return _fail(error)
    data = service.load_user_data(user_id)
    if data.today_booking:
        print(f"Today: {_format_booking(data.today_booking)}")
    else:
        print("Today: no booking")
    print(f"{data.total_bookings} booking(s) in history")
    for booking in data.user_bookings:
        print(f"  {_format_booking(booking)}")
    return 0


def cmd_stats(service: BookingService, args: argparse.Namespace) -> int:
    stats = service.stats()
    print(f"Total:     {stats.total_bookings}")
    print(f"Active:    {stats.active_bookings}")
    print(f"Today:     {stats.today_bookings}")
    print(f"Cancelled: {stats.cancelled_bookings}")
    return 0


def cmd_import(service: BookingService, args: argparse.Namespace) -> int:
    path = Path(args.file)
    if not path.exists():
        return _fail(f"File not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return _fail(f"Could not read {path}: {exc}")
    result = service.import_bookings(text)
    if not result.success:
        return _fail(result.error or "Import failed.")
    print(f"{GREEN}Imported {result.imported} new booking(s){RESET}")
    return 0


def cmd_export(service: BookingService, args: argparse.Namespace) -> int:
    text = service.export_csv()
    if args.output:
        try:
            Path(args.output).write_text(text, encoding="utf-8", newline="")
        except OSError as exc:
            return _fail(f"Could not write {args.output}: {exc}")
        logger.info("Exported bookings to %s", args.output)
    else:
        sys.stdout.write(text + "\n")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Reserve seats at the shared tables."
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=settings.storage.data_dir,
        help="Directory holding the booking CSV (default: %(default)s).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging output.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    book = sub.add_parser("book", help="Reserve a seat.")
    book.add_argument("user")
    book.add_argument("seat")
    book.add_argument(
        "--slot",
        choices=[slot.value for slot in TimeSlot],
        default=TimeSlot.FULL_DAY.value,
    )
    book.add_argument("--date", default=None, help="YYYY-MM-DD (default: today).")
    book.set_defaults(handler=cmd_book)

    cancel = sub.add_parser("cancel", help="Cancel one of your bookings.")
    cancel.add_argument("user")
    cancel.add_argument("booking_id")
    cancel.set_defaults(handler=cmd_cancel)

    reserved = sub.add_parser("reserved", help="List reserved seats for a date.")
    reserved.add_argument("--date", default=None)
    reserved.set_defaults(handler=cmd_reserved)

    seats = sub.add_parser("seats", help="Show the seat map for a date.")
    seats.add_argument("--date", default=None)
    seats.set_defaults(handler=cmd_seats)

    user = sub.add_parser("user", help="Show a user's bookings.")
    user.add_argument("user")
    user.set_defaults(handler=cmd_user)

    stats = sub.add_parser("stats", help="Show booking counts.")
    stats.set_defaults(handler=cmd_stats)

    imp = sub.add_parser("import", help="Merge bookings from a CSV file.")
    imp.add_argument("file")
    imp.set_defaults(handler=cmd_import)

    export = sub.add_parser("export", help="Write all bookings as CSV.")
    export.add_argument("--output", default=None)
    export.set_defaults(handler=cmd_export)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    service = BookingService(FileBlobStore(args.data_dir))
    return args.handler(service, args)


if __name__ == "__main__":
    sys.exit(main())
