"""
Record codec: booking records to and from delimited text.

Format:
    line 1      fixed header, CSV_HEADERS joined with ','
    lines 2..n  one record per line, fields in header order

A field containing the delimiter or a quote is wrapped in quotes with
embedded quotes doubled. Records never carry line breaks (the model
flattens them), so every record occupies exactly one line. Absent
optional fields are written as empty fields and read back as None.

New columns are only ever appended to CSV_HEADERS, so text written by
an older version (fewer trailing columns) still decodes: missing
trailing columns are treated as absent. Rows that cannot be turned into
a valid BookingRecord are dropped and counted; decoding never raises.
"""

import csv
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from pydantic import ValidationError

from seat_booking.schemas.booking_schema import BookingRecord

logger = logging.getLogger(__name__)

DELIMITER = ","
QUOTE = '"'
LINE_SEPARATOR = "\n"

# Wire column name -> BookingRecord field. Append only.
COLUMNS: list[tuple[str, str]] = [
    ("id", "id"),
    ("userId", "user_id"),
    ("seatId", "seat_id"),
    ("date", "date"),
    ("timeSlot", "time_slot"),
    ("bookingTimestamp", "booking_timestamp"),
    ("status", "status"),
    ("userEmail", "user_email"),
    ("userName", "user_name"),
    ("specialRequests", "special_requests"),
    ("tableNumber", "table_number"),
    ("contactPhone", "contact_phone"),
    ("modifiedTimestamp", "modified_timestamp"),
    ("modifiedBy", "modified_by"),
]

CSV_HEADERS: list[str] = [column for column, _ in COLUMNS]

# id through status must be present on every row.
MIN_REQUIRED_COLUMNS = 7


@dataclass
class DecodeReport:
    """Outcome of a best-effort decode."""

    records: list[BookingRecord] = field(default_factory=list)
    dropped_rows: int = 0


def _escape_field(value: str) -> str:
    if DELIMITER in value or QUOTE in value:
        return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE
    return value


def _field_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def record_to_row(record: BookingRecord) -> str:
    """Serialize one record as a single delimited line."""
    return DELIMITER.join(
        _escape_field(_field_text(getattr(record, attr))) for _, attr in COLUMNS
    )


def row_to_record(values: list[str]) -> Optional[BookingRecord]:
    """Build a record from parsed field values, or None if the row is unusable."""
    if len(values) < MIN_REQUIRED_COLUMNS or len(values) > len(COLUMNS):
        return None

    data: dict[str, str] = {}
    for (_, attr), raw in zip(COLUMNS, values):
        if raw != "":
            data[attr] = raw

    try:
        return BookingRecord(**data)
    except ValidationError as exc:
        logger.debug("Rejected row %r: %s", values[:1], exc.errors()[0]["msg"])
        return None


def serialize(records: list[BookingRecord]) -> str:
    """Serialize records to text: header line followed by one line per record."""
    lines = [DELIMITER.join(CSV_HEADERS)]
    lines.extend(record_to_row(record) for record in records)
    return LINE_SEPARATOR.join(lines)


def _parse_line(line: str) -> list[str]:
    return next(csv.reader([line], delimiter=DELIMITER, quotechar=QUOTE, strict=False))


def decode(text: str) -> DecodeReport:
    """Decode text into records, counting rows that had to be dropped.

    Each physical line is parsed on its own, so an unbalanced quote can
    only spoil the row it appears on.
    """
    report = DecodeReport()
    if not text or not text.strip():
        return report

    header_seen = False
    for line_num, line in enumerate(text.split(LINE_SEPARATOR), start=1):
        line = line.rstrip("\r")
        if not line.strip():
            continue
        if not header_seen:
            header_seen = True
            continue

        try:
            values = _parse_line(line)
        except csv.Error as exc:
            logger.debug("Unparseable row on line %d: %s", line_num, exc)
            report.dropped_rows += 1
            continue

        record = row_to_record(values)
        if record is None:
            logger.debug("Dropped row on line %d", line_num)
            report.dropped_rows += 1
        else:
            report.records.append(record)

    if report.dropped_rows:
        logger.warning(
            "Dropped %d malformed booking row(s) while decoding", report.dropped_rows
        )
    return report


def deserialize(text: str) -> list[BookingRecord]:
    """Decode text into records, silently skipping malformed rows."""
    return decode(text).records
