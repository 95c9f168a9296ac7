"""
Seating layout: tables identified by a letter, seats numbered 1..N.

Seat ids are the table letter followed by the seat number ("A1".."F6").
The layout is derived from SeatingConfig and only used by front ends;
the booking service accepts any seat id it is given.
"""

from dataclasses import dataclass
from typing import Optional

from seat_booking.config import SeatingConfig, settings


@dataclass(frozen=True)
class TableRow:
    """Tables displayed side by side."""

    index: int
    table_letters: list[str]


@dataclass(frozen=True)
class SeatingLayout:
    table_letters: str
    seats_per_table: int
    tables_per_row: int

    @classmethod
    def from_config(cls, config: Optional[SeatingConfig] = None) -> "SeatingLayout":
        config = config or settings.seating
        return cls(
            table_letters=config.table_letters,
            seats_per_table=config.seats_per_table,
            tables_per_row=config.tables_per_row,
        )

    def seat_ids(self) -> list[str]:
        """Every seat in table order: A1..A6, B1..B6, ..."""
        return [
            f"{letter}{number}"
            for letter in self.table_letters
            for number in range(1, self.seats_per_table + 1)
        ]

    def is_valid_seat_id(self, seat_id: str) -> bool:
        if len(seat_id) != 2:
            return False
        letter, number = seat_id[0], seat_id[1]
        return (
            letter in self.table_letters
            and number.isdigit()
            and 1 <= int(number) <= self.seats_per_table
        )

    def table_rows(self) -> list[TableRow]:
        """Group tables into rows of tables_per_row; the last row may be short."""
        letters = list(self.table_letters)
        return [
            TableRow(index=i // self.tables_per_row, table_letters=letters[i:i + self.tables_per_row])
            for i in range(0, len(letters), self.tables_per_row)
        ]


def table_letter(seat_id: str) -> str:
    return seat_id[:1]


def available_seats(layout: SeatingLayout, reserved: list[str]) -> list[str]:
    """Seats in the layout that are not in reserved, in layout order."""
    taken = set(reserved)
    return [seat for seat in layout.seat_ids() if seat not in taken]
