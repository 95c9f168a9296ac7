"""Tests for the seating layout helpers."""

from seat_booking.config import SeatingConfig
from seat_booking.seating import SeatingLayout, available_seats, table_letter


def _layout(letters: str = "ABCDEF", seats: int = 6, per_row: int = 3) -> SeatingLayout:
    return SeatingLayout(table_letters=letters, seats_per_table=seats, tables_per_row=per_row)


class TestSeatIds:
    def test_default_layout_has_36_seats(self):
        seat_ids = SeatingLayout.from_config(SeatingConfig()).seat_ids()
        assert len(seat_ids) == 36
        assert seat_ids[0] == "A1"
        assert seat_ids[-1] == "F6"

    def test_table_order(self):
        assert _layout("AB", 2).seat_ids() == ["A1", "A2", "B1", "B2"]

    def test_valid_seat_ids(self):
        layout = _layout()
        assert layout.is_valid_seat_id("A1")
        assert layout.is_valid_seat_id("F6")

    def test_invalid_seat_ids(self):
        layout = _layout()
        for seat_id in ["", "A", "A0", "A7", "G1", "a1", "AA", "A10"]:
            assert not layout.is_valid_seat_id(seat_id), seat_id

    def test_table_letter(self):
        assert table_letter("C3") == "C"


class TestTableRows:
    def test_full_rows(self):
        rows = _layout("ABCDEF", per_row=3).table_rows()
        assert [row.table_letters for row in rows] == [["A", "B", "C"], ["D", "E", "F"]]
        assert [row.index for row in rows] == [0, 1]

    def test_short_last_row(self):
        rows = _layout("ABCDE", per_row=2).table_rows()
        assert [row.table_letters for row in rows] == [["A", "B"], ["C", "D"], ["E"]]


class TestAvailableSeats:
    def test_excludes_reserved(self):
        layout = _layout("A", 3)
        assert available_seats(layout, ["A2"]) == ["A1", "A3"]

    def test_ignores_unknown_reserved_ids(self):
        layout = _layout("A", 2)
        assert available_seats(layout, ["Z9"]) == ["A1", "A2"]
