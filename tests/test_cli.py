"""Tests for the command-line front end."""

import re

import pytest

from seat_booking.cli import build_parser, main
from seat_booking.storage.blob_store import FileBlobStore
from seat_booking.config import settings

DAY = "2025-06-10"


@pytest.fixture
def run(tmp_path, capsys):
    def _run(*argv: str) -> tuple[int, str, str]:
        code = main(["--data-dir", str(tmp_path), *argv])
        out, err = capsys.readouterr()
        return code, out, err
    return _run


def _booking_id(output: str) -> str:
    return re.search(r"BOOK_\d+_[0-9A-Z]+", output).group(0)


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_slot_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["book", "alice", "A1", "--slot", "EVENING"])

    def test_book_defaults_to_full_day(self):
        args = build_parser().parse_args(["book", "alice", "A1"])
        assert args.slot == "FULL_DAY"
        assert args.date is None


class TestCommands:
    def test_book_and_list(self, run, tmp_path):
        code, out, _ = run("book", "alice", "c3", "--date", DAY)
        assert code == 0
        assert "C3" in out

        code, out, _ = run("reserved", "--date", DAY)
        assert code == 0
        assert out.split() == ["C3"]

        text = FileBlobStore(tmp_path).get(settings.storage.storage_key)
        assert ",alice,C3,2025-06-10,FULL_DAY," in text

    def test_duplicate_day_is_reported(self, run):
        run("book", "alice", "A1", "--date", DAY)
        code, _, err = run("book", "alice", "B1", "--date", DAY)
        assert code == 1
        assert "one booking per day" in err

    def test_cancel(self, run):
        _, out, _ = run("book", "alice", "A1", "--slot", "AM", "--date", DAY)
        booking_id = _booking_id(out)

        code, _, err = run("cancel", "bob", booking_id)
        assert code == 1
        assert "not found" in err

        code, _, _ = run("cancel", "alice", booking_id)
        assert code == 0
        _, out, _ = run("reserved", "--date", DAY)
        assert out.strip() == ""

    def test_rejects_short_user_id(self, run):
        code, _, err = run("book", "al", "A1", "--date", DAY)
        assert code == 1
        assert "at least" in err

    def test_rejects_unknown_seat(self, run):
        code, _, err = run("book", "alice", "Z9", "--date", DAY)
        assert code == 1
        assert "Unknown seat" in err

    def test_rejects_bad_date(self, run):
        code, _, err = run("reserved", "--date", "tomorrow")
        assert code == 1
        assert "YYYY-MM-DD" in err

    def test_seat_map(self, run):
        run("book", "alice", "A1", "--date", DAY)
        code, out, _ = run("seats", "--date", DAY)
        assert code == 0
        assert "A1*" in out
        assert "35 of 36 seats available" in out

    def test_user_history(self, run):
        run("book", "alice", "A1", "--date", DAY)
        code, out, _ = run("user", "alice")
        assert code == 0
        assert "1 booking(s) in history" in out

    def test_stats(self, run):
        run("book", "alice", "A1", "--date", DAY)
        _, out, _ = run("stats")
        assert "Total:     1" in out
        assert "Cancelled: 0" in out

    def test_export_then_import_elsewhere(self, run, tmp_path, capsys):
        run("book", "alice", "A1", "--date", DAY)
        export_path = tmp_path / "export.csv"
        code, _, _ = run("export", "--output", str(export_path))
        assert code == 0

        other_dir = tmp_path / "other"
        code = main(["--data-dir", str(other_dir), "import", str(export_path)])
        out, _ = capsys.readouterr()
        assert code == 0
        assert "Imported 1 new booking(s)" in out

        code = main(["--data-dir", str(other_dir), "import", str(export_path)])
        out, _ = capsys.readouterr()
        assert "Imported 0 new booking(s)" in out

    def test_import_missing_file(self, run, tmp_path):
        code, _, err = run("import", str(tmp_path / "nope.csv"))
        assert code == 1
        assert "File not found" in err

    def test_import_undecodable_file(self, run, tmp_path):
        bad = tmp_path / "bad.csv"
        bad.write_bytes(b"\xff\xfe\xfa")
        code, _, err = run("import", str(bad))
        assert code == 1
        assert "Could not read" in err

    def test_import_directory_instead_of_file(self, run, tmp_path):
        folder = tmp_path / "folder.csv"
        folder.mkdir()
        code, _, err = run("import", str(folder))
        assert code == 1
        assert "Could not read" in err

    def test_export_to_missing_directory(self, run, tmp_path):
        run("book", "alice", "A1", "--date", DAY)
        code, _, err = run("export", "--output", str(tmp_path / "missing" / "out.csv"))
        assert code == 1
        assert "Could not write" in err
