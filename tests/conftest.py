"""Shared test fixtures and helpers."""

from typing import Optional

import pytest

from seat_booking.schemas.booking_schema import BookingRecord, BookingStatus, TimeSlot
from seat_booking.services.booking_service import BookingService
from seat_booking.storage import codec
from seat_booking.storage.blob_store import BlobStoreError, InMemoryBlobStore

STORAGE_KEY = "test_bookings"
BOOKING_DATE = "2025-06-10"


class FlakyBlobStore(InMemoryBlobStore):
    """In-memory store whose reads and writes can be switched to fail."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        super().__init__(initial)
        self.fail_reads = False
        self.fail_writes = False
        self.writes = 0

    def get(self, key: str) -> Optional[str]:
        if self.fail_reads:
            raise BlobStoreError("disk unavailable")
        return super().get(key)

    def set(self, key: str, text: str) -> None:
        if self.fail_writes:
            raise BlobStoreError("disk full")
        self.writes += 1
        super().set(key, text)


@pytest.fixture
def store():
    return FlakyBlobStore()


@pytest.fixture
def service(store):
    return BookingService(store, storage_key=STORAGE_KEY)


def make_record(
    booking_id: str = "BOOK_1_AAAAAA",
    user_id: str = "alice",
    seat_id: str = "A1",
    date: str = BOOKING_DATE,
    time_slot: TimeSlot = TimeSlot.FULL_DAY,
    status: BookingStatus = BookingStatus.ACTIVE,
    **optional,
) -> BookingRecord:
    """Helper to create a BookingRecord with sensible defaults."""
    return BookingRecord(
        id=booking_id,
        user_id=user_id,
        seat_id=seat_id,
        date=date,
        time_slot=time_slot,
        booking_timestamp="2025-06-01T09:00:00+00:00",
        status=status,
        **optional,
    )


def seed_store(store: InMemoryBlobStore, records: list[BookingRecord]) -> None:
    """Write records to the store the way a previous session would have."""
    store.set(STORAGE_KEY, codec.serialize(records))
