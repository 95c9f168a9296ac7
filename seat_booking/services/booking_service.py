"""
Booking service: owns the session's record cache and keeps it in sync
with the blob store.

Every public operation first makes sure the cache has been loaded
(load once, then reuse until refresh()). Every mutation writes the full
cache back before reporting success ("auto-save"); if the write fails
the in-memory change is undone and the caller gets a failure result.

Expected domain outcomes (duplicate day, seat taken, booking not found)
are returned as result values, never raised.

Usage:
    service = BookingService(InMemoryBlobStore())
    result = service.create_booking("alice", "C3", TimeSlot.FULL_DAY, "2025-06-10")
    if result.success:
        service.cancel_booking(result.booking.id, "alice")
"""

import logging
from typing import Optional, Union

from seat_booking.config import settings
from seat_booking.seating import table_letter
from seat_booking.schemas.booking_schema import (
    BookingRecord,
    BookingResult,
    BookingStats,
    BookingStatus,
    CacheInfo,
    CancelResult,
    FailureReason,
    ImportResult,
    TimeSlot,
    UserData,
)
from seat_booking.storage import codec
from seat_booking.storage.blob_store import BlobStore, BlobStoreError
from seat_booking.storage.queries import (
    active_booking_for,
    bookings_for_user,
    find_seat_conflict,
    has_active_booking_for,
    reserved_seat_ids_on,
)
from seat_booking.utils import generate_booking_id, now_iso, today_iso

logger = logging.getLogger(__name__)

DUPLICATE_DAY_MESSAGE = (
    "You already have a booking for this date. Only one booking per day is allowed."
)
SEAT_CONFLICT_MESSAGE = "This seat is already booked for the selected time slot."
NOT_FOUND_MESSAGE = "Booking not found"
CREATE_FAILED_MESSAGE = "Failed to create booking"
CANCEL_FAILED_MESSAGE = "Failed to cancel booking"
IMPORT_FAILED_MESSAGE = "Failed to import bookings"


class BookingService:
    """Session-scoped booking cache backed by a single blob-store key.

    Construct one per session and hand it to whatever needs it. The
    service is not safe for concurrent use; callers issue one operation
    at a time.
    """

    def __init__(self, store: BlobStore, storage_key: Optional[str] = None) -> None:
        self.store = store
        self.storage_key = storage_key or settings.storage.storage_key
        self._records: list[BookingRecord] = []
        self._initialized = False

    # ------------------------------------------------------------------
    # Loading and saving
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Load the cache once. A missing or unreadable blob yields an empty cache."""
        if self._initialized:
            return
        self._records = self._load()
        self._initialized = True
        logger.info("Booking database initialized with %d records", len(self._records))

    def refresh(self) -> None:
        """Discard the cache and reload it from the store."""
        self._records = self._load()
        self._initialized = True
        logger.info("Cache refreshed with %d records", len(self._records))

    def _load(self) -> list[BookingRecord]:
        try:
            text = self.store.get(self.storage_key)
        except BlobStoreError:
            logger.exception("Error loading booking database, starting empty")
            return []
        if text is None:
            logger.info("No existing booking database found, starting empty")
            return []
        return codec.deserialize(text)

    def _save(self) -> None:
        """Write the full cache. Raises BlobStoreError on failure."""
        self.store.set(self.storage_key, codec.serialize(self._records))
        logger.debug("Auto-saved %d records", len(self._records))

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_booking(
        self,
        user_id: str,
        seat_id: str,
        time_slot: Union[TimeSlot, str],
        date: Optional[str] = None,
    ) -> BookingResult:
        """Reserve seat_id for user_id on date (default today)."""
        self.initialize()
        slot = TimeSlot(time_slot)
        booking_date = date or today_iso()

        if has_active_booking_for(self._records, user_id, booking_date):
            logger.info("Rejected booking for %s on %s: already booked", user_id, booking_date)
            return BookingResult(
                success=False,
                reason=FailureReason.DUPLICATE_DAY,
                error=DUPLICATE_DAY_MESSAGE,
            )

        if find_seat_conflict(self._records, seat_id, booking_date, slot) is not None:
            logger.info(
                "Rejected booking for %s: %s (%s) taken on %s",
                user_id, seat_id, slot.value, booking_date,
            )
            return BookingResult(
                success=False,
                reason=FailureReason.SEAT_CONFLICT,
                error=SEAT_CONFLICT_MESSAGE,
            )

        booking = BookingRecord(
            id=generate_booking_id(),
            user_id=user_id,
            seat_id=seat_id,
            date=booking_date,
            time_slot=slot,
            booking_timestamp=now_iso(),
            status=BookingStatus.ACTIVE,
            table_number=table_letter(seat_id),
        )

        self._records.append(booking)
        try:
            self._save()
        except BlobStoreError:
            self._records.pop()
            logger.exception("Auto-save failed, booking %s rolled back", booking.id)
            return BookingResult(
                success=False,
                reason=FailureReason.PERSISTENCE_FAILED,
                error=CREATE_FAILED_MESSAGE,
            )

        logger.info(
            "Booking created: %s -> %s (%s) on %s",
            user_id, seat_id, slot.value, booking_date,
        )
        return BookingResult(success=True, booking=booking.model_copy())

    def cancel_booking(self, booking_id: str, user_id: str) -> CancelResult:
        """Cancel a booking owned by user_id."""
        self.initialize()
        booking = next(
            (r for r in self._records if r.id == booking_id and r.user_id == user_id),
            None,
        )
        if booking is None:
            return CancelResult(
                success=False, reason=FailureReason.NOT_FOUND, error=NOT_FOUND_MESSAGE
            )

        previous = (booking.status, booking.modified_timestamp, booking.modified_by)
        booking.status = BookingStatus.CANCELLED
        booking.modified_timestamp = now_iso()
        booking.modified_by = user_id
        try:
            self._save()
        except BlobStoreError:
            booking.status, booking.modified_timestamp, booking.modified_by = previous
            logger.exception("Auto-save failed, cancellation of %s rolled back", booking_id)
            return CancelResult(
                success=False,
                reason=FailureReason.PERSISTENCE_FAILED,
                error=CANCEL_FAILED_MESSAGE,
            )

        logger.info("Booking cancelled: %s by %s", booking_id, user_id)
        return CancelResult(success=True)

    def import_bookings(self, text: str) -> ImportResult:
        """Merge decoded records whose id is not cached yet. Existing entries win."""
        self.initialize()
        existing_ids = {r.id for r in self._records}
        new_bookings: list[BookingRecord] = []
        for record in codec.deserialize(text):
            if record.id not in existing_ids:
                existing_ids.add(record.id)
                new_bookings.append(record)

        original_length = len(self._records)
        self._records.extend(new_bookings)
        try:
            self._save()
        except BlobStoreError:
            del self._records[original_length:]
            logger.exception("Auto-save failed, import rolled back")
            return ImportResult(
                success=False,
                reason=FailureReason.PERSISTENCE_FAILED,
                error=IMPORT_FAILED_MESSAGE,
            )

        logger.info("Imported %d new bookings", len(new_bookings))
        return ImportResult(success=True, imported=len(new_bookings))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_reserved_seats(self, date: Optional[str] = None) -> list[str]:
        """Seat ids with an ACTIVE booking on date (default today), sorted."""
        self.initialize()
        return sorted(reserved_seat_ids_on(self._records, date or today_iso()))

    def load_user_data(self, user_id: str) -> UserData:
        self.initialize()
        user_bookings = [r.model_copy() for r in bookings_for_user(self._records, user_id)]
        logger.info("Loaded user data for %s: %d bookings", user_id, len(user_bookings))
        return UserData(
            user_bookings=user_bookings,
            today_booking=self.get_user_today_booking(user_id),
            total_bookings=len(user_bookings),
        )

    def get_user_bookings(self, user_id: str) -> list[BookingRecord]:
        self.initialize()
        return [r.model_copy() for r in bookings_for_user(self._records, user_id)]

    def get_user_today_booking(self, user_id: str) -> Optional[BookingRecord]:
        self.initialize()
        booking = active_booking_for(self._records, user_id, today_iso())
        return booking.model_copy() if booking else None

    def stats(self) -> BookingStats:
        self.initialize()
        today = today_iso()
        active = [r for r in self._records if r.status == BookingStatus.ACTIVE]
        return BookingStats(
            total_bookings=len(self._records),
            active_bookings=len(active),
            today_bookings=sum(1 for r in active if r.date == today),
            cancelled_bookings=sum(
                1 for r in self._records if r.status == BookingStatus.CANCELLED
            ),
        )

    def export_csv(self) -> str:
        """Serialized form of the current cache, identical to what gets persisted."""
        self.initialize()
        return codec.serialize(self._records)

    def get_cache_info(self) -> CacheInfo:
        return CacheInfo(initialized=self._initialized, record_count=len(self._records))
