"""
Pure query helpers over an in-memory list of booking records.

All functions are linear scans with no side effects; the booking
service passes its cache in and never relies on an index.
"""

from typing import Optional

from seat_booking.schemas.booking_schema import BookingRecord, BookingStatus, TimeSlot


def has_active_booking_for(records: list[BookingRecord], user_id: str, date: str) -> bool:
    """Check whether a user already holds an ACTIVE booking on a date."""
    return any(
        r.user_id == user_id and r.date == date and r.status == BookingStatus.ACTIVE
        for r in records
    )


def active_booking_for(
    records: list[BookingRecord], user_id: str, date: str
) -> Optional[BookingRecord]:
    """Return the user's ACTIVE booking on a date, if any."""
    for r in records:
        if r.user_id == user_id and r.date == date and r.status == BookingStatus.ACTIVE:
            return r
    return None


def active_bookings_on(records: list[BookingRecord], date: str) -> list[BookingRecord]:
    """All ACTIVE bookings on a date, in cache order."""
    return [r for r in records if r.date == date and r.status == BookingStatus.ACTIVE]


def reserved_seat_ids_on(records: list[BookingRecord], date: str) -> set[str]:
    """Seat ids claimed by at least one ACTIVE booking on a date."""
    return {r.seat_id for r in active_bookings_on(records, date)}


def bookings_for_user(records: list[BookingRecord], user_id: str) -> list[BookingRecord]:
    """Every booking a user ever made, whatever its status."""
    return [r for r in records if r.user_id == user_id]


def slots_overlap(existing: TimeSlot, requested: TimeSlot) -> bool:
    """Same half-day, or either side claims the whole day."""
    return (
        existing == requested
        or existing == TimeSlot.FULL_DAY
        or requested == TimeSlot.FULL_DAY
    )


def find_seat_conflict(
    records: list[BookingRecord], seat_id: str, date: str, time_slot: TimeSlot
) -> Optional[BookingRecord]:
    """Return the ACTIVE booking that blocks seat_id/date/time_slot, if any."""
    for r in active_bookings_on(records, date):
        if r.seat_id == seat_id and slots_overlap(r.time_slot, time_slot):
            return r
    return None
