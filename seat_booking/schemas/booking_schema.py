"""Booking record and operation result models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from seat_booking.utils import is_iso_date


class TimeSlot(str, Enum):
    """Portion of a date a seat is claimed for."""
    AM = "AM"
    PM = "PM"
    FULL_DAY = "FULL_DAY"


class BookingStatus(str, Enum):
    """Booking lifecycle. COMPLETED is accepted on decode but never produced."""
    ACTIVE = "ACTIVE"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class FailureReason(str, Enum):
    """Machine-readable cause attached to a failed operation."""
    DUPLICATE_DAY = "duplicate_day"
    SEAT_CONFLICT = "seat_conflict"
    NOT_FOUND = "not_found"
    PERSISTENCE_FAILED = "persistence_failed"


class BookingRecord(BaseModel):
    """A single seat reservation, the only persisted entity."""

    id: str = Field(min_length=1)
    user_id: str = Field(min_length=1)
    seat_id: str = Field(min_length=1)
    date: str
    time_slot: TimeSlot
    booking_timestamp: str
    status: BookingStatus
    user_email: Optional[str] = None
    user_name: Optional[str] = None
    special_requests: Optional[str] = None
    table_number: Optional[str] = None
    contact_phone: Optional[str] = None
    modified_timestamp: Optional[str] = None
    modified_by: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def flatten_line_breaks(cls, value):
        # Records are stored one per line.
        if isinstance(value, str) and ("\n" in value or "\r" in value):
            return " ".join(value.splitlines())
        return value

    @field_validator("date")
    @classmethod
    def check_date(cls, value: str) -> str:
        if not is_iso_date(value):
            raise ValueError(f"date must be YYYY-MM-DD, got {value!r}")
        return value


class BookingResult(BaseModel):
    """Result of create_booking."""
    success: bool
    booking: Optional[BookingRecord] = None
    reason: Optional[FailureReason] = None
    error: Optional[str] = None


class CancelResult(BaseModel):
    """Result of cancel_booking."""
    success: bool
    reason: Optional[FailureReason] = None
    error: Optional[str] = None


class ImportResult(BaseModel):
    """Result of import_bookings."""
    success: bool
    imported: int = 0
    reason: Optional[FailureReason] = None
    error: Optional[str] = None


class UserData(BaseModel):
    """Everything the front end shows for a signed-in user."""
    user_bookings: list[BookingRecord] = Field(default_factory=list)
    today_booking: Optional[BookingRecord] = None
    total_bookings: int = 0


class BookingStats(BaseModel):
    """Counts over the whole cache."""
    total_bookings: int = 0
    active_bookings: int = 0
    today_bookings: int = 0
    cancelled_bookings: int = 0


class CacheInfo(BaseModel):
    initialized: bool
    record_count: int
