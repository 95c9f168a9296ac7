from seat_booking.services.booking_service import BookingService

__all__ = ["BookingService"]
