from .booking_service import BookingService
from .duration_service import calculate_rental_days, preview_duration
from .user_service import UserService

__all__ = [
    "BookingService",
    "UserService",
    "calculate_rental_days",
    "preview_duration",
]
