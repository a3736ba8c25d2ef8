# rental_console/utils/constants.py

"""
Global constants for roles, statuses, and rental-day policy.
These constants are imported by both models and services.
"""

# Instants are stored as ISO strings without seconds, like <input type="datetime-local">
DATETIME_FMT = "%Y-%m-%dT%H:%M"

# Rental-day hour tolerance (hours a collection may run late before an extra day is billed)
MIN_HOUR_TOLERANCE = 1
MAX_HOUR_TOLERANCE = 12
DEFAULT_HOUR_TOLERANCE = 1


class Role:
    ADMIN = "admin"
    STAFF = "staff"


class BookingStatus:
    DRAFT = "draft"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"

    ALL = (DRAFT, CONFIRMED, CANCELLED)


class BookingType:
    DIRECT = "direct"
    AGENCY = "agency"

    ALL = (DIRECT, AGENCY)


class PaymentStatus:
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"
