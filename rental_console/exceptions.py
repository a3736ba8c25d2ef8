"""
Custom exception classes for the rental console.

These exceptions provide precise error types that controllers can catch
to render friendly messages instead of generic 500 errors.
"""


class InvalidInputError(Exception):
    """Raised when a delivery/collection timestamp or the hour tolerance cannot be used."""

    def __init__(self, message: str = "Error: invalid rental window input") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class InvalidDateRangeError(InvalidInputError):
    """Raised when a booking's collection is not after its delivery."""

    def __init__(self, message: str = "Collection must be after delivery") -> None:
        super().__init__(message)


class InvalidToleranceError(InvalidInputError):
    """Raised when the rental-day hour tolerance is outside 1-12 hours."""

    def __init__(self, message: str = "Tolerance must be between 1 and 12 hours") -> None:
        super().__init__(message)


class BookingNotFoundError(Exception):
    """Raised when a booking ID cannot be found in the store."""

    def __init__(self, message: str = "Error: booking not found") -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message


class ExtraRentalDayError(Exception):
    """Raised when edited delivery/collection times would add a billable day."""

    def __init__(self, message: str = ("The selected collection time would incur additional "
                                       "rental day charges. Please contact your Reservation Manager.")) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:  # pragma: no cover
        return self.message
