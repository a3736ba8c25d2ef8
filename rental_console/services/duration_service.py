"""Rental-day calculation used by the booking form preview and the booking service."""

import logging
from typing import Optional

from ..exceptions import InvalidInputError
from ..models.duration import RentalDurationResult, RentalWindow
from ..utils.dates import InstantLike

logger = logging.getLogger(__name__)


def calculate_rental_days(delivery: InstantLike, collection: InstantLike,
                          hour_tolerance=None) -> RentalDurationResult:
    """
    Compute billable rental days for a delivery/collection pair.

    Raises InvalidInputError when either timestamp is missing or unparseable,
    or when the tolerance is not a whole number of hours in [1, 12].
    """
    return RentalWindow.from_values(delivery, collection, hour_tolerance).duration()


def preview_duration(delivery: InstantLike, collection: InstantLike,
                     hour_tolerance=None) -> Optional[RentalDurationResult]:
    """
    Result for the booking form's live preview line, or None when the inputs
    cannot be used, so the form never shows stale or zero data.
    """
    try:
        return calculate_rental_days(delivery, collection, hour_tolerance)
    except InvalidInputError as e:
        logger.debug("No rental-day preview: %s", e)
        return None
