"""Booking-related service layer: create, edit, list, cancel, time changes and summaries."""

import logging
import math
import uuid
from datetime import timezone
from typing import Optional

from ..exceptions import (
    BookingNotFoundError,
    ExtraRentalDayError,
    InvalidDateRangeError,
    InvalidInputError,
)
from ..models.booking import Booking
from ..utils.constants import DATETIME_FMT, BookingStatus, BookingType
from ..utils.dates import combine_time, parse_instant, parse_tolerance
from .common import _clean, _lc, _now, _store, round2, to_float_safe
from .duration_service import calculate_rental_days

logger = logging.getLogger(__name__)

MONEY_FIELDS = ("rental_price_gross", "total_rental_amount", "amount_paid", "security_deposit_amount")


def _to_stored(dt) -> str:
    """Aware datetime -> 'YYYY-MM-DDTHH:MM' in UTC."""
    return dt.astimezone(timezone.utc).strftime(DATETIME_FMT)


def _new_reference() -> str:
    return "BK-" + uuid.uuid4().hex[:8].upper()


def _money(form, name: str) -> float:
    raw = _clean(form.get(name))
    if not raw:
        return 0.0
    value = to_float_safe(raw)
    if value is None or not math.isfinite(value):
        raise InvalidInputError(f"Invalid amount for {name.replace('_', ' ')}")
    if value < 0:
        raise InvalidInputError(f"{name.replace('_', ' ').capitalize()} cannot be negative")
    return round2(value)


class BookingService:
    """
    Booking admin operations behind the console forms.
    Form workflows return (ok, message, ...) tuples; lookups raise typed errors.
    """

    @staticmethod
    def _clean_form(form) -> dict:
        """
        Validate raw form values and return the normalised fields to persist.
        Raises InvalidInputError (or a subclass) with a user-facing message.
        """
        client_name = _clean(form.get("client_name"))
        car_model = _clean(form.get("car_model"))
        if not client_name:
            raise InvalidInputError("Client name is required")
        if not car_model:
            raise InvalidInputError("Car model is required")

        booking_type = _lc(_clean(form.get("booking_type"))) or BookingType.DIRECT
        if booking_type not in BookingType.ALL:
            raise InvalidInputError("Invalid booking type")
        agency_name = _clean(form.get("agency_name"))
        if booking_type == BookingType.AGENCY and not agency_name:
            raise InvalidInputError("Agency name is required for agency bookings")

        status = _lc(_clean(form.get("status"))) or BookingStatus.DRAFT
        if status not in BookingStatus.ALL:
            raise InvalidInputError("Invalid status")

        delivery = parse_instant(form.get("delivery_datetime"), "delivery time")
        collection = parse_instant(form.get("collection_datetime"), "collection time")
        if collection <= delivery:
            raise InvalidDateRangeError()
        tolerance = parse_tolerance(form.get("rental_day_hour_tolerance"))

        money = {name: _money(form, name) for name in MONEY_FIELDS}
        total_raw = _clean(form.get("total_rental_amount"))
        amount_total = money["total_rental_amount"] if total_raw else money["rental_price_gross"]

        duration = calculate_rental_days(delivery, collection, tolerance)

        return {
            "reference_code": _clean(form.get("reference_code")),
            "booking_type": booking_type,
            "agency_name": agency_name if booking_type == BookingType.AGENCY else "",
            "client_name": client_name,
            "client_email": _clean(form.get("client_email")),
            "client_phone": _clean(form.get("client_phone")),
            "car_model": car_model,
            "car_plate": _clean(form.get("car_plate")).upper(),
            "delivery_datetime": _to_stored(delivery),
            "collection_datetime": _to_stored(collection),
            "rental_day_hour_tolerance": tolerance,
            "rental_days": duration.total_days,
            "rental_price_gross": money["rental_price_gross"],
            "amount_total": amount_total,
            "amount_paid": money["amount_paid"],
            "security_deposit_amount": money["security_deposit_amount"],
            "status": status,
        }

    @staticmethod
    def create_booking(form):
        """
        Validate and persist a new booking.

        Returns:
            (ok: bool, message: str, booking_id: Optional[str])
        """
        try:
            data = BookingService._clean_form(form)
        except InvalidInputError as e:
            return False, e.message, None

        now = _now().isoformat(timespec="seconds")
        data["reference_code"] = data["reference_code"] or _new_reference()
        data["created_at"] = now
        data["updated_at"] = now

        bid = _store().create_booking(data)
        logger.info("Booking %s created (%s, %d rental days)", data["reference_code"], bid, data["rental_days"])
        return True, "Booking created", bid

    @staticmethod
    def update_booking(booking_id: str, form):
        """
        Validate and save edits to an existing booking. Returns (ok, message);
        raises BookingNotFoundError for an unknown ID.
        """
        current = BookingService.get_booking(booking_id)

        try:
            data = BookingService._clean_form(form)
        except InvalidInputError as e:
            return False, e.message

        data["reference_code"] = data["reference_code"] or current.get("reference_code") or _new_reference()
        data["updated_at"] = _now().isoformat(timespec="seconds")
        _store().update_booking(booking_id, data)
        logger.info("Booking %s updated", data["reference_code"])
        return True, "Booking updated"

    @staticmethod
    def get_booking(booking_id: str) -> dict:
        b = _store().get_booking(booking_id)
        if not b:
            raise BookingNotFoundError()
        return b

    @staticmethod
    def list_bookings(status: Optional[str] = None, search: Optional[str] = None):
        """Bookings filtered by status and a free-text search, newest delivery first."""
        res = list(_store().bookings.values())

        if status:
            st = _lc(status.strip())
            res = [b for b in res if _lc(b.get("status")) == st]

        kw = _lc(search).strip()
        if kw:
            def match(b):
                return any(kw in _lc(b.get(f)) for f in ("reference_code", "client_name", "car_plate"))
            res = [b for b in res if match(b)]

        res.sort(key=lambda b: b.get("delivery_datetime") or "", reverse=True)
        return res

    @staticmethod
    def cancel_booking(booking_id: str):
        """Mark a booking as cancelled. Returns (ok, message)."""
        store = _store()
        b = store.get_booking(booking_id)
        if not b:
            return False, "Booking not found"
        if b.get("status") == BookingStatus.CANCELLED:
            return False, "Booking already cancelled"

        store.update_booking(booking_id, {
            "status": BookingStatus.CANCELLED,
            "updated_at": _now().isoformat(timespec="seconds"),
        })
        logger.info("Booking %s cancelled", b.get("reference_code"))
        return True, "Booking cancelled"

    # --------------- Client time changes ---------------
    @staticmethod
    def check_time_change(booking_id: str, delivery_time: str, collection_time: str) -> dict:
        """
        Recompute the rental window with new times of day ('HH:MM') on the booked dates.
        `exceeds_booked_days` is True when the edited window bills more days than the
        booking was priced for. Raises BookingNotFoundError, or InvalidInputError for
        bad times and cancelled bookings.
        """
        booking = Booking.from_dict(BookingService.get_booking(booking_id))
        if booking.status == BookingStatus.CANCELLED:
            raise InvalidInputError("Booking is cancelled")
        window = booking.window()

        delivery = combine_time(window.delivery, delivery_time, "delivery time")
        collection = combine_time(window.collection, collection_time, "collection time")
        result = calculate_rental_days(delivery, collection, booking.rental_day_hour_tolerance)

        return {
            "delivery_datetime": _to_stored(delivery),
            "collection_datetime": _to_stored(collection),
            "duration": result,
            "booked_days": booking.rental_days,
            "exceeds_booked_days": result.total_days > booking.rental_days,
        }

    @staticmethod
    def submit_time_change(booking_id: str, delivery_time: str, collection_time: str) -> dict:
        """
        Persist edited times unless they add a billable day.
        Raises ExtraRentalDayError in that case; InvalidDateRangeError if collection
        would no longer follow delivery.
        """
        check = BookingService.check_time_change(booking_id, delivery_time, collection_time)
        if check["collection_datetime"] <= check["delivery_datetime"]:
            raise InvalidDateRangeError()
        if check["exceeds_booked_days"]:
            logger.warning("Time change refused for booking %s: %s exceeds %d booked days",
                           booking_id, check["duration"].formatted_total, check["booked_days"])
            raise ExtraRentalDayError()

        _store().update_booking(booking_id, {
            "delivery_datetime": check["delivery_datetime"],
            "collection_datetime": check["collection_datetime"],
            "updated_at": _now().isoformat(timespec="seconds"),
        })
        return check

    # --------------- Summary ---------------
    @staticmethod
    def summary(booking_id: str) -> dict:
        """Payment figures plus rental duration for the booking summary page."""
        raw = BookingService.get_booking(booking_id)
        booking = Booking.from_dict(raw)

        try:
            duration = booking.window().duration()
        except InvalidInputError:
            duration = None

        return {
            "booking": raw,
            "duration": duration,
            "rental_day_warning": bool(duration and duration.exceeds_tolerance),
            "amount_total": round2(booking.amount_total),
            "amount_paid": round2(booking.amount_paid),
            "remaining_amount": booking.remaining_amount,
            "security_deposit_amount": round2(booking.security_deposit_amount),
            "payment_status": booking.payment_status,
        }
