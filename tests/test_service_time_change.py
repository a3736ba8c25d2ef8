"""
Client time changes on the booking summary: edited times are accepted unless they
bill more rental days than the booking was priced for.
"""
import pytest

from rental_console.exceptions import (
    BookingNotFoundError,
    ExtraRentalDayError,
    InvalidDateRangeError,
    InvalidInputError,
)
from rental_console.services.booking_service import BookingService


@pytest.fixture
def booking_id(booking_form):
    # 2024-01-01 10:00 -> 2024-01-06 10:00, 1h tolerance: 5 rental days
    ok, msg, bid = BookingService.create_booking(booking_form)
    assert ok, msg
    return bid


def test_later_collection_within_tolerance_is_fine(booking_id):
    check = BookingService.check_time_change(booking_id, "10:00", "11:00")
    assert check["duration"].total_days == 5
    assert check["booked_days"] == 5
    assert not check["exceeds_booked_days"]
    assert check["collection_datetime"] == "2024-01-06T11:00"


def test_collection_past_tolerance_exceeds_booked_days(booking_id):
    check = BookingService.check_time_change(booking_id, "10:00", "12:00")
    assert check["duration"].total_days == 6
    assert check["exceeds_booked_days"]


def test_submit_refuses_extra_day_and_keeps_times(store, booking_id):
    with pytest.raises(ExtraRentalDayError):
        BookingService.submit_time_change(booking_id, "10:00", "12:00")
    assert store.bookings[booking_id]["collection_datetime"] == "2024-01-06T10:00"


def test_submit_saves_accepted_times(store, booking_id):
    check = BookingService.submit_time_change(booking_id, "09:30", "11:00")
    b = store.bookings[booking_id]
    assert b["delivery_datetime"] == "2024-01-01T09:30"
    assert b["collection_datetime"] == "2024-01-06T11:00"
    assert check["duration"].formatted_duration == "5d 1h 30m"


def test_earlier_delivery_can_add_a_day(booking_id):
    check = BookingService.check_time_change(booking_id, "07:00", "10:00")
    assert check["exceeds_booked_days"]


@pytest.mark.parametrize("delivery_time, collection_time", [
    ("25:00", "10:00"),
    ("10:00", ""),
    ("10", "10:00"),
    ("10:61", "10:00"),
])
def test_bad_times_rejected(booking_id, delivery_time, collection_time):
    with pytest.raises(InvalidInputError):
        BookingService.check_time_change(booking_id, delivery_time, collection_time)


def test_same_day_inversion_rejected(store, booking_form):
    booking_form.update(collection_datetime="2024-01-01T18:00")
    ok, msg, bid = BookingService.create_booking(booking_form)
    assert ok, msg
    with pytest.raises(InvalidDateRangeError):
        BookingService.submit_time_change(bid, "12:00", "09:00")


def test_unknown_booking():
    with pytest.raises(BookingNotFoundError):
        BookingService.check_time_change("missing", "10:00", "10:00")


def test_cancelled_booking_times_are_locked(store, booking_id):
    ok, msg = BookingService.cancel_booking(booking_id)
    assert ok, msg

    with pytest.raises(InvalidInputError) as exc:
        BookingService.submit_time_change(booking_id, "09:00", "09:30")
    assert exc.value.message == "Booking is cancelled"

    b = store.bookings[booking_id]
    assert b["status"] == "cancelled"
    assert b["delivery_datetime"] == "2024-01-01T10:00"
    assert b["collection_datetime"] == "2024-01-06T10:00"
