"""
Service-layer tests for booking create/edit/list/cancel: validation messages,
rental days recomputed at save time, and the stored field normalisation.
"""
import pytest

from rental_console.exceptions import BookingNotFoundError
from rental_console.services.booking_service import BookingService


def _create(form):
    ok, msg, bid = BookingService.create_booking(form)
    assert ok, msg
    return bid


def test_create_booking_persists_normalised_record(store, booking_form):
    bid = _create(booking_form)

    b = store.bookings[bid]
    assert b["booking_id"] == bid
    assert b["reference_code"].startswith("BK-")
    assert b["car_plate"] == "GX123AB"
    assert b["rental_days"] == 5
    assert b["rental_day_hour_tolerance"] == 1
    assert b["amount_total"] == 5000.0
    assert b["amount_paid"] == 1500.0
    assert b["status"] == "confirmed"
    assert b["created_at"] == b["updated_at"]


def test_rental_days_follow_tolerance(store, booking_form):
    booking_form.update(collection_datetime="2024-01-06T12:00", rental_day_hour_tolerance="2")
    bid = _create(booking_form)
    assert store.bookings[bid]["rental_days"] == 5

    booking_form.update(rental_day_hour_tolerance="1")
    bid = _create(booking_form)
    assert store.bookings[bid]["rental_days"] == 6


def test_missing_tolerance_defaults_to_one(store, booking_form):
    booking_form.pop("rental_day_hour_tolerance")
    bid = _create(booking_form)
    assert store.bookings[bid]["rental_day_hour_tolerance"] == 1


def test_offset_instants_are_stored_in_utc(store, booking_form):
    booking_form.update(delivery_datetime="2024-01-01T10:00+02:00",
                        collection_datetime="2024-01-03T10:00+02:00")
    bid = _create(booking_form)
    assert store.bookings[bid]["delivery_datetime"] == "2024-01-01T08:00"
    assert store.bookings[bid]["collection_datetime"] == "2024-01-03T08:00"


def test_total_amount_overrides_gross(store, booking_form):
    booking_form["total_rental_amount"] = "5400.50"
    bid = _create(booking_form)
    assert store.bookings[bid]["amount_total"] == 5400.5
    assert store.bookings[bid]["rental_price_gross"] == 5000.0


@pytest.mark.parametrize("changes, message", [
    ({"client_name": "  "}, "Client name is required"),
    ({"car_model": ""}, "Car model is required"),
    ({"collection_datetime": "2024-01-01T10:00"}, "Collection must be after delivery"),
    ({"collection_datetime": "2023-12-31T10:00"}, "Collection must be after delivery"),
    ({"rental_day_hour_tolerance": "0"}, "Minimum tolerance is 1 hour"),
    ({"rental_day_hour_tolerance": "13"}, "Maximum tolerance is 12 hours"),
    ({"booking_type": "agency"}, "Agency name is required for agency bookings"),
    ({"booking_type": "walk-in"}, "Invalid booking type"),
    ({"status": "archived"}, "Invalid status"),
    ({"amount_paid": "-10"}, "Amount paid cannot be negative"),
    ({"rental_price_gross": "lots"}, "Invalid amount for rental price gross"),
])
def test_create_booking_validation(store, booking_form, changes, message):
    booking_form.update(changes)
    ok, msg, bid = BookingService.create_booking(booking_form)
    assert not ok
    assert msg == message
    assert bid is None
    assert not store.bookings


def test_missing_delivery_is_rejected(store, booking_form):
    booking_form["delivery_datetime"] = ""
    ok, msg, _ = BookingService.create_booking(booking_form)
    assert not ok and "delivery" in msg.lower()


def test_agency_booking_keeps_agency_name(store, booking_form):
    booking_form.update(booking_type="agency", agency_name="Riviera Travel")
    bid = _create(booking_form)
    assert store.bookings[bid]["agency_name"] == "Riviera Travel"


def test_update_booking_recomputes_rental_days(store, booking_form):
    bid = _create(booking_form)
    ref = store.bookings[bid]["reference_code"]

    booking_form.update(collection_datetime="2024-01-08T13:00", rental_day_hour_tolerance="2")
    ok, msg = BookingService.update_booking(bid, booking_form)
    assert ok, msg
    b = store.bookings[bid]
    assert b["rental_days"] == 8
    assert b["rental_day_hour_tolerance"] == 2
    assert b["reference_code"] == ref


def test_update_booking_invalid_keeps_record(store, booking_form):
    bid = _create(booking_form)
    booking_form["rental_day_hour_tolerance"] = "20"
    ok, msg = BookingService.update_booking(bid, booking_form)
    assert not ok and msg == "Maximum tolerance is 12 hours"
    assert store.bookings[bid]["rental_day_hour_tolerance"] == 1


def test_update_unknown_booking_raises(booking_form):
    with pytest.raises(BookingNotFoundError):
        BookingService.update_booking("nope", booking_form)


def test_get_booking_raises_when_missing():
    with pytest.raises(BookingNotFoundError):
        BookingService.get_booking("missing")


def test_list_bookings_filters_and_orders(booking_form):
    first = _create(booking_form)
    booking_form.update(client_name="James Carter", car_plate="FY987ZZ",
                        delivery_datetime="2024-02-01T10:00", collection_datetime="2024-02-03T10:00",
                        status="draft")
    second = _create(booking_form)

    assert [b["booking_id"] for b in BookingService.list_bookings()] == [second, first]
    assert [b["booking_id"] for b in BookingService.list_bookings(status="draft")] == [second]
    assert [b["booking_id"] for b in BookingService.list_bookings(search="rossi")] == [first]
    assert [b["booking_id"] for b in BookingService.list_bookings(search="fy987")] == [second]
    assert BookingService.list_bookings(search="nobody") == []


def test_cancel_booking_once(store, booking_form):
    bid = _create(booking_form)
    ok, msg = BookingService.cancel_booking(bid)
    assert ok and store.bookings[bid]["status"] == "cancelled"

    ok, msg = BookingService.cancel_booking(bid)
    assert not ok and msg == "Booking already cancelled"

    ok, msg = BookingService.cancel_booking("missing")
    assert not ok and msg == "Booking not found"
