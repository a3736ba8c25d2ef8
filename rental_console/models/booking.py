from dataclasses import dataclass
from typing import Optional

from .duration import RentalWindow
from ..utils.constants import BookingStatus, BookingType, DEFAULT_HOUR_TOLERANCE, PaymentStatus


@dataclass
class Booking:
    """
    Rich view over a stored booking dict. The Store keeps raw dicts; services wrap
    them to get at the rental window and the payment figures.
    """
    booking_id: str
    reference_code: str
    client_name: str
    car_model: str
    delivery_datetime: str
    collection_datetime: str
    booking_type: str = BookingType.DIRECT
    agency_name: str = ""
    client_email: str = ""
    client_phone: str = ""
    car_plate: str = ""
    rental_day_hour_tolerance: int = DEFAULT_HOUR_TOLERANCE
    rental_days: int = 0
    rental_price_gross: float = 0.0
    amount_total: float = 0.0
    amount_paid: float = 0.0
    security_deposit_amount: float = 0.0
    status: str = BookingStatus.DRAFT

    @classmethod
    def from_dict(cls, d: Optional[dict]) -> Optional["Booking"]:
        if not d:
            return None
        return cls(
            booking_id=d.get("booking_id"),
            reference_code=d.get("reference_code") or "",
            client_name=d.get("client_name") or "",
            car_model=d.get("car_model") or "",
            delivery_datetime=d.get("delivery_datetime"),
            collection_datetime=d.get("collection_datetime"),
            booking_type=d.get("booking_type") or BookingType.DIRECT,
            agency_name=d.get("agency_name") or "",
            client_email=d.get("client_email") or "",
            client_phone=d.get("client_phone") or "",
            car_plate=d.get("car_plate") or "",
            rental_day_hour_tolerance=int(d.get("rental_day_hour_tolerance") or DEFAULT_HOUR_TOLERANCE),
            rental_days=int(d.get("rental_days") or 0),
            rental_price_gross=float(d.get("rental_price_gross") or 0.0),
            amount_total=float(d.get("amount_total") or 0.0),
            amount_paid=float(d.get("amount_paid") or 0.0),
            security_deposit_amount=float(d.get("security_deposit_amount") or 0.0),
            status=d.get("status") or BookingStatus.DRAFT,
        )

    def window(self) -> RentalWindow:
        """Raises InvalidInputError if the stored instants are unusable."""
        return RentalWindow.from_values(
            self.delivery_datetime, self.collection_datetime, self.rental_day_hour_tolerance
        )

    @property
    def remaining_amount(self) -> float:
        return round(max(self.amount_total - self.amount_paid, 0.0), 2)

    @property
    def payment_status(self) -> str:
        if self.amount_paid <= 0:
            return PaymentStatus.UNPAID
        if self.remaining_amount > 0:
            return PaymentStatus.PARTIAL
        return PaymentStatus.PAID
