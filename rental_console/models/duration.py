from dataclasses import dataclass, asdict
from datetime import datetime, timedelta

from ..utils.constants import DEFAULT_HOUR_TOLERANCE
from ..utils.dates import InstantLike, parse_instant, parse_tolerance

ONE_DAY = timedelta(days=1)


def days_label(days: int) -> str:
    """'1 day' / 'N days'."""
    return "1 day" if days == 1 else f"{days} days"


@dataclass(frozen=True)
class RentalDurationResult:
    """
    Billable day count for a rental window plus two display strings:
    what will be charged (formatted_total) and what actually elapsed (formatted_duration).
    """
    total_days: int
    formatted_total: str
    formatted_duration: str
    full_days: int
    remaining_hours: int
    remaining_minutes: int
    exceeds_tolerance: bool
    hour_tolerance: int

    @property
    def label(self) -> str:
        return f"{self.formatted_total} ({self.formatted_duration})"

    def to_dict(self) -> dict:
        d = asdict(self)
        d["label"] = self.label
        return d


@dataclass(frozen=True)
class RentalWindow:
    """
    Delivery/collection instants and the hour-tolerance policy for one booking.
    Built on demand from form values; never persisted by itself.
    """
    delivery: datetime
    collection: datetime
    hour_tolerance: int = DEFAULT_HOUR_TOLERANCE

    @classmethod
    def from_values(cls, delivery: InstantLike, collection: InstantLike, hour_tolerance=None) -> "RentalWindow":
        """Parse raw values; raises InvalidInputError."""
        return cls(
            delivery=parse_instant(delivery, "delivery time"),
            collection=parse_instant(collection, "collection time"),
            hour_tolerance=parse_tolerance(hour_tolerance),
        )

    @property
    def elapsed(self) -> timedelta:
        return self.collection - self.delivery

    def duration(self) -> RentalDurationResult:
        """
        Billable days = whole 24h periods, plus one more when the leftover whole hours
        exceed the tolerance (equal to the tolerance does not roll over).
        A collection at or before delivery is clamped to zero days.
        """
        elapsed = self.elapsed
        if elapsed <= timedelta(0):
            return RentalDurationResult(
                total_days=0,
                formatted_total=days_label(0),
                formatted_duration="0d 0h",
                full_days=0,
                remaining_hours=0,
                remaining_minutes=0,
                exceeds_tolerance=False,
                hour_tolerance=self.hour_tolerance,
            )

        full_days, remainder = divmod(elapsed, ONE_DAY)
        seconds = int(remainder.total_seconds())
        hours, seconds = divmod(seconds, 3600)
        minutes = seconds // 60

        exceeds = hours > self.hour_tolerance
        total = full_days + 1 if exceeds else full_days

        formatted_duration = f"{full_days}d {hours}h"
        if minutes:
            formatted_duration += f" {minutes}m"

        return RentalDurationResult(
            total_days=total,
            formatted_total=days_label(total),
            formatted_duration=formatted_duration,
            full_days=full_days,
            remaining_hours=hours,
            remaining_minutes=minutes,
            exceeds_tolerance=exceeds,
            hour_tolerance=self.hour_tolerance,
        )
