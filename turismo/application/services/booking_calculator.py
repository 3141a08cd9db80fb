"""Booking calculator — night count and price for a stay. Pure, no I/O."""

import math
from datetime import date, datetime
from typing import Optional

import pytz

from turismo.application.services.formatting import format_price
from turismo.config import get_settings
from turismo.domain.schemas.reservation import BookingQuote

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)

SECONDS_PER_DAY = 24 * 60 * 60


def min_check_in() -> date:
    """Earliest check-in the form offers: today in the configured timezone."""
    return datetime.now(tz).date()


def nights(check_in: Optional[date], check_out: Optional[date]) -> int:
    """Number of nights between two dates.

    Returns 0 when either date is missing or check_out is not strictly after
    check_in. Callers treat 0 as an invalid range.
    """
    if check_in is None or check_out is None:
        return 0
    days = math.ceil((check_out - check_in).total_seconds() / SECONDS_PER_DAY)
    return days if days > 0 else 0


def total(night_count: int, price_per_night: float) -> float:
    """Stay price. Guests do not change it: the rate is per room-night."""
    return night_count * price_per_night


def quote(
    check_in: Optional[date],
    check_out: Optional[date],
    guests: int,
    price_per_night: float,
) -> BookingQuote:
    """Booking summary shown next to the form."""
    night_count = nights(check_in, check_out)
    amount = total(night_count, price_per_night)
    return BookingQuote(
        nights=night_count,
        price_per_night=price_per_night,
        total=amount,
        guests=guests,
        price_label=format_price(price_per_night),
        total_label=format_price(amount),
        min_check_in=min_check_in(),
        ready=night_count > 0,
    )
