"""Display formatting for prices and dates (pt-AO conventions)."""

from datetime import date, datetime
from typing import Union

from turismo.config import get_settings

settings = get_settings()


def format_price(amount: float) -> str:
    """45000 -> '45 000 Kz' (no decimals, space as thousands separator)."""
    grouped = f"{round(amount):,}".replace(",", " ")
    return f"{grouped} {settings.CURRENCY_SYMBOL}"


def format_date(value: Union[date, datetime]) -> str:
    """Short numeric date, e.g. 01/06/2024."""
    return value.strftime("%d/%m/%Y")
