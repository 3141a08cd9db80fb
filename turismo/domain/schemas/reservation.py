"""Pydantic schemas for Reservation (reserva) and the booking form."""

from datetime import date, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from turismo.domain.schemas.auth import UserRead
from turismo.domain.schemas.base import CamelModel
from turismo.domain.schemas.catalog import HotelRead


class ReservationStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class ReservationCreate(CamelModel):
    hotel_id: str
    check_in: date
    check_out: date
    guests: int
    # Computed client-side and trusted by the backend as sent
    total_price: float


class ReservationRead(CamelModel):
    id: str
    user_id: Optional[str] = None
    hotel_id: str
    check_in: date
    check_out: date
    guests: int = 1
    total_price: float
    # raw server value; unknown statuses must survive parsing
    status: str
    user: Optional[UserRead] = None
    hotel: Optional[HotelRead] = None
    created_at: Optional[datetime] = None


class StatusUpdate(BaseModel):
    status: ReservationStatus


class BookingFormUpdate(CamelModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: Optional[int] = None


class BookingQuote(CamelModel):
    nights: int
    price_per_night: float
    total: float
    guests: int
    price_label: str
    total_label: str
    min_check_in: date
    ready: bool


class StatusBadge(CamelModel):
    label: str
    severity: str
    variant: str


class ReservationRow(CamelModel):
    reservation: ReservationRead
    nights: int
    check_in_label: str
    check_out_label: str
    total_label: str
    badge: StatusBadge
    actions: list[ReservationStatus]


class BookingFormRead(CamelModel):
    hotel: HotelRead
    phase: str
    failure: Optional[str] = None
    error: Optional[str] = None
    message: Optional[str] = None
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: int
    quote: BookingQuote
