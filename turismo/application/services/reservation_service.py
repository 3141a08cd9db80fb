"""Reservation service — booking form submission and the user's own reservations.

A ReservationForm is one booking form instance for one hotel:

    IDLE -> VALIDATING -> SUBMITTING -> SUCCEEDED | FAILED

Validation is local and synchronous; only SUBMITTING touches the network,
and a form never has more than one request in flight.
"""

from datetime import date
from enum import Enum
from typing import Awaitable, Callable, Optional

import structlog

from turismo.application.services import booking_calculator
from turismo.application.services.reservation_view import can_transition
from turismo.application.services.session_store import SessionStore
from turismo.config import get_settings
from turismo.core.exceptions import (
    AppError,
    AuthRequiredError,
    EntityNotFoundException,
    ForbiddenException,
    InvalidDateRangeError,
    InvalidGuestCountError,
    RemoteAPIError,
    RequestTimeoutError,
    SubmissionError,
    SubmissionInProgressError,
)
from turismo.domain.schemas.catalog import HotelRead
from turismo.domain.schemas.reservation import (
    BookingFormRead,
    BookingQuote,
    ReservationCreate,
    ReservationRead,
    ReservationStatus,
)
from turismo.infrastructure.tourism_api import TourismAPIClient

settings = get_settings()
logger = structlog.get_logger(__name__)

OnCreated = Callable[[ReservationRead], Awaitable[None]]


class Phase(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureReason(str, Enum):
    AUTH_REQUIRED = "AuthRequired"
    INVALID_DATE_RANGE = "InvalidDateRange"
    INVALID_GUEST_COUNT = "InvalidGuestCount"
    SUBMISSION_ERROR = "SubmissionError"
    TIMEOUT = "Timeout"


class ReservationForm:
    """Booking form for a single hotel."""

    def __init__(
        self,
        hotel: HotelRead,
        session: SessionStore,
        api: TourismAPIClient,
        on_created: Optional[OnCreated] = None,
    ):
        self.hotel = hotel
        self.session = session
        self.api = api
        self.on_created = on_created
        self.phase = Phase.IDLE
        self.failure: Optional[FailureReason] = None
        self.error: Optional[str] = None
        self.message: Optional[str] = None
        self.closed = False
        self.reset()

    def reset(self) -> None:
        self.check_in: Optional[date] = None
        self.check_out: Optional[date] = None
        self.guests: int = 1

    def update(self, **changes) -> None:
        """
        Apply the fields the caller sent. An explicit None clears a date;
        cleared guests fall back to 1. Omitted fields are left as they are.
        """
        unknown = set(changes) - {"check_in", "check_out", "guests"}
        if unknown:
            raise TypeError(f"Unknown booking fields: {sorted(unknown)}")
        if "check_in" in changes:
            self.check_in = changes["check_in"]
        if "check_out" in changes:
            self.check_out = changes["check_out"]
        if "guests" in changes:
            guests = changes["guests"]
            self.guests = 1 if guests is None else guests

    @property
    def submitting(self) -> bool:
        return self.phase == Phase.SUBMITTING

    def quote(self) -> BookingQuote:
        return booking_calculator.quote(
            self.check_in, self.check_out, self.guests, self.hotel.price_per_night
        )

    def close(self) -> None:
        """Stop caring about this form; an in-flight request finishes unobserved."""
        self.closed = True

    def _fail(self, reason: FailureReason, error: AppError) -> AppError:
        self.phase = Phase.FAILED
        self.failure = reason
        self.error = error.message
        self.message = None
        logger.info("Reservation failed", hotel_id=self.hotel.id, reason=reason.value, error=error.message)
        return error

    def _validate(self) -> ReservationCreate:
        self.phase = Phase.VALIDATING
        night_count = booking_calculator.nights(self.check_in, self.check_out)
        if night_count <= 0:
            raise self._fail(FailureReason.INVALID_DATE_RANGE, InvalidDateRangeError())
        if self.guests < 1:
            raise self._fail(
                FailureReason.INVALID_GUEST_COUNT,
                InvalidGuestCountError("É necessário pelo menos 1 hóspede"),
            )
        if self.guests > settings.MAX_GUESTS:
            raise self._fail(
                FailureReason.INVALID_GUEST_COUNT,
                InvalidGuestCountError(f"Máximo de {settings.MAX_GUESTS} hóspedes por reserva"),
            )
        return ReservationCreate(
            hotel_id=self.hotel.id,
            check_in=self.check_in,
            check_out=self.check_out,
            guests=self.guests,
            total_price=booking_calculator.total(night_count, self.hotel.price_per_night),
        )

    async def submit(self) -> ReservationRead:
        """
        Validate and send the reservation.

        Raises the error the form failed with; the form's phase, failure and
        error fields describe the same outcome for later rendering.
        """
        if self.submitting:
            raise SubmissionInProgressError()

        self.failure = None
        self.error = None
        if not self.session.is_authenticated:
            raise self._fail(FailureReason.AUTH_REQUIRED, AuthRequiredError("Faça login para reservar"))

        payload = self._validate()

        self.phase = Phase.SUBMITTING
        logger.info("Submitting reservation", hotel_id=self.hotel.id, total_price=payload.total_price)
        try:
            reservation = await self.api.create_reservation(payload)
        except RequestTimeoutError as e:
            if self.closed:
                raise
            raise self._fail(FailureReason.TIMEOUT, e)
        except RemoteAPIError as e:
            if self.closed:
                raise
            raise self._fail(
                FailureReason.SUBMISSION_ERROR, SubmissionError(e.message, e.remote_status)
            ) from e

        if self.closed:
            logger.info("Reservation created after form closed", reservation_id=reservation.id)
            return reservation

        self.phase = Phase.SUCCEEDED
        self.message = f"Sua reserva no {self.hotel.name} foi confirmada com sucesso."
        self.reset()
        logger.info("Reservation created", reservation_id=reservation.id, hotel_id=self.hotel.id)
        if self.on_created is not None:
            try:
                await self.on_created(reservation)
            except RemoteAPIError as e:
                # the booking stands; the list keeps its own load error
                logger.warning("Refresh after reservation failed", error=e.message)
        return reservation

    def state(self) -> BookingFormRead:
        return BookingFormRead(
            hotel=self.hotel,
            phase=self.phase.value,
            failure=self.failure.value if self.failure else None,
            error=self.error,
            message=self.message,
            check_in=self.check_in,
            check_out=self.check_out,
            guests=self.guests,
            quote=self.quote(),
        )


class BookingForms:
    """One open booking form per hotel."""

    def __init__(self, session: SessionStore, api: TourismAPIClient, on_created: Optional[OnCreated] = None):
        self.session = session
        self.api = api
        self.on_created = on_created
        self._forms: dict[str, ReservationForm] = {}

    async def open(self, hotel_id: str) -> ReservationForm:
        form = self._forms.get(hotel_id)
        if form is None:
            hotel = await self.api.get_hotel(hotel_id)
            form = ReservationForm(hotel, self.session, self.api, on_created=self.on_created)
            self._forms[hotel_id] = form
        return form

    def get(self, hotel_id: str) -> ReservationForm:
        form = self._forms.get(hotel_id)
        if form is None:
            raise EntityNotFoundException("Formulário de reserva não está aberto")
        return form

    def close(self, hotel_id: str) -> None:
        form = self._forms.pop(hotel_id, None)
        if form is not None:
            form.close()

    def close_all(self) -> None:
        for hotel_id in list(self._forms):
            self.close(hotel_id)


class MyReservations:
    """The signed-in user's reservations, reloaded from the server."""

    def __init__(self, session: SessionStore, api: TourismAPIClient):
        self.session = session
        self.api = api
        self.items: list[ReservationRead] = []
        self.loaded_for: Optional[str] = None
        self.error: Optional[str] = None

    def clear(self) -> None:
        self.items = []
        self.loaded_for = None
        self.error = None

    async def reload(self) -> list[ReservationRead]:
        user = self.session.user
        if user is None:
            self.clear()
            return self.items
        try:
            self.items = await self.api.get_user_reservations(user.id)
            self.loaded_for = user.id
            self.error = None
        except RemoteAPIError as e:
            self.error = "Não foi possível carregar suas reservas"
            logger.warning("Failed to load reservations", user_id=user.id, error=e.message)
            raise
        return self.items

    async def on_created(self, reservation: ReservationRead) -> None:
        await self.reload()

    async def cancel(self, reservation_id: str) -> list[ReservationRead]:
        """Owner cancel: only offered while the reservation can still move to CANCELLED."""
        user = self.session.user
        if user is None:
            raise AuthRequiredError()
        if self.loaded_for != user.id:
            await self.reload()
        reservation = next((r for r in self.items if r.id == reservation_id), None)
        if reservation is None:
            raise EntityNotFoundException("Reserva não encontrada")
        if not can_transition(
            reservation.status,
            ReservationStatus.CANCELLED.value,
            is_admin=False,
            is_owner=reservation.user_id in (None, user.id),
        ):
            raise ForbiddenException("Esta reserva não pode ser cancelada")

        await self.api.update_reservation_status(reservation_id, ReservationStatus.CANCELLED.value)
        logger.info("Reservation cancelled by owner", reservation_id=reservation_id)
        return await self.reload()
