"""FastAPI dependencies — session access and route guards."""

from fastapi import Depends, Request

from turismo.application.services.admin_service import CityBoard, HotelBoard, ReservationBoard, UserBoard
from turismo.application.services.reservation_service import BookingForms, MyReservations
from turismo.application.services.session_store import SessionStore
from turismo.core.exceptions import AuthRequiredError, ForbiddenException, SessionLoadingError
from turismo.domain.schemas.auth import UserRead
from turismo.infrastructure.tourism_api import TourismAPIClient


def get_session(request: Request) -> SessionStore:
    return request.app.state.session


def get_api(request: Request) -> TourismAPIClient:
    return request.app.state.api


def get_booking_forms(request: Request) -> BookingForms:
    return request.app.state.booking_forms


def get_my_reservations(request: Request) -> MyReservations:
    return request.app.state.my_reservations


def get_reservation_board(request: Request) -> ReservationBoard:
    return request.app.state.reservation_board


def get_user_board(request: Request) -> UserBoard:
    return request.app.state.user_board


def get_city_board(request: Request) -> CityBoard:
    return request.app.state.city_board


def get_hotel_board(request: Request) -> HotelBoard:
    return request.app.state.hotel_board


def get_current_user(session: SessionStore = Depends(get_session)) -> UserRead:
    """Require a signed-in user; role decisions wait until restore finishes."""
    if session.loading:
        raise SessionLoadingError()
    if session.user is None:
        raise AuthRequiredError()
    return session.user


def require_admin(session: SessionStore = Depends(get_session)) -> UserRead:
    """Require admin role."""
    user = get_current_user(session)
    if not session.is_admin:
        raise ForbiddenException()
    return user
