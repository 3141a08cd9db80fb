"""Auth routes — login, register, logout, me."""

from fastapi import APIRouter, Depends

from turismo.application.services.reservation_service import BookingForms, MyReservations
from turismo.application.services.session_store import SessionStore
from turismo.domain.schemas.auth import LoginRequest, RegisterRequest, SessionRead
from turismo.interfaces.api.deps import get_booking_forms, get_my_reservations, get_session

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/login", response_model=SessionRead)
async def login(body: LoginRequest, session: SessionStore = Depends(get_session)):
    await session.login(body.email, body.password)
    return session.snapshot()


@router.post("/register", response_model=SessionRead)
async def register(body: RegisterRequest, session: SessionStore = Depends(get_session)):
    await session.register(body.name, body.email, body.password)
    return session.snapshot()


@router.post("/logout", response_model=SessionRead)
def logout(
    session: SessionStore = Depends(get_session),
    forms: BookingForms = Depends(get_booking_forms),
    mine: MyReservations = Depends(get_my_reservations),
):
    session.logout()
    forms.close_all()
    mine.clear()
    return session.snapshot()


@router.get("/me", response_model=SessionRead)
def get_me(session: SessionStore = Depends(get_session)):
    return session.snapshot()
