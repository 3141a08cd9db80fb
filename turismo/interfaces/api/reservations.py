"""Reservation routes — booking form per hotel and the user's own reservations."""

from fastapi import APIRouter, Depends

from turismo.application.services.reservation_service import BookingForms, MyReservations
from turismo.application.services.reservation_view import reservation_row
from turismo.domain.schemas.auth import UserRead
from turismo.domain.schemas.reservation import BookingFormRead, BookingFormUpdate, ReservationRow
from turismo.interfaces.api.deps import get_booking_forms, get_current_user, get_my_reservations

router = APIRouter(tags=["Reservas"])


@router.get("/hotels/{hotel_id}/reserva", response_model=BookingFormRead)
async def open_booking_form(hotel_id: str, forms: BookingForms = Depends(get_booking_forms)):
    form = await forms.open(hotel_id)
    return form.state()


@router.put("/hotels/{hotel_id}/reserva", response_model=BookingFormRead)
async def edit_booking_form(
    hotel_id: str,
    body: BookingFormUpdate,
    forms: BookingForms = Depends(get_booking_forms),
):
    form = await forms.open(hotel_id)
    form.update(**{field: getattr(body, field) for field in body.model_fields_set})
    return form.state()


@router.post("/hotels/{hotel_id}/reserva", response_model=BookingFormRead)
async def submit_booking_form(hotel_id: str, forms: BookingForms = Depends(get_booking_forms)):
    """Submit the open form. Failures are rendered by the global handler."""
    form = forms.get(hotel_id)
    await form.submit()
    return form.state()


@router.delete("/hotels/{hotel_id}/reserva", status_code=204)
def close_booking_form(hotel_id: str, forms: BookingForms = Depends(get_booking_forms)):
    forms.close(hotel_id)


@router.get("/reservas", response_model=list[ReservationRow])
async def list_my_reservations(
    user: UserRead = Depends(get_current_user),
    mine: MyReservations = Depends(get_my_reservations),
):
    items = await mine.reload()
    return [reservation_row(r, is_admin=False, viewer_id=user.id) for r in items]


@router.post("/reservas/{reservation_id}/cancel", response_model=list[ReservationRow])
async def cancel_my_reservation(
    reservation_id: str,
    user: UserRead = Depends(get_current_user),
    mine: MyReservations = Depends(get_my_reservations),
):
    items = await mine.cancel(reservation_id)
    return [reservation_row(r, is_admin=False, viewer_id=user.id) for r in items]
