"""Admin routes — reservation status, user roles, city and hotel management.

Every route here sits behind require_admin.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from turismo.application.services.admin_service import CityBoard, HotelBoard, ReservationBoard, UserBoard
from turismo.application.services.reservation_view import ALL, reservation_row, role_badge
from turismo.domain.schemas.auth import RoleUpdate, UserRead
from turismo.domain.schemas.catalog import CityCreate, CityRead, HotelCreate, HotelRead
from turismo.domain.schemas.reservation import ReservationRow, StatusBadge, StatusUpdate
from turismo.interfaces.api.deps import (
    get_city_board,
    get_hotel_board,
    get_reservation_board,
    get_user_board,
    require_admin,
)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


class UserRow(BaseModel):
    user: UserRead
    badge: StatusBadge


class UserList(BaseModel):
    items: list[UserRow]
    total: int
    admins: int
    users: int


def _rows(board: ReservationBoard, status: str, viewer: UserRead) -> list[ReservationRow]:
    return [reservation_row(r, is_admin=True, viewer_id=viewer.id) for r in board.filtered(status)]


def _users(board: UserBoard, role: str) -> UserList:
    return UserList(
        items=[UserRow(user=u, badge=role_badge(u.role.value)) for u in board.filtered(role)],
        **board.counts(),
    )


@router.get("/reservations", response_model=list[ReservationRow])
async def list_reservations(
    status: str = ALL,
    board: ReservationBoard = Depends(get_reservation_board),
    admin: UserRead = Depends(require_admin),
):
    await board.reload()
    return _rows(board, status, admin)


@router.post("/reservations/{reservation_id}/status", response_model=list[ReservationRow])
async def set_reservation_status(
    reservation_id: str,
    body: StatusUpdate,
    status: str = ALL,
    board: ReservationBoard = Depends(get_reservation_board),
    admin: UserRead = Depends(require_admin),
):
    await board.set_reservation_status(reservation_id, body.status)
    return _rows(board, status, admin)


@router.get("/users", response_model=UserList)
async def list_users(role: str = ALL, board: UserBoard = Depends(get_user_board)):
    await board.reload()
    return _users(board, role)


@router.post("/users/{user_id}/role", response_model=UserList)
async def set_user_role(
    user_id: str,
    body: RoleUpdate,
    role: str = ALL,
    board: UserBoard = Depends(get_user_board),
):
    await board.set_user_role(user_id, body.role)
    return _users(board, role)


@router.get("/cities", response_model=list[CityRead])
async def list_cities(board: CityBoard = Depends(get_city_board)):
    return await board.reload()


@router.post("/cities", response_model=list[CityRead])
async def create_city(body: CityCreate, board: CityBoard = Depends(get_city_board)):
    return await board.create(body)


@router.put("/cities/{city_id}", response_model=list[CityRead])
async def update_city(city_id: str, body: CityCreate, board: CityBoard = Depends(get_city_board)):
    return await board.update(city_id, body)


@router.delete("/cities/{city_id}", response_model=list[CityRead])
async def delete_city(city_id: str, board: CityBoard = Depends(get_city_board)):
    return await board.delete(city_id)


@router.get("/hotels", response_model=list[HotelRead])
async def list_hotels(board: HotelBoard = Depends(get_hotel_board)):
    return await board.reload()


@router.post("/hotels", response_model=list[HotelRead])
async def create_hotel(body: HotelCreate, board: HotelBoard = Depends(get_hotel_board)):
    return await board.create(body)


@router.put("/hotels/{hotel_id}", response_model=list[HotelRead])
async def update_hotel(hotel_id: str, body: HotelCreate, board: HotelBoard = Depends(get_hotel_board)):
    return await board.update(hotel_id, body)


@router.delete("/hotels/{hotel_id}", response_model=list[HotelRead])
async def delete_hotel(hotel_id: str, board: HotelBoard = Depends(get_hotel_board)):
    return await board.delete(hotel_id)
