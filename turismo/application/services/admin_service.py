"""Admin service — reservation/user management boards with reload-after-write.

The admin guard belongs to the route host; these boards never re-check the
caller's role, so a non-admin call reaches the backend and is rejected there.
Mutations never patch local state: a successful write is followed by a full
reload, and a failed write leaves the displayed list untouched.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable, Generic, Optional, TypeVar

import structlog

from turismo.application.services.reservation_view import (
    ALL,
    can_transition,
    filter_by_role,
    filter_by_status,
    role_counts,
)
from turismo.core.exceptions import EntityNotFoundException, ForbiddenException, RemoteAPIError
from turismo.domain.schemas.auth import Role, UserRead
from turismo.domain.schemas.catalog import CityCreate, CityRead, HotelCreate, HotelRead
from turismo.domain.schemas.reservation import ReservationRead, ReservationStatus
from turismo.infrastructure.tourism_api import TourismAPIClient

logger = structlog.get_logger(__name__)

T = TypeVar("T")


class Board(ABC, Generic[T]):
    """A server-backed list plus the last error shown next to it."""

    load_error = "Erro ao carregar dados"
    write_error = "Erro ao salvar alterações"

    def __init__(self, api: TourismAPIClient):
        self.api = api
        self.items: list[T] = []
        self.loaded = False
        self.error: Optional[str] = None

    @abstractmethod
    async def fetch(self) -> list[T]:
        """Load the full list from the backend."""

    async def reload(self) -> list[T]:
        try:
            self.items = await self.fetch()
        except RemoteAPIError as e:
            self.error = self.load_error
            logger.warning("Board reload failed", board=type(self).__name__, error=e.message)
            raise
        self.loaded = True
        self.error = None
        return self.items

    async def ensure_loaded(self) -> list[T]:
        if not self.loaded:
            await self.reload()
        return self.items

    async def _write_then_reload(self, write: Callable[[], Awaitable[object]], **context) -> list[T]:
        try:
            await write()
        except RemoteAPIError as e:
            self.error = e.message or self.write_error
            logger.info("Admin write rejected", board=type(self).__name__, error=e.message, **context)
            raise
        logger.info("Admin write applied", board=type(self).__name__, **context)
        return await self.reload()


class ReservationBoard(Board[ReservationRead]):
    load_error = "Erro ao carregar reservas"
    write_error = "Erro ao atualizar status da reserva"

    async def fetch(self) -> list[ReservationRead]:
        return await self.api.get_all_reservations()

    def filtered(self, status: str = ALL) -> list[ReservationRead]:
        return filter_by_status(self.items, status)

    async def set_reservation_status(self, reservation_id: str, target: ReservationStatus) -> list[ReservationRead]:
        """Move a reservation along the status table; CANCELLED is terminal."""
        await self.ensure_loaded()
        reservation = next((r for r in self.items if r.id == reservation_id), None)
        if reservation is None:
            raise EntityNotFoundException("Reserva não encontrada")
        if not can_transition(reservation.status, target.value, is_admin=True, is_owner=False):
            logger.info(
                "Status change refused",
                reservation_id=reservation_id,
                current=reservation.status,
                status=target.value,
            )
            raise ForbiddenException(f"Não é possível mudar de {reservation.status} para {target.value}")

        return await self._write_then_reload(
            lambda: self.api.update_reservation_status(reservation_id, target.value),
            reservation_id=reservation_id,
            status=target.value,
        )


class UserBoard(Board[UserRead]):
    load_error = "Erro ao carregar usuários"
    write_error = "Erro ao atualizar papel do usuário"

    async def fetch(self) -> list[UserRead]:
        return await self.api.get_all_users()

    def filtered(self, role: str = ALL) -> list[UserRead]:
        return filter_by_role(self.items, role)

    def counts(self) -> dict:
        return role_counts(self.items)

    async def set_user_role(self, user_id: str, role: Role) -> list[UserRead]:
        # No self-demotion guard: an admin may remove their own ADMIN role
        return await self._write_then_reload(
            lambda: self.api.update_user_role(user_id, role.value),
            user_id=user_id,
            role=role.value,
        )


class CityBoard(Board[CityRead]):
    load_error = "Erro ao carregar cidades"

    async def fetch(self) -> list[CityRead]:
        return await self.api.get_cities()

    async def create(self, city: CityCreate) -> list[CityRead]:
        return await self._write_then_reload(lambda: self.api.create_city(city), action="create")

    async def update(self, city_id: str, city: CityCreate) -> list[CityRead]:
        return await self._write_then_reload(lambda: self.api.update_city(city_id, city), city_id=city_id)

    async def delete(self, city_id: str) -> list[CityRead]:
        return await self._write_then_reload(lambda: self.api.delete_city(city_id), city_id=city_id)


class HotelBoard(Board[HotelRead]):
    load_error = "Erro ao carregar hotéis"

    async def fetch(self) -> list[HotelRead]:
        return await self.api.get_hotels()

    async def create(self, hotel: HotelCreate) -> list[HotelRead]:
        return await self._write_then_reload(lambda: self.api.create_hotel(hotel), action="create")

    async def update(self, hotel_id: str, hotel: HotelCreate) -> list[HotelRead]:
        return await self._write_then_reload(lambda: self.api.update_hotel(hotel_id, hotel), hotel_id=hotel_id)

    async def delete(self, hotel_id: str) -> list[HotelRead]:
        return await self._write_then_reload(lambda: self.api.delete_hotel(hotel_id), hotel_id=hotel_id)
