"""Tourism REST API HTTP client.

Thin async wrapper over the remote backend:
- Bearer token read from the credential store on every call
- Correlation id forwarded as X-Request-ID
- Non-2xx responses surface the response body verbatim
- No retries; every failure is raised once to the calling flow
"""

import logging
from typing import Any, Optional

import httpx
from asgi_correlation_id import correlation_id

from turismo.config import get_settings
from turismo.core.exceptions import NetworkError, RemoteAPIError, RequestTimeoutError
from turismo.domain.repositories.credential_store import CredentialStore
from turismo.domain.schemas.auth import TokenResponse, UserRead
from turismo.domain.schemas.catalog import AttractionRead, CityCreate, CityRead, HotelCreate, HotelRead
from turismo.domain.schemas.reservation import ReservationCreate, ReservationRead
from turismo.domain.schemas.review import ReviewCreate, ReviewRead

settings = get_settings()
logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Erro na requisição"


class TourismAPIClient:
    """Client for the tourism backend REST API."""

    def __init__(
        self,
        credentials: CredentialStore,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self.credentials = credentials
        self._transport = transport

    def _headers(self, authenticated: bool) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self.credentials.get() if authenticated else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        request_id = correlation_id.get()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        json: Optional[Any] = None,
        authenticated: bool = True,
    ) -> Any:
        """
        Send one request and return the decoded JSON body.

        Raises:
            RemoteAPIError: the backend answered non-2xx (message is the body text)
            RequestTimeoutError: no answer within the configured timeout
            NetworkError: the backend could not be reached
        """
        url = f"{self.base_url}{endpoint}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.request(
                    method, url, json=json, headers=self._headers(authenticated)
                )
        except httpx.TimeoutException as e:
            logger.warning(f"Tourism API timeout: {method} {endpoint} ({e})")
            raise RequestTimeoutError() from e
        except httpx.TransportError as e:
            logger.warning(f"Tourism API connection error: {method} {endpoint} ({e})")
            raise NetworkError() from e

        if response.is_error:
            logger.info(f"Tourism API rejected {method} {endpoint}: {response.status_code}")
            raise RemoteAPIError(response.text or DEFAULT_ERROR_MESSAGE, response.status_code)

        if not response.content:
            return None
        return response.json()

    # Auth endpoints
    async def login(self, email: str, password: str) -> TokenResponse:
        data = await self.request(
            "POST", "/auth/login", json={"email": email, "password": password}, authenticated=False
        )
        return TokenResponse.model_validate(data)

    async def register(self, name: str, email: str, password: str) -> TokenResponse:
        data = await self.request(
            "POST",
            "/auth/register",
            json={"name": name, "email": email, "password": password},
            authenticated=False,
        )
        return TokenResponse.model_validate(data)

    async def get_me(self) -> UserRead:
        return UserRead.model_validate(await self.request("GET", "/auth/me"))

    # Cities endpoints
    async def get_cities(self) -> list[CityRead]:
        return [CityRead.model_validate(c) for c in await self.request("GET", "/cities")]

    async def get_city(self, city_id: str) -> CityRead:
        return CityRead.model_validate(await self.request("GET", f"/cities/{city_id}"))

    async def create_city(self, city: CityCreate) -> CityRead:
        return CityRead.model_validate(await self.request("POST", "/cities", json=city.to_payload()))

    async def update_city(self, city_id: str, city: CityCreate) -> CityRead:
        return CityRead.model_validate(
            await self.request("PUT", f"/cities/{city_id}", json=city.to_payload())
        )

    async def delete_city(self, city_id: str) -> None:
        await self.request("DELETE", f"/cities/{city_id}")

    # Hotels endpoints
    async def get_hotels(self) -> list[HotelRead]:
        return [HotelRead.model_validate(h) for h in await self.request("GET", "/hotels")]

    async def get_hotel(self, hotel_id: str) -> HotelRead:
        return HotelRead.model_validate(await self.request("GET", f"/hotels/{hotel_id}"))

    async def create_hotel(self, hotel: HotelCreate) -> HotelRead:
        return HotelRead.model_validate(await self.request("POST", "/hotels", json=hotel.to_payload()))

    async def update_hotel(self, hotel_id: str, hotel: HotelCreate) -> HotelRead:
        return HotelRead.model_validate(
            await self.request("PUT", f"/hotels/{hotel_id}", json=hotel.to_payload())
        )

    async def delete_hotel(self, hotel_id: str) -> None:
        await self.request("DELETE", f"/hotels/{hotel_id}")

    # Attractions endpoints
    async def get_attractions(self) -> list[AttractionRead]:
        return [AttractionRead.model_validate(a) for a in await self.request("GET", "/attractions")]

    async def get_attraction(self, attraction_id: str) -> AttractionRead:
        return AttractionRead.model_validate(await self.request("GET", f"/attractions/{attraction_id}"))

    # Reviews endpoints
    async def create_review(self, review: ReviewCreate) -> ReviewRead:
        return ReviewRead.model_validate(await self.request("POST", "/reviews", json=review.to_payload()))

    async def get_hotel_reviews(self, hotel_id: str) -> list[ReviewRead]:
        return [ReviewRead.model_validate(r) for r in await self.request("GET", f"/hotels/{hotel_id}/reviews")]

    async def get_city_reviews(self, city_id: str) -> list[ReviewRead]:
        return [ReviewRead.model_validate(r) for r in await self.request("GET", f"/reviews/city/{city_id}")]

    # Reservas endpoints
    async def create_reservation(self, reservation: ReservationCreate) -> ReservationRead:
        data = await self.request("POST", "/reservas", json=reservation.to_payload())
        return ReservationRead.model_validate(data)

    async def get_user_reservations(self, user_id: str) -> list[ReservationRead]:
        return [
            ReservationRead.model_validate(r)
            for r in await self.request("GET", f"/reservas/user/{user_id}")
        ]

    async def get_all_reservations(self) -> list[ReservationRead]:
        return [ReservationRead.model_validate(r) for r in await self.request("GET", "/reservas")]

    async def update_reservation_status(self, reservation_id: str, status: str) -> Any:
        return await self.request("PATCH", f"/reservas/{reservation_id}/status", json={"status": status})

    # Users endpoints
    async def get_all_users(self) -> list[UserRead]:
        return [UserRead.model_validate(u) for u in await self.request("GET", "/users")]

    async def update_user_role(self, user_id: str, role: str) -> Any:
        return await self.request("PATCH", f"/users/{user_id}/role", json={"role": role})
