"""FastAPI application — main entry point of the tourism front-end."""

import structlog
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from turismo.config import get_settings
from turismo.core.logging import configure_logging
from turismo.core.middleware import setup_middleware
from turismo.core.exceptions import AppError, global_exception_handler
from turismo.application.services.admin_service import CityBoard, HotelBoard, ReservationBoard, UserBoard
from turismo.application.services.reservation_service import BookingForms, MyReservations
from turismo.application.services.session_store import SessionStore
from turismo.domain.repositories.credential_store import CredentialStore
from turismo.infrastructure.credential_store import FileCredentialStore
from turismo.infrastructure.tourism_api import TourismAPIClient

# Import routers
from turismo.interfaces.api.auth import router as auth_router
from turismo.interfaces.api.catalog import router as catalog_router
from turismo.interfaces.api.reservations import router as reservations_router
from turismo.interfaces.api.admin import router as admin_router

settings = get_settings()
logger = structlog.get_logger(__name__)


def create_app(
    api: Optional[TourismAPIClient] = None,
    credentials: Optional[CredentialStore] = None,
) -> FastAPI:
    """Build the front-end. Tests pass their own API client and credential store."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan — wire the session and restore it."""
        store = credentials or FileCredentialStore()
        client = api or TourismAPIClient(store)
        session = SessionStore(client, store)
        mine = MyReservations(session, client)

        app.state.api = client
        app.state.session = session
        app.state.my_reservations = mine
        app.state.booking_forms = BookingForms(session, client, on_created=mine.on_created)
        app.state.reservation_board = ReservationBoard(client)
        app.state.user_board = UserBoard(client)
        app.state.city_board = CityBoard(client)
        app.state.hotel_board = HotelBoard(client)

        logger.info("Starting Turismo front-end...", env=settings.ENVIRONMENT, api=client.base_url)
        await session.restore()

        yield

        app.state.booking_forms.close_all()
        logger.info("Turismo front-end stopped")

    app = FastAPI(
        title="Turismo — Cidades, Hotéis e Reservas",
        description="Front-end para o catálogo turístico e reservas de hotel",
        version="1.0.0",
        lifespan=lifespan,
    )

    setup_middleware(app)
    app.add_exception_handler(AppError, global_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router)
    app.include_router(catalog_router)
    app.include_router(reservations_router)
    app.include_router(admin_router)

    @app.get("/")
    def root():
        return {
            "name": "Turismo",
            "version": "1.0.0",
            "status": "running",
            "docs": "/docs",
        }

    @app.get("/health")
    def health():
        return {"status": "healthy"}

    return app


configure_logging()
app = create_app()
