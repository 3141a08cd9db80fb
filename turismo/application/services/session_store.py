"""Session store — current identity, its persisted credential and derived role.

Only login, register, restore and logout write here; every other flow reads.
"""

from typing import Optional

import structlog

from turismo.core.exceptions import AuthError, RemoteAPIError
from turismo.domain.repositories.credential_store import CredentialStore
from turismo.domain.schemas.auth import SessionRead, TokenResponse, UserRead
from turismo.infrastructure.tourism_api import TourismAPIClient

logger = structlog.get_logger(__name__)


class SessionStore:
    """Owned session object handed to every guarded flow."""

    def __init__(self, api: TourismAPIClient, credentials: CredentialStore):
        self.api = api
        self.credentials = credentials
        self._user: Optional[UserRead] = None
        self._loading = False

    @property
    def user(self) -> Optional[UserRead]:
        return self._user

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def is_authenticated(self) -> bool:
        return self._user is not None

    @property
    def is_admin(self) -> bool:
        return self._user is not None and self._user.is_admin

    @property
    def credential(self) -> Optional[str]:
        return self.credentials.get()

    async def restore(self) -> Optional[UserRead]:
        """Rebuild the session from a persisted credential, if there is one."""
        if not self.credentials.get():
            self._user = None
            return None

        self._user = None
        self._loading = True
        try:
            user = await self.api.get_me()
        except RemoteAPIError as e:
            logger.info("Stored credential rejected, clearing it", reason=e.message)
            self.credentials.clear()
            return None
        finally:
            self._loading = False

        self._user = user
        logger.info("Session restored", user_id=user.id, role=user.role.value)
        return user

    def _start(self, response: TokenResponse) -> UserRead:
        # No await between these two writes, so no reader sees a half-built session
        self.credentials.set(response.token)
        self._user = response.user
        return response.user

    async def login(self, email: str, password: str) -> UserRead:
        try:
            response = await self.api.login(email, password)
        except RemoteAPIError as e:
            logger.info("Login rejected", email=email)
            raise AuthError(e.message or "Email ou senha incorretos") from e

        user = self._start(response)
        logger.info("Logged in", user_id=user.id, role=user.role.value)
        return user

    async def register(self, name: str, email: str, password: str) -> UserRead:
        try:
            response = await self.api.register(name, email, password)
        except RemoteAPIError as e:
            logger.info("Registration rejected", email=email)
            raise AuthError(e.message or "Não foi possível criar a conta") from e

        user = self._start(response)
        logger.info("Registered", user_id=user.id)
        return user

    def logout(self) -> None:
        self.credentials.clear()
        if self._user is not None:
            logger.info("Logged out", user_id=self._user.id)
        self._user = None

    def snapshot(self) -> SessionRead:
        return SessionRead(
            user=self._user,
            loading=self._loading,
            is_authenticated=self.is_authenticated,
            is_admin=self.is_admin,
        )
