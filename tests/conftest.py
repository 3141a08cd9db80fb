import itertools
import json
import re
from typing import Optional

import anyio
import httpx
import pytest

from turismo.application.services.session_store import SessionStore
from turismo.infrastructure.credential_store import FileCredentialStore
from turismo.infrastructure.tourism_api import TourismAPIClient

BASE_URL = "http://api.test"

USER = {"id": "u1", "name": "Ana", "email": "ana@example.com", "role": "USER", "createdAt": "2024-01-10T10:00:00Z"}
ADMIN = {"id": "a1", "name": "Bruno", "email": "admin@example.com", "role": "ADMIN", "createdAt": "2024-01-01T09:00:00Z"}


class FakeBackend:
    """In-memory stand-in for the remote tourism REST API."""

    def __init__(self):
        self.users = {"u1": dict(USER), "a1": dict(ADMIN)}
        self.passwords = {"ana@example.com": "segredo", "admin@example.com": "admin123"}
        self.tokens = {"tok-u1": "u1", "tok-a1": "a1"}
        self.cities = [
            {"id": "c1", "name": "Luanda", "description": "Capital de Angola"},
            {"id": "c2", "name": "Benguela", "description": "Litoral"},
        ]
        self.hotels = [
            {"id": "h1", "name": "Hotel Presidente", "description": "Vista para a baía", "price": 15000, "cityId": "c1"},
            {"id": "h2", "name": "Hotel Praia Morena", "description": "Beira-mar", "pricePerNight": 22000, "cityId": "c2"},
        ]
        self.attractions = [{"id": "t1", "name": "Ilha do Mussulo", "description": "Praias", "cityId": "c1"}]
        self.reviews = []
        self.reservations = []
        self.calls = []
        self.failures = {}
        self.timeouts = set()
        self.gate: Optional[anyio.Event] = None
        self.gate_reached: Optional[anyio.Event] = None
        self._ids = itertools.count(1)

    # helpers -----------------------------------------------------------
    def fail(self, method: str, path: str, status: int, text: str) -> None:
        self.failures[(method, path)] = (status, text)

    def calls_to(self, method: str, path: str) -> list:
        return [c for c in self.calls if c["method"] == method and c["path"] == path]

    async def _hold(self) -> None:
        """Park the request on ``gate`` when a test has set one."""
        if self.gate is None:
            return
        if self.gate_reached is not None:
            self.gate_reached.set()
        await self.gate.wait()

    def add_reservation(self, user_id: str, status: str = "PENDING", **extra) -> dict:
        reservation = {
            "id": f"r{next(self._ids)}",
            "userId": user_id,
            "hotelId": "h1",
            "checkIn": "2024-06-01",
            "checkOut": "2024-06-04",
            "guests": 2,
            "totalPrice": 45000,
            "status": status,
            "createdAt": "2024-05-20T12:00:00Z",
        }
        reservation.update(extra)
        self.reservations.append(reservation)
        return reservation

    def _caller(self, request: httpx.Request) -> Optional[dict]:
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer "):
            return None
        user_id = self.tokens.get(header[len("Bearer "):])
        return self.users.get(user_id) if user_id else None

    def _issue(self, user: dict) -> dict:
        token = f"tok-{user['id']}"
        self.tokens[token] = user["id"]
        return {"token": token, "user": user}

    # transport ---------------------------------------------------------
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        method, path = request.method, request.url.path
        body = json.loads(request.content) if request.content else None
        self.calls.append({"method": method, "path": path, "headers": dict(request.headers), "json": body})

        if (method, path) in self.timeouts:
            raise httpx.ReadTimeout("timed out", request=request)
        if (method, path) in self.failures:
            status, text = self.failures[(method, path)]
            return httpx.Response(status, text=text)

        caller = self._caller(request)

        if method == "POST" and path == "/auth/login":
            user = next((u for u in self.users.values() if u["email"] == body["email"]), None)
            if user is None or self.passwords.get(body["email"]) != body["password"]:
                return httpx.Response(401, text="Credenciais inválidas")
            return httpx.Response(200, json=self._issue(user))

        if method == "POST" and path == "/auth/register":
            if body["email"] in self.passwords:
                return httpx.Response(400, text="Email já cadastrado")
            user = {"id": f"u{next(self._ids) + 100}", "name": body["name"], "email": body["email"], "role": "USER"}
            self.users[user["id"]] = user
            self.passwords[body["email"]] = body["password"]
            return httpx.Response(201, json=self._issue(user))

        if method == "GET" and path == "/auth/me":
            if caller is None:
                return httpx.Response(401, text="Token inválido")
            await self._hold()
            return httpx.Response(200, json=caller)

        if method == "GET" and path == "/cities":
            return httpx.Response(200, json=self.cities)
        if method == "GET" and path == "/hotels":
            return httpx.Response(200, json=self.hotels)
        if method == "GET" and path == "/attractions":
            return httpx.Response(200, json=self.attractions)

        match = re.fullmatch(r"/(cities|hotels|attractions)/(\w+)", path)
        if method == "GET" and match:
            collection = getattr(self, match.group(1))
            item = next((i for i in collection if i["id"] == match.group(2)), None)
            if item is None:
                return httpx.Response(404, text="Não encontrado")
            return httpx.Response(200, json=item)

        match = re.fullmatch(r"/hotels/(\w+)/reviews", path)
        if method == "GET" and match:
            return httpx.Response(200, json=[r for r in self.reviews if r.get("hotelId") == match.group(1)])
        match = re.fullmatch(r"/reviews/city/(\w+)", path)
        if method == "GET" and match:
            return httpx.Response(200, json=[r for r in self.reviews if r.get("cityId") == match.group(1)])

        if method == "POST" and path == "/reviews":
            if caller is None:
                return httpx.Response(401, text="Não autenticado")
            review = dict(body, id=f"rv{next(self._ids)}", userId=caller["id"])
            self.reviews.append(review)
            return httpx.Response(201, json=review)

        if method == "POST" and path == "/reservas":
            if caller is None:
                return httpx.Response(401, text="Não autenticado")
            await self._hold()
            reservation = self.add_reservation(caller["id"], **body)
            return httpx.Response(201, json=reservation)

        match = re.fullmatch(r"/reservas/user/(\w+)", path)
        if method == "GET" and match:
            return httpx.Response(200, json=[r for r in self.reservations if r["userId"] == match.group(1)])

        if method == "GET" and path == "/reservas":
            if caller is None or caller["role"] != "ADMIN":
                return httpx.Response(403, text="Acesso negado")
            return httpx.Response(200, json=self.reservations)

        match = re.fullmatch(r"/reservas/(\w+)/status", path)
        if method == "PATCH" and match:
            reservation = next((r for r in self.reservations if r["id"] == match.group(1)), None)
            if reservation is None:
                return httpx.Response(404, text="Reserva não encontrada")
            is_admin = caller is not None and caller["role"] == "ADMIN"
            owner_cancel = caller is not None and caller["id"] == reservation["userId"] and body["status"] == "CANCELLED"
            if not (is_admin or owner_cancel):
                return httpx.Response(403, text="Acesso negado")
            reservation["status"] = body["status"]
            return httpx.Response(200, json=reservation)

        if method == "GET" and path == "/users":
            if caller is None or caller["role"] != "ADMIN":
                return httpx.Response(403, text="Acesso negado")
            return httpx.Response(200, json=list(self.users.values()))

        match = re.fullmatch(r"/users/(\w+)/role", path)
        if method == "PATCH" and match:
            if caller is None or caller["role"] != "ADMIN":
                return httpx.Response(403, text="Acesso negado")
            user = self.users[match.group(1)]
            user["role"] = body["role"]
            return httpx.Response(200, json=user)

        match = re.fullmatch(r"/(cities|hotels)(?:/(\w+))?", path)
        if match and method in ("POST", "PUT", "DELETE"):
            if caller is None or caller["role"] != "ADMIN":
                return httpx.Response(403, text="Acesso negado")
            collection = getattr(self, match.group(1))
            if method == "POST":
                item = dict(body, id=f"{match.group(1)[0]}{next(self._ids) + 100}")
                collection.append(item)
                return httpx.Response(201, json=item)
            item = next(i for i in collection if i["id"] == match.group(2))
            if method == "PUT":
                item.update(body)
                return httpx.Response(200, json=item)
            collection.remove(item)
            return httpx.Response(204)

        return httpx.Response(404, text=f"Rota desconhecida: {method} {path}")


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def credentials(tmp_path):
    return FileCredentialStore(str(tmp_path / "local_storage.json"), "auth_token")


@pytest.fixture
def api(backend, credentials):
    return TourismAPIClient(credentials, base_url=BASE_URL, timeout=2, transport=backend.transport())


@pytest.fixture
def session(api, credentials):
    return SessionStore(api, credentials)
