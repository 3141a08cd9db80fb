import httpx
import pytest
from asgi_correlation_id import correlation_id

from turismo.core.exceptions import NetworkError, RemoteAPIError, RequestTimeoutError
from turismo.infrastructure.credential_store import FileCredentialStore
from turismo.infrastructure.tourism_api import TourismAPIClient

BASE_URL = "http://api.test"

pytestmark = pytest.mark.anyio


async def test_login_sends_no_bearer_even_with_stored_token(api, credentials, backend):
    credentials.set("tok-u1")
    await api.login("ana@example.com", "segredo")

    call = backend.calls_to("POST", "/auth/login")[0]
    assert "authorization" not in call["headers"]
    assert call["json"] == {"email": "ana@example.com", "password": "segredo"}


async def test_bearer_header_on_regular_calls(api, credentials, backend):
    credentials.set("tok-u1")
    await api.get_cities()
    assert backend.calls_to("GET", "/cities")[0]["headers"]["authorization"] == "Bearer tok-u1"


async def test_no_bearer_without_token(api, backend):
    await api.get_hotels()
    assert "authorization" not in backend.calls_to("GET", "/hotels")[0]["headers"]


async def test_error_body_is_surfaced_verbatim(api, backend):
    backend.fail("GET", "/cities", 503, "Serviço em manutenção até às 14h")
    with pytest.raises(RemoteAPIError) as exc:
        await api.get_cities()
    assert exc.value.message == "Serviço em manutenção até às 14h"
    assert exc.value.remote_status == 503


async def test_empty_error_body_falls_back(api, backend):
    backend.fail("GET", "/cities", 500, "")
    with pytest.raises(RemoteAPIError) as exc:
        await api.get_cities()
    assert exc.value.message == "Erro na requisição"


async def test_timeout_and_connection_errors(credentials):
    def timeout(request):
        raise httpx.ConnectTimeout("slow", request=request)

    def refused(request):
        raise httpx.ConnectError("refused", request=request)

    slow = TourismAPIClient(credentials, base_url=BASE_URL, transport=httpx.MockTransport(timeout))
    down = TourismAPIClient(credentials, base_url=BASE_URL, transport=httpx.MockTransport(refused))

    with pytest.raises(RequestTimeoutError):
        await slow.get_cities()
    with pytest.raises(NetworkError) as exc:
        await down.get_cities()
    assert not isinstance(exc.value, RequestTimeoutError)


async def test_correlation_id_is_forwarded(api, backend):
    token = correlation_id.set("req-123")
    try:
        await api.get_cities()
    finally:
        correlation_id.reset(token)
    assert backend.calls_to("GET", "/cities")[0]["headers"]["x-request-id"] == "req-123"


async def test_hotel_price_aliases(api):
    hotels = await api.get_hotels()
    assert [h.price_per_night for h in hotels] == [15000, 22000]


async def test_city_reviews_endpoint(api, backend):
    backend.reviews.append({"id": "rv1", "rating": 4, "comment": "Linda", "userId": "u1", "cityId": "c1"})
    reviews = await api.get_city_reviews("c1")
    assert [r.id for r in reviews] == ["rv1"]
    assert backend.calls_to("GET", "/reviews/city/c1")


def test_credential_store_keeps_other_keys(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text('{"theme": "dark"}', encoding="utf-8")
    store = FileCredentialStore(str(path), "auth_token")

    store.set("abc")
    assert store.get() == "abc"
    store.clear()
    store.clear()

    assert store.get() is None
    assert path.read_text(encoding="utf-8") == '{"theme": "dark"}'


def test_credential_store_tolerates_garbage(tmp_path):
    path = tmp_path / "storage.json"
    path.write_text("not json", encoding="utf-8")
    assert FileCredentialStore(str(path), "auth_token").get() is None
