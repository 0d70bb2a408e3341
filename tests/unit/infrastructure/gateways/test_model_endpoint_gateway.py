from __future__ import annotations

import httpx
import pytest

from hydrowatch.domain.entities.errors import EndpointError
from hydrowatch.infrastructure.gateways.model_endpoint_gateway import (
    TARGET_MODEL_HEADER,
    ModelEndpointGateway,
)


class _StubResponse:
    def __init__(self, status_code: int, content: bytes = b""):
        self.status_code = status_code
        self.content = content
        self.text = content.decode()

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            request = httpx.Request("POST", "http://inference")
            response = httpx.Response(self.status_code, request=request, text="boom")
            raise httpx.HTTPStatusError("error", request=request, response=response)


class _StubAsyncClient:
    def __init__(self, outcome):
        self._outcome = outcome
        self.calls = []

    async def __aenter__(self) -> "_StubAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def post(self, url, content=None, headers=None, **kwargs):
        self.calls.append((url, content, headers))
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return self._outcome


def _install(monkeypatch, outcome) -> _StubAsyncClient:
    client = _StubAsyncClient(outcome)
    monkeypatch.setattr("httpx.AsyncClient", lambda timeout: client)
    return client


@pytest.mark.asyncio
async def test_invoke_posts_csv_with_target_model(monkeypatch) -> None:
    client = _install(monkeypatch, _StubResponse(200, b"66.2"))
    gateway = ModelEndpointGateway("http://inference/", headers={"X-Api-Key": "k"})

    output = await gateway.invoke("water", b"1,2,3,4\n", "model.tar.gz")

    assert output == b"66.2"
    url, content, headers = client.calls[0]
    assert url == "http://inference/endpoints/water/invocations"
    assert content == b"1,2,3,4\n"
    assert headers["Content-Type"] == "text/csv"
    assert headers[TARGET_MODEL_HEADER] == "model.tar.gz"
    assert headers["X-Api-Key"] == "k"


@pytest.mark.asyncio
async def test_invoke_without_target_model_omits_header(monkeypatch) -> None:
    client = _install(monkeypatch, _StubResponse(200, b"1"))

    await ModelEndpointGateway("http://inference").invoke("water", b"1\n", "")

    assert TARGET_MODEL_HEADER not in client.calls[0][2]


@pytest.mark.asyncio
async def test_http_error_carries_status_code(monkeypatch) -> None:
    _install(monkeypatch, _StubResponse(500))

    with pytest.raises(EndpointError) as exc_info:
        await ModelEndpointGateway("http://inference").invoke("water", b"1\n", "m")

    assert exc_info.value.status_code == 500


@pytest.mark.asyncio
async def test_transport_error_raises_endpoint_error(monkeypatch) -> None:
    _install(monkeypatch, httpx.ConnectError("refused"))

    with pytest.raises(EndpointError) as exc_info:
        await ModelEndpointGateway("http://inference").invoke("water", b"1\n", "m")

    assert exc_info.value.status_code is None


@pytest.mark.asyncio
async def test_missing_base_url_raises() -> None:
    with pytest.raises(EndpointError):
        await ModelEndpointGateway("").invoke("water", b"1\n", "m")
