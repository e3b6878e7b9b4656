"""Tests for the upstream catalogue client and its cache."""

import httpx
import pytest

from nivelador.catalog_client import CatalogCache, CatalogClient


GRADOS = [{"id": 1, "nombre": "1° Primaria"}, {"id": 2, "nombre": "2° Primaria"}]
DESEMPENOS = [
    {"id": 10, "codigo": "C1", "descripcion": "Cuenta hasta 20", "categoria": "Cantidad"},
    {"id": 11, "codigo": "C2", "descripcion": "Compara cantidades", "categoria": "Cantidad"},
]


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/grados":
        return httpx.Response(200, json=GRADOS)
    if request.url.path == "/grados/1/desempenos":
        return httpx.Response(200, json=DESEMPENOS)
    return httpx.Response(404, json={"detail": "not found"})


def _client(handler=_handler):
    return CatalogClient("http://catalogo.test", transport=httpx.MockTransport(handler))


def test_requires_base_url(monkeypatch):
    from nivelador.settings import settings

    monkeypatch.setattr(settings, "catalog_base_url", None)
    with pytest.raises(ValueError):
        CatalogClient()


@pytest.mark.asyncio
async def test_list_grados():
    client = _client()
    try:
        grados = await client.list_grados()
    finally:
        await client.aclose()
    assert [g.nombre for g in grados] == ["1° Primaria", "2° Primaria"]


@pytest.mark.asyncio
async def test_list_desempenos_sets_grado():
    client = _client()
    try:
        items = await client.list_desempenos(1)
    finally:
        await client.aclose()
    assert [d.id for d in items] == [10, 11]
    assert all(d.grado_id == 1 for d in items)


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_lists():
    cache = CatalogCache()
    good = _client()
    await cache.refresh_grados(good)
    await cache.refresh_desempenos(good, 1)
    await good.aclose()

    def broken(request):
        raise httpx.ConnectError("connection refused", request=request)

    bad = _client(broken)
    assert [g.id for g in await cache.refresh_grados(bad)] == [1, 2]
    assert [d.id for d in await cache.refresh_desempenos(bad, 1)] == [10, 11]
    await bad.aclose()


@pytest.mark.asyncio
async def test_error_status_before_any_success_gives_empty_list():
    cache = CatalogCache()
    client = _client()
    assert await cache.refresh_desempenos(client, 99) == []
    await client.aclose()


@pytest.mark.asyncio
async def test_unexpected_payload_is_ignored():
    cache = CatalogCache()
    client = _client(lambda request: httpx.Response(200, json={"error": "oops"}))
    assert await cache.refresh_grados(client) == []
    await client.aclose()
