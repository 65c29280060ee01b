"""Shared fixtures: a tiny boundary document, a lookup table and a fake network."""

from __future__ import annotations

import json

import httpx
import pytest

BOUNDARIES_URL = "https://example.test/departements.geojson"
LOOKUP_URL = "https://example.test/specialites.csv"


def square(lon: float, lat: float, size: float = 1.0) -> dict:
    return {
        "type": "Polygon",
        "coordinates": [[
            [lon, lat],
            [lon + size, lat],
            [lon + size, lat + size],
            [lon, lat + size],
            [lon, lat],
        ]],
    }


def feature(code: str, nom: str, geometry: dict) -> dict:
    return {"type": "Feature", "properties": {"code": code, "nom": nom}, "geometry": geometry}


@pytest.fixture
def boundaries_doc() -> dict:
    return {
        "type": "FeatureCollection",
        "features": [
            feature("01", "Ain", square(5.0, 46.0)),
            feature("75", "Paris", square(2.0, 48.0, 0.2)),
            feature("971", "Guadeloupe", square(-62.0, 16.0, 0.5)),
            feature("974", "La Réunion", square(55.0, -21.5, 0.6)),
        ],
    }


@pytest.fixture
def lookup_csv() -> str:
    return (
        "code,nom,specialite\n"
        "01,Ain,Volailles de Bresse\n"
        "75,Paris,Jambon-beurre\n"
        "974,La Réunion,Rougail saucisse\n"
    )


def make_client(boundaries: dict | None, lookup: str | None) -> httpx.AsyncClient:
    """Async client whose transport serves the given documents.

    ``None`` makes the corresponding URL fail with a connection error.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if str(request.url) == BOUNDARIES_URL:
            if boundaries is None:
                raise httpx.ConnectError("boundaries unreachable", request=request)
            return httpx.Response(200, text=json.dumps(boundaries))
        if str(request.url) == LOOKUP_URL:
            if lookup is None:
                raise httpx.ConnectError("lookup unreachable", request=request)
            return httpx.Response(200, text=lookup)
        return httpx.Response(404)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.fixture
def fake_network():
    return make_client
