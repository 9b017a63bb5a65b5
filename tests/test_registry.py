"""Tests for the vehicle registry proxy."""
import asyncio

import httpx
import pytest

from vininfo.config import Settings
from vininfo.core.exceptions import ConfigError, NotFoundError, TransientProviderError, ValidationError
from vininfo.infrastructure.registry_client import RegistryClient
from vininfo.interfaces.deps import get_registry_client
from vininfo.main import app

REGISTRY_URL = "https://registry.example/api/vehicle"
VEHICLE = {"VIN": "TMBJJ7NE8J0123456", "TovarniZnacka": "ŠKODA", "ObchodniOznaceni": "OCTAVIA"}


def make_registry(status=200, body=None, api_key="reg-key", seen=None):
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status, json=body if body is not None else VEHICLE)

    settings = Settings(REGISTRY_API_URL=REGISTRY_URL, REGISTRY_API_KEY=api_key)
    return RegistryClient(settings, transport=httpx.MockTransport(handler))


class TestRegistryClient:

    def test_lookup_by_vin(self):
        seen = []
        result = asyncio.run(make_registry(seen=seen).lookup(vin=" TMBJJ7NE8J0123456 ", tp="UD1"))
        assert result == VEHICLE
        [request] = seen
        assert request.url.params["vin"] == "TMBJJ7NE8J0123456"
        assert "tp" not in request.url.params
        assert request.headers["api_key"] == "reg-key"

    def test_lookup_by_orv(self):
        seen = []
        asyncio.run(make_registry(seen=seen).lookup(orv="123456"))
        assert seen[0].url.params["orv"] == "123456"

    def test_no_identifier(self):
        with pytest.raises(ValidationError):
            asyncio.run(make_registry().lookup())

    def test_missing_key(self):
        with pytest.raises(ConfigError):
            asyncio.run(make_registry(api_key="").lookup(vin="X"))

    def test_not_found(self):
        with pytest.raises(NotFoundError):
            asyncio.run(make_registry(status=404, body={}).lookup(vin="X"))

    def test_upstream_failure(self):
        with pytest.raises(TransientProviderError) as exc_info:
            asyncio.run(make_registry(status=503, body={}).lookup(vin="X"))
        assert exc_info.value.details == {"upstream_status": 503}


class TestRegistryEndpoint:

    def test_passes_json_through(self, client):
        app.dependency_overrides[get_registry_client] = lambda: make_registry()
        resp = client.get("/api/vehicle", params={"vin": "TMBJJ7NE8J0123456"})
        assert resp.status_code == 200
        assert resp.json() == VEHICLE

    def test_no_identifier(self, client):
        app.dependency_overrides[get_registry_client] = lambda: make_registry()
        resp = client.get("/api/vehicle")
        assert resp.status_code == 400

    def test_upstream_failure(self, client):
        app.dependency_overrides[get_registry_client] = lambda: make_registry(status=500, body={})
        resp = client.get("/api/vehicle", params={"vin": "X"})
        assert resp.status_code == 502
        assert resp.json()["error"]["code"] == "TransientProviderError"
