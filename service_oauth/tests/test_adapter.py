"""
Unit tests for KeycloakAdapter and the response writer.
"""

import dataclasses
import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from fastapi import Request

from service_oauth.app.adapters.backend_client import BackendClient, Service
from service_oauth.app.keycloak.adapter import KeycloakAdapter, token_get_headers
from service_oauth.app.keycloak.configuration import load_configuration
from service_oauth.app.keycloak.credentials import Credentials
from service_oauth.app.keycloak.responses import respond, respond_with_error


@pytest.fixture
def configuration(token_generator):
    return load_configuration(
        "https://idp.example.com/openam",
        "customers",
        token_generator.raw_public_key,
    )


def _request(method="GET", path="/authorize", query=b"", body=b"", headers=None):
    raw_headers = [(k.lower().encode("latin-1"), v.encode("latin-1")) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": query,
        "headers": raw_headers,
        "scheme": "http",
        "server": ("gateway", 80),
    }

    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}

    return Request(scope, receive)


class TestRespond:
    """Test cases for the response writer."""

    def test_respond_with_error_envelope(self):
        response = respond_with_error(401, "invalid_client")

        assert response.status_code == 401
        assert response.body == b'{"error":"invalid_client"}'
        assert response.headers["content-type"] == "application/json;charset=UTF-8"

    def test_respond_copies_headers(self):
        upstream = httpx.Headers([
            ("Content-Type", "application/json"),
            ("Set-Cookie", "a=1"),
            ("Set-Cookie", "b=2"),
            ("Content-Encoding", "gzip"),
            ("Transfer-Encoding", "chunked"),
        ])

        response = respond(200, b"{}", upstream)

        assert response.headers["content-type"] == "application/json"
        assert response.headers.getlist("set-cookie") == ["a=1", "b=2"]
        assert "content-encoding" not in response.headers
        assert "transfer-encoding" not in response.headers
        assert response.headers["content-length"] == "2"

    def test_respond_without_headers(self):
        response = respond(204, None)

        assert response.status_code == 204
        assert response.body == b""


class TestKeycloakAdapter:
    """Test cases for KeycloakAdapter."""

    @pytest.fixture
    def backend(self):
        backend = BackendClient(Service(id="svc-1"), "http://backend.example.com")
        backend.authorize = AsyncMock(return_value=httpx.Response(200))
        return backend

    @pytest.mark.asyncio
    async def test_upstream_unreachable(self, configuration, backend):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        transport = httpx.MockTransport(handler)
        adapter = KeycloakAdapter(configuration, lambda: httpx.AsyncClient(transport=transport))
        request = _request(query=b"response_type=code&client_id=app&redirect_uri=https%3A%2F%2Fcb")

        response = await adapter.authorize(request, backend)

        assert response.status_code == 502
        assert json.loads(response.body) == {"error": "temporarily_unavailable"}

    @pytest.mark.asyncio
    async def test_backend_not_called_on_invalid_request(self, configuration, backend):
        adapter = KeycloakAdapter(configuration, MagicMock())

        response = await adapter.authorize(_request(query=b"client_id=app"), backend)

        assert response.status_code == 400
        backend.authorize.assert_not_called()
        adapter.client_factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_token_backend_args(self, configuration, backend):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"access_token": "t"}))
        adapter = KeycloakAdapter(configuration, lambda: httpx.AsyncClient(transport=transport))
        request = _request(
            method="POST",
            path="/oauth/token",
            body=b"grant_type=authorization_code&client_id=app&redirect_uri=https%3A%2F%2Fcb&code=c",
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )

        response = await adapter.get_token(request, backend)

        assert response.status_code == 200
        backend.authorize.assert_called_once_with({
            "app_id": "app",
            "app_key": None,
            "redirect_uri": "https://cb",
        })

    def test_token_get_headers(self):
        request = _request(headers={"Authorization": "Basic abc"})

        headers = token_get_headers(request)

        assert headers == {
            "Content-Type": "application/x-www-form-urlencoded",
            "Authorization": "Basic abc",
        }

    @pytest.mark.parametrize("ssl_verify", [True, False])
    def test_default_client_honours_ssl_toggle(self, configuration, ssl_verify):
        adapter = KeycloakAdapter(dataclasses.replace(configuration, ssl_verify=ssl_verify))

        with patch("httpx.AsyncClient") as mock_client:
            adapter.client_factory()

        mock_client.assert_called_once_with(verify=ssl_verify)


class TestTransformCredentials:
    """Access token to metering identity."""

    def test_valid_token(self, configuration, token_generator):
        adapter = KeycloakAdapter(configuration)
        token = token_generator.generate_access_token(audience="app-123", expires_in=3600)

        claims, err = adapter.transform_credentials(Credentials(access_token=token))

        assert err is None
        assert claims.app_id == "app-123"
        assert claims.ttl == pytest.approx(3600, abs=5)

    def test_invalid_token(self, configuration):
        adapter = KeycloakAdapter(configuration)

        claims, err = adapter.transform_credentials(Credentials(access_token="bogus"))

        assert claims is None
        assert err == "JWT not verified"

    def test_without_public_key(self, token_generator):
        adapter = KeycloakAdapter(load_configuration("https://idp.example.com", "customers"))
        token = token_generator.generate_access_token()

        claims, err = adapter.transform_credentials(Credentials(access_token=token))

        assert claims is None
        assert err == "JWT not verified"
