"""
Shared fixtures for the OAuth adapter tests.
"""

from typing import Callable, List

import httpx
import pytest

from shared.test_helpers import MockTokenGenerator, TestClientApp, test_environment


@pytest.fixture(scope="session")
def token_generator():
    """Realm signing key shared across the session; RSA generation is slow."""
    return MockTokenGenerator()


@pytest.fixture
def client_app():
    return TestClientApp()


@pytest.fixture
def oauth_env(monkeypatch, token_generator):
    """Identity provider and backend settings exported to the environment."""
    env = test_environment.get_mock_config(public_key=token_generator.raw_public_key)
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    return env


class UpstreamRecorder:
    """Fake backend + identity provider behind an httpx.MockTransport."""

    def __init__(self, backend_status: int = 200, idp_response: httpx.Response = None):
        self.backend_status = backend_status
        self.idp_response = idp_response or httpx.Response(
            302,
            headers={"Location": "https://client.example.com/callback?code=abc"},
        )
        self.backend_requests: List[httpx.Request] = []
        self.idp_requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.host == "backend.example.com":
            self.backend_requests.append(request)
            return httpx.Response(self.backend_status, text="<status/>")

        self.idp_requests.append(request)
        return self.idp_response

    def client_factory(self) -> Callable[[], httpx.AsyncClient]:
        transport = httpx.MockTransport(self.handler)
        return lambda: httpx.AsyncClient(transport=transport)


@pytest.fixture
def upstream():
    return UpstreamRecorder()
