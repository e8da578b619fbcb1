"""
OAuth adapter service: authorize and token endpoints in front of Keycloak/ForgeRock.
"""

from typing import Callable, Dict, Optional

import httpx
from fastapi import Request

from shared.base_service import BaseService
from shared.config import ServiceConfig
from .adapters.backend_client import BackendClient, Service
from .keycloak.adapter import KeycloakAdapter
from .keycloak.configuration import Configuration, enabled


class OAuthService(BaseService):
    """OAuth adapter service implementation."""

    def __init__(self, config: Optional[ServiceConfig] = None,
                 client_factory: Optional[Callable[[], httpx.AsyncClient]] = None):
        super().__init__("oauth", 8090, config=config)

        # Fails fast on a missing endpoint or realm.
        self.configuration = Configuration.from_settings(self.config)
        if not enabled(self.config):
            self.logger.warning(
                "OAuth adapter running in degraded mode",
                reason="realm public key not configured"
            )

        if client_factory is None:
            def client_factory() -> httpx.AsyncClient:
                return httpx.AsyncClient(verify=self.configuration.ssl_verify)

        self.adapter = KeycloakAdapter(self.configuration, client_factory, metrics=self.metrics)
        self.backend = BackendClient(
            Service.from_settings(self.config),
            self.config.backend_endpoint,
            client_factory=client_factory,
        )

        self._setup_oauth_routes()

    def _setup_oauth_routes(self):
        """Set up the OAuth endpoints."""

        @self.app.get("/")
        async def root():
            """Root endpoint."""
            return {
                "service": "oauth",
                "message": "OAuth Gateway - Keycloak adapter",
                "version": "1.0.0",
                "realm": self.configuration.realm
            }

        @self.app.get("/authorize")
        async def authorize(request: Request):
            """OAuth2 authorization endpoint."""
            return await self.adapter.authorize(request, self.backend)

        @self.app.post("/oauth/token")
        async def token(request: Request):
            """OAuth2 token endpoint."""
            return await self.adapter.get_token(request, self.backend)

    async def _check_dependencies(self) -> Dict[str, str]:
        """Report identity provider readiness without calling it."""
        return {
            "identity_provider": "ok" if enabled(self.config) else "degraded",
        }


def create_app(config: Optional[ServiceConfig] = None,
               client_factory: Optional[Callable[[], httpx.AsyncClient]] = None):
    """Create FastAPI application."""
    service = OAuthService(config=config, client_factory=client_factory)
    return service.app


if __name__ == "__main__":
    service = OAuthService()
    service.run()
