"""
Backend authorization service client for the OAuth adapter.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

import httpx

from shared.logging import get_logger

OAUTH_AUTHORIZE_PATH = "/transactions/oauth_authorize.xml"

ClientFactory = Callable[[], httpx.AsyncClient]


@dataclass(frozen=True)
class Service:
    """Backend service the authorize/token calls are metered against."""

    id: str
    backend_authentication_type: str = "service_token"
    backend_authentication_value: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "Service":
        return cls(
            id=settings.backend_service_id,
            backend_authentication_type=settings.backend_authentication_type,
            backend_authentication_value=settings.backend_authentication_value,
        )


class BackendClient:
    """Client for the backend authorization service bound to one service."""

    def __init__(self, service: Service, backend_endpoint: str,
                 client_factory: Optional[ClientFactory] = None):
        self.service = service
        self.backend_endpoint = backend_endpoint
        self.client_factory = client_factory or httpx.AsyncClient
        self.logger = get_logger("oauth.backend_client")

    def _query(self, args: Dict[str, Any]) -> Dict[str, str]:
        query = {"service_id": self.service.id}
        if self.service.backend_authentication_value:
            query[self.service.backend_authentication_type] = self.service.backend_authentication_value
        query.update({key: value for key, value in args.items() if value is not None})
        return query

    async def authorize(self, args: Dict[str, Any]) -> httpx.Response:
        """Call the backend OAuth authorize endpoint with the given app credentials."""
        url = f"{self.backend_endpoint.rstrip('/')}{OAUTH_AUTHORIZE_PATH}"
        async with self.client_factory() as client:
            return await client.get(url, params=self._query(args))


async def check_credentials(backend: BackendClient, params) -> bool:
    """Ask the backend whether the client may use this service.

    Only HTTP 200 authorizes; any other status or a transport failure does not.
    """
    args = {
        "app_id": params.get("client_id"),
        "app_key": params.get("client_secret"),
        "redirect_uri": params.get("redirect_uri"),
    }

    try:
        response = await backend.authorize(args)
    except httpx.HTTPError as e:
        backend.logger.warning(
            "Backend authorization unavailable",
            service_id=backend.service.id,
            error=str(e)
        )
        return False

    if response.status_code != 200:
        backend.logger.info(
            "Backend refused client",
            service_id=backend.service.id,
            app_id=args["app_id"],
            status_code=response.status_code
        )
        return False

    return True
