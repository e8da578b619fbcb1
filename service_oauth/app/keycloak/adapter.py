"""
Keycloak/ForgeRock OAuth2 adapter.

Validates authorize and token calls, checks the client with the backend
authorization service and relays the request to the identity provider.
"""

from contextlib import nullcontext
from typing import Callable, Dict, Optional, Tuple
from urllib.parse import parse_qsl

import httpx
from fastapi import Request, Response

from shared.errors import AuthorizationError, OAuthError, UpstreamRelayError, ValidationError
from shared.logging import get_logger, set_client_context
from shared.metrics import MetricsCollector
from service_oauth.app.adapters.backend_client import BackendClient, check_credentials
from .configuration import Configuration
from .credentials import Credentials, get_client_credentials
from .jwt_verifier import VerifiedClaims, claims_from_payload, parse_and_verify_token
from .params import authorize_check_params, token_check_params
from .responses import respond, respond_with_error

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def token_get_headers(request: Request) -> Dict[str, str]:
    """Headers passed to the identity provider on the token request.

    The Authorization header carries confidential client authentication.
    """
    headers = {"Content-Type": request.headers.get("Content-Type", FORM_CONTENT_TYPE)}
    authorization = request.headers.get("Authorization")
    if authorization:
        headers["Authorization"] = authorization
    return headers


class KeycloakAdapter:
    """Authorize and token endpoints fronting the identity provider."""

    def __init__(self, configuration: Configuration,
                 client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = configuration
        self.client_factory = client_factory or self._default_client
        self.metrics = metrics
        self.logger = get_logger("oauth.keycloak")

    def _default_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(verify=self.config.ssl_verify)

    def _record(self, flow: str, outcome: str) -> None:
        if self.metrics:
            self.metrics.increment_counter("oauth_requests_total", flow=flow, outcome=outcome)

    def _timer(self, flow: str):
        if self.metrics:
            return self.metrics.time_operation("upstream_request_duration_seconds", flow=flow)
        return nullcontext()

    def _reject(self, flow: str, error: OAuthError) -> Response:
        self._record(flow, error.error)
        return respond_with_error(error.status_code, error.error)

    async def _check_client(self, backend: BackendClient, params) -> bool:
        authorized = await check_credentials(backend, params)
        if self.metrics:
            self.metrics.increment_counter(
                "backend_authorizations_total",
                result="authorized" if authorized else "refused",
            )
        return authorized

    async def _relay(self, flow: str, method: str, url: str, **kwargs) -> Response:
        try:
            async with self.client_factory() as client:
                with self._timer(flow):
                    res = await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            self.logger.error("Identity provider request failed", flow=flow, url=url, error=str(e))
            return self._reject(flow, UpstreamRelayError(details={"url": url, "error": str(e)}))

        self.logger.info("Relaying identity provider response", flow=flow, status_code=res.status_code)
        self._record(flow, "relayed")
        return respond(res.status_code, res.content, res.headers)

    async def authorize(self, request: Request, backend: BackendClient) -> Response:
        """Authorization endpoint: validate, check the client, forward the query."""
        params = request.query_params
        set_client_context(params.get("client_id"))

        check = authorize_check_params(params)
        if not check:
            self.logger.info("Authorization request rejected", error=check.error)
            return self._reject("authorize", ValidationError(check.error))

        if not await self._check_client(backend, params):
            return self._reject("authorize", AuthorizationError())

        url = self.config.authorize_url
        if request.url.query:
            url = f"{url}?{request.url.query}"

        return await self._relay("authorize", "GET", url)

    async def get_token(self, request: Request, backend: BackendClient) -> Response:
        """Token endpoint: validate, check the client, forward the form body."""
        body = await request.body()
        try:
            form = body.decode("utf-8")
        except UnicodeDecodeError:
            self.logger.info("Token request rejected", error="invalid_request", reason="body is not UTF-8")
            return self._reject("token", ValidationError())
        params = dict(parse_qsl(form, keep_blank_values=True))

        creds = get_client_credentials(request.headers.get("Authorization"), params)
        params["client_id"] = creds.client_id
        params["client_secret"] = creds.client_secret
        set_client_context(creds.client_id)

        check = token_check_params(params)
        if not check:
            self.logger.info("Token request rejected", error=check.error, grant_type=params.get("grant_type"))
            return self._reject("token", ValidationError(check.error))

        if not await self._check_client(backend, params):
            return self._reject("token", AuthorizationError())

        return await self._relay(
            "token", "POST", self.config.token_url,
            content=body,
            headers=token_get_headers(request),
        )

    def transform_credentials(self, credentials: Credentials) -> Tuple[Optional[VerifiedClaims], Optional[str]]:
        """Turn an access token into the app id and ttl used for metering."""
        result = parse_and_verify_token(self.config.public_key, credentials.access_token)
        if not result.verified:
            return None, result.error

        return claims_from_payload(result.payload or {}), None
