"""
Identity provider configuration for the OAuth adapter.
"""

from dataclasses import dataclass
from typing import Optional

from shared.config import BaseConfig
from shared.errors import ConfigurationError
from shared.logging import get_logger
from .keys import get_public_key

AUTHORIZE_PATH = "/oauth2/authorize"
TOKEN_PATH = "/oauth2/access_token"

logger = get_logger("oauth.configuration")


def join_url(base: str, path: str) -> str:
    """Append ``path`` to ``base`` keeping exactly one slash between them."""
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


@dataclass(frozen=True)
class Configuration:
    """Resolved identity provider endpoints and verification key."""

    endpoint: str
    realm: str
    authorize_url: str
    token_url: str
    public_key: Optional[str] = None
    ssl_verify: bool = False

    @property
    def can_verify_tokens(self) -> bool:
        return self.public_key is not None

    @classmethod
    def from_settings(cls, settings: BaseConfig) -> "Configuration":
        return load_configuration(
            settings.forgerock_endpoint,
            settings.forgerock_realm,
            settings.forgerock_public_key,
            ssl_verify=settings.openssl_verify,
        )


def load_configuration(
    endpoint: Optional[str],
    realm: Optional[str],
    public_key: Optional[str] = None,
    *,
    ssl_verify: bool = False,
) -> Configuration:
    """Build the adapter configuration. Pure; performs no network calls.

    Raises:
        ConfigurationError: if the endpoint or the realm is missing.
    """
    if not endpoint:
        raise ConfigurationError("missing endpoint configuration")

    if not realm:
        raise ConfigurationError("missing realm")

    pem = get_public_key(public_key)
    if pem is None:
        logger.warning(
            "No realm public key configured, access tokens cannot be verified",
            endpoint=endpoint,
            realm=realm,
        )

    return Configuration(
        endpoint=endpoint,
        realm=realm,
        authorize_url=join_url(endpoint, AUTHORIZE_PATH),
        token_url=f"{join_url(endpoint, TOKEN_PATH)}?realm={realm}",
        public_key=pem,
        ssl_verify=ssl_verify,
    )


def enabled(settings: BaseConfig) -> bool:
    """True when endpoint, public key and realm are all configured."""
    return bool(
        settings.forgerock_endpoint
        and settings.forgerock_public_key
        and settings.forgerock_realm
    )
