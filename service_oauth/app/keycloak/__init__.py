"""
Keycloak/ForgeRock OAuth2 adapter.
"""

from .adapter import KeycloakAdapter, token_get_headers
from .configuration import Configuration, enabled, load_configuration
from .credentials import Credentials, get_client_credentials
from .jwt_verifier import TokenVerificationResult, VerifiedClaims, parse_and_verify_token
from .keys import format_public_key
from .params import ParamCheck, authorize_check_params, token_check_params
from .responses import respond, respond_with_error

__all__ = [
    "Configuration",
    "Credentials",
    "KeycloakAdapter",
    "ParamCheck",
    "TokenVerificationResult",
    "VerifiedClaims",
    "authorize_check_params",
    "enabled",
    "format_public_key",
    "get_client_credentials",
    "load_configuration",
    "parse_and_verify_token",
    "respond",
    "respond_with_error",
    "token_check_params",
    "token_get_headers",
]
