"""
Required parameters for each OAuth2 grant type and response type (RFC 6749).
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

GRANT_TYPE_PARAMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "authorization_code": ("client_id", "redirect_uri", "code"),
    "password": ("client_id", "client_secret", "username", "password"),
    "client_credentials": ("client_id", "client_secret"),
})

RESPONSE_TYPE_PARAMS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "code": ("client_id", "redirect_uri"),
    "token": ("client_id", "redirect_uri"),
    "token id_token": ("client_id", "redirect_uri"),
})


@dataclass(frozen=True)
class ParamCheck:
    """Outcome of a parameter check; ``error`` is an OAuth error code."""

    ok: bool
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.ok


_OK = ParamCheck(ok=True)


def _check(params: Mapping[str, Optional[str]], field: str,
           table: Mapping[str, Tuple[str, ...]], unsupported: str) -> ParamCheck:
    declared = params.get(field)
    if not declared:
        return ParamCheck(ok=False, error="invalid_request")

    required = table.get(declared)
    if required is None:
        return ParamCheck(ok=False, error=unsupported)

    for name in required:
        if not params.get(name):
            return ParamCheck(ok=False, error="invalid_request")

    return _OK


def authorize_check_params(params: Mapping[str, Optional[str]]) -> ParamCheck:
    """Check an authorization request against its ``response_type``."""
    return _check(params, "response_type", RESPONSE_TYPE_PARAMS, "unsupported_response_type")


def token_check_params(params: Mapping[str, Optional[str]]) -> ParamCheck:
    """Check a token request against its ``grant_type``."""
    return _check(params, "grant_type", GRANT_TYPE_PARAMS, "unsupported_grant_type")
