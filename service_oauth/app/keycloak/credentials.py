"""
Client credential extraction for token requests.
"""

import base64
import binascii
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from fastapi.security.utils import get_authorization_scheme_param


@dataclass(frozen=True)
class Credentials:
    """Per-request client credentials. Never persisted."""

    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    redirect_uri: Optional[str] = None
    access_token: Optional[str] = None


def parse_basic_authorization(header: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """Decode an HTTP Basic header into (userid, password).

    Anything that is not a well formed Basic credential yields (None, None).
    """
    scheme, param = get_authorization_scheme_param(header)
    if scheme.lower() != "basic" or not param:
        return None, None

    try:
        decoded = base64.b64decode(param, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError):
        return None, None

    userid, separator, password = decoded.partition(":")
    if not separator:
        return None, None

    return userid, password


def get_client_credentials(authorization: Optional[str], body: Mapping[str, str]) -> Credentials:
    """Resolve client credentials, preferring the Authorization header over the body."""
    userid, password = parse_basic_authorization(authorization)
    if userid is None:
        userid, password = body.get("client_id"), body.get("client_secret")

    return Credentials(
        client_id=userid,
        client_secret=password,
        redirect_uri=body.get("redirect_uri"),
        access_token=body.get("access_token"),
    )
