"""
JWT verification against the realm public key.
"""

import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel

from shared.logging import get_logger

ALGORITHMS = ["RS256", "RS384", "RS512"]
NOT_VERIFIED = "JWT not verified"

logger = get_logger("oauth.jwt")


class TokenVerificationResult(BaseModel):
    """Result of verifying an access token."""
    verified: bool
    payload: Optional[Dict[str, Any]] = None
    reason: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class VerifiedClaims:
    """Caller identity extracted from a verified token.

    ``ttl`` is None when the token carries no expiry.
    """

    app_id: Any
    ttl: Optional[float] = None


def timestamp_to_seconds_from_now(expiry: Optional[float], now: Optional[float] = None) -> Optional[float]:
    if expiry is None:
        return None
    return expiry - (time.time() if now is None else now)


def parse_and_verify_token(public_key: Optional[str], token: Optional[str]) -> TokenVerificationResult:
    """Verify the token signature and return its payload.

    Only the signature (and ``exp``/``nbf`` when present) is checked;
    audience and issuer policy belong to the caller.
    """
    if not public_key:
        reason = "missing public key"
    elif not token:
        reason = "missing token"
    else:
        try:
            payload = jwt.decode(
                token,
                public_key,
                algorithms=ALGORITHMS,
                options={"verify_aud": False, "verify_iss": False},
            )
            return TokenVerificationResult(verified=True, payload=payload)
        except jwt.PyJWTError as e:
            reason = str(e) or e.__class__.__name__

    logger.info("[jwt] failed verification for token", reason=reason)
    return TokenVerificationResult(verified=False, reason=reason, error=NOT_VERIFIED)


def claims_from_payload(payload: Dict[str, Any], now: Optional[float] = None) -> VerifiedClaims:
    """Map a verified payload to the app id (audience) and time to live."""
    return VerifiedClaims(
        app_id=payload.get("aud"),
        ttl=timestamp_to_seconds_from_now(payload.get("exp"), now),
    )
