"""
Realm public key formatting.

Keycloak and ForgeRock publish the realm signing key as bare base64 DER.
PyJWT wants a PEM document, so the raw material is wrapped here.
"""

from typing import Optional

from shared.errors import ConfigurationError
from shared.logging import get_logger

PEM_HEADER = "-----BEGIN PUBLIC KEY-----"
PEM_FOOTER = "-----END PUBLIC KEY-----"
PEM_LINE_LENGTH = 64

logger = get_logger("oauth.keys")


def format_public_key(key: Optional[str]) -> str:
    """Wrap a raw realm public key into PKCS#8 PEM.

    The body is split into 64 character lines; the last line may be shorter.
    No newline follows the footer.
    """
    if not key:
        raise ConfigurationError("missing key")

    lines = [PEM_HEADER]
    lines.extend(key[i:i + PEM_LINE_LENGTH] for i in range(0, len(key), PEM_LINE_LENGTH))
    lines.append(PEM_FOOTER)
    return "\n".join(lines)


def get_public_key(raw_key: Optional[str]) -> Optional[str]:
    """Format the configured key, or return None when none is configured."""
    logger.debug("Realm public key", public_key=raw_key)

    key = (raw_key or "").strip()
    if not key:
        return None

    return format_public_key(key)
