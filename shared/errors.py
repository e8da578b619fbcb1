"""
Shared error handling for the OAuth gateway adapter.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format for unexpected failures."""

    code: str
    message: str
    details: Dict[str, Any] = {}


class AccessLayerException(Exception):
    """Base exception for gateway services."""

    status_code = 400

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(AccessLayerException):
    """Identity provider configuration is incomplete. Fatal at startup."""

    status_code = 500

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class OAuthError(AccessLayerException):
    """Errors surfaced to OAuth clients as ``{"error": <code>}``."""

    def __init__(self, error: str, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.error = error
        super().__init__(error.upper(), message or error, details)


class ValidationError(OAuthError):
    """Missing or unsupported OAuth request parameters."""

    status_code = 400

    def __init__(self, error: str = "invalid_request", details: Optional[Dict[str, Any]] = None):
        super().__init__(error, details=details)


class AuthorizationError(OAuthError):
    """The backend refused the client credentials."""

    status_code = 401

    def __init__(self, error: str = "invalid_client", details: Optional[Dict[str, Any]] = None):
        super().__init__(error, details=details)


class UpstreamRelayError(OAuthError):
    """The identity provider could not be reached at all."""

    status_code = 502

    def __init__(self, message: str = "Identity provider unavailable", details: Optional[Dict[str, Any]] = None):
        super().__init__("temporarily_unavailable", message, details)
