"""
Outbound adapters for the OAuth service.
"""

from .backend_client import BackendClient, Service, check_credentials

__all__ = [
    "BackendClient",
    "Service",
    "check_credentials",
]
