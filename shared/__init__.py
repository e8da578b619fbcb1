"""
Shared utilities for the OAuth adapter.

This package aggregates common building blocks consumed by the service:

- config: Service configuration via pydantic-settings
- logging: Structured logging with request/client correlation
- metrics: Prometheus metrics helpers
- errors: Canonical error types and the 500 error envelope
- base_service: FastAPI service skeleton (health, metrics, 500 handler)

Do not import from service packages into shared/.
"""
