"""
OAuth adapter service package.

Fronts a Keycloak/ForgeRock identity provider for the authorize and token
endpoints:

- app.main: Application entrypoint that wires routes and lifecycle.
- app.keycloak: Parameter validation, credential extraction, JWT
  verification and the flow orchestration itself.
- app.adapters: Client for the backend authorization service.

Module import must not perform network calls; configuration is resolved
when the service is constructed.
"""
