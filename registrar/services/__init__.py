"""Business services."""

from registrar.services.auth import AuthGateway

__all__ = ["AuthGateway"]
