"""Error taxonomy shared by the auth core and the API boundary.

Every error carries a client-safe ``message`` and the HTTP ``status_code`` the
API layer answers with. Messages never include secrets, hashes, or tokens.
"""


class RegistrarError(Exception):
    """Base class for errors that map to a JSON ``{"message": ...}`` response."""

    status_code = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class ValidationError(RegistrarError):
    """Malformed or missing input; user-correctable."""

    status_code = 400


class InvalidInputError(ValidationError):
    """Input rejected by a low-level primitive (e.g. empty secret passed to the hasher)."""


class ConflictError(RegistrarError):
    """Username or email already taken."""

    status_code = 400


class AuthError(RegistrarError):
    """Bad credentials, inactive account, or missing/invalid bearer token."""

    status_code = 401


class ForbiddenError(RegistrarError):
    """Authenticated caller lacks the role a route requires."""

    status_code = 403


class NotFoundError(RegistrarError):
    """Referenced identity does not exist (or is no longer active)."""

    status_code = 404


class InternalError(RegistrarError):
    """Unexpected store or crypto failure. The message shown to clients is generic."""

    status_code = 500

    def __init__(self, message: str = "Internal server error.") -> None:
        super().__init__(message)


class ConfigError(Exception):
    """Missing or invalid signing configuration. Fatal at startup."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
