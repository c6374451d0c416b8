"""Error taxonomy shared by the form engine and the registration service."""

from typing import Optional


class UdyamError(Exception):
    """Base class for all wizard and service errors."""


class ValidationError(UdyamError, ValueError):
    """User-correctable input problem (field-level or step-level).

    Args:
        message: Human-readable message shown to the user
        field_id: Field the message belongs to, if any
    """

    def __init__(self, message: str, field_id: Optional[str] = None):
        self.message = message
        self.field_id = field_id
        super().__init__(message)


class NotFoundError(UdyamError):
    """No registration record matches the identifier."""

    def __init__(self, registration_id: str):
        self.registration_id = registration_id
        super().__init__(f"Registration not found: {registration_id}")


class TransportError(UdyamError):
    """Network failure or unreachable service."""


class ServiceError(UdyamError):
    """Remote service answered with an error envelope."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"Service error {status_code}: {message}")


class ServerError(UdyamError):
    """Unexpected persistence or service failure."""
