"""
Domain error taxonomy

Every failure that the booking core reports to its caller is one of the
classes below. Each carries a stable ``kind`` that the routing layer maps
to a response, and a human readable message.
"""

from typing import Any, Dict


class DomainError(Exception):
    """Base class for typed domain failures"""

    kind = 'domain_error'

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind, 'message': self.message}


class NotFound(DomainError):
    """Room or booking does not exist"""

    kind = 'not_found'


class InvalidInput(DomainError):
    """Malformed dates, unknown enum value or missing required field"""

    kind = 'invalid_input'

    def __init__(self, message: str, errors: Dict[str, Any] | None = None):
        super().__init__(message)
        self.errors = errors or {}

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.errors:
            payload['errors'] = self.errors
        return payload


class Conflict(DomainError):
    """Date overlap, unavailable room, active bookings or illegal transition"""

    kind = 'conflict'


class Forbidden(DomainError):
    """Caller lacks ownership or role"""

    kind = 'forbidden'
