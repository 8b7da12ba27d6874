"""
Error taxonomy for django-inkwell.

Every domain operation fails with one of these. Views translate them
into the JSON envelope using ``status_code`` and ``message``.
"""


class InkwellError(Exception):
    """Base class for all domain errors."""

    status_code = 500
    default_message = "Server error"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(InkwellError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Invalid input"


class Unauthenticated(InkwellError):
    """No valid credential was supplied."""

    status_code = 401
    default_message = "Authentication required"


class Unauthorized(InkwellError):
    """The actor is authenticated but may not touch this entity."""

    status_code = 403
    default_message = "Not authorized"


class NotFound(InkwellError):
    status_code = 404
    default_message = "Not found"


class Conflict(InkwellError):
    """The request collides with existing state."""

    status_code = 409
    default_message = "Conflict"


class InternalError(InkwellError):
    status_code = 500
    default_message = "Server error"
