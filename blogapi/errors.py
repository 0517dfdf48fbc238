class BlogError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message=None):
        super().__init__(message or self.default_message)


class ValidationError(BlogError, ValueError):
    status_code = 400
    default_message = "Invalid request"


class Unauthorized(BlogError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(BlogError):
    status_code = 403
    default_message = "Forbidden"


class NotFound(BlogError):
    status_code = 404
    default_message = "Not found"


class ConflictError(BlogError):
    """A write lost against a uniqueness constraint."""

    status_code = 409
    default_message = "Conflict"
