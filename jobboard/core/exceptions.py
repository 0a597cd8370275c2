"""
Typed failures raised by the repository and access layers.

Each exception carries the HTTP status the API layer maps it to. The
repositories raise these and never translate them to responses themselves;
main.py registers a single handler for JobboardError.
"""


class JobboardError(Exception):
    """Base class for all application errors."""
    status_code = 500

    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message)
        self.message = message


class BadRequestError(JobboardError):
    """Client sent input the operation cannot act on."""
    status_code = 400

    def __init__(self, message: str = "Bad Request"):
        super().__init__(message)


class EmptyUpdateError(BadRequestError):
    """Partial update called with no fields."""

    def __init__(self, message: str = "No data"):
        super().__init__(message)


class InvalidFieldError(BadRequestError):
    """Partial update names a field outside the entity's permitted set."""

    def __init__(self, fields):
        self.fields = sorted(fields)
        super().__init__(f"Invalid field(s): {', '.join(self.fields)}")


class DuplicateError(BadRequestError):
    pass


class NotFoundError(JobboardError):
    status_code = 404

    def __init__(self, message: str = "Not Found"):
        super().__init__(message)


class UnauthorizedError(JobboardError):
    """Caller is identified but lacks the required role."""
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)
