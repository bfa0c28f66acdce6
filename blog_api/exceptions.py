"""
Error kinds raised by the service layer.

Services raise these at the point of detection and never translate
them into transport codes; ``blog_api.exception_handlers`` does that at
the HTTP boundary.
"""


class BlogAPIError(Exception):
    """Base class for expected, client-caused failures."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(BlogAPIError):
    """The addressed record does not exist."""


class ReferenceNotFoundError(NotFoundError):
    """A record referenced by the request body (author, post) does not exist."""


class ConflictError(BlogAPIError):
    """A uniqueness rule would be violated."""
