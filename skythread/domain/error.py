"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class InvalidReferenceError(DomainError):
    """Raised when a thread reference is missing or not an AT URI."""

    def __init__(self, reference: object):
        self.reference = reference
        super().__init__(f"Invalid post reference: {reference!r}")


class ThreadStructureError(DomainError):
    """Raised when a thread document lacks the expected root shape."""

    def __init__(self, message: str):
        super().__init__(message)
