"""Exceptions raised while refining duplicate sets."""


class DuplicateSetError(ValueError):
    """Base exception for malformed duplicate set input."""

    pass


class MalformedTagError(DuplicateSetError):
    """Raised when molecular identifiers in one duplicate set differ in length."""

    def __init__(self, message="", umis=None):
        super().__init__(message)
        self.umis = umis


class UnexpectedOrientationError(DuplicateSetError):
    """Raised when a read end has an orientation other than FR or RF."""

    def __init__(self, message="", orientation=None):
        super().__init__(message)
        self.orientation = orientation


class OpticalFinderError(DuplicateSetError):
    """Raised when the optical duplicate finder breaks its output contract."""

    pass
