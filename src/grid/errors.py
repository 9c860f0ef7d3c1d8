"""Error kinds reported by grid operations."""


class GridError(ValueError):
    """Base for every rejected grid operation. Carries the error kind and offending name."""

    kind = "GRID_ERROR"

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class InvalidName(GridError):
    """Raised when an empty or blank subject/criterion name is supplied."""

    kind = "INVALID_NAME"


class DuplicateName(GridError):
    """Raised when an add or rename would collide with a live name."""

    kind = "DUPLICATE_NAME"


class NotFound(GridError, LookupError):
    """Raised when an operation references a subject/criterion that is not live."""

    kind = "NOT_FOUND"


class MalformedBlob(GridError):
    """Raised when a persisted blob does not parse into the grid document shape."""

    kind = "MALFORMED_BLOB"
