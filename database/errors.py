"""Error types raised by the backend layer."""

from utils.constants import UNIQUE_VIOLATION_CODE


class BackendError(Exception):
    """A select/insert/delete/subscribe call failed on the backend."""

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        self.code = code

    @property
    def is_unique_violation(self) -> bool:
        return self.code == UNIQUE_VIOLATION_CODE


class DuplicateOptionError(BackendError):
    """Insert rejected by the unique constraint on a configuration list."""

    def __init__(self, name: str, message: str = "", code: str | None = UNIQUE_VIOLATION_CODE):
        super().__init__(message or f"'{name}' already exists", code)
        self.name = name


class BackendUnavailableError(Exception):
    """The backend client could not be initialised (missing library or config)."""


class ValidationError(ValueError):
    """Input rejected before any network call."""
