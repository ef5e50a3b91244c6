# Error taxonomy for the clinic directory
from typing import Dict, Optional


class DirectoryError(Exception):
    """Base class for directory errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnknownFilterKey(DirectoryError, KeyError):
    """A filter key outside the fixed set. Programming error, never swallowed."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Unknown filter key: {key}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return self.message


class PillNotOpen(DirectoryError):
    """Draft edits are only accepted by the pill that is currently open."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Filter pill '{key}' is not open")


class DataSourceError(DirectoryError):
    """Fetching or searching clinics failed."""


class ClinicValidationError(DirectoryError):
    """Add-clinic payload rejected; errors maps form field -> message."""

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None):
        self.errors = errors
        super().__init__(message or "Clinic payload is invalid")
