"""Exception classes and error handling"""

import enum
import sys
from typing import NoReturn

import rich.console

# Error return codes, mostly just distinguished for the benefit of tests.
# These start at 10 just to leave some room for future use.
ARGS_INVALID = 10
CODE_TABLE_INVALID = 11
PERMISSION_DENIED = 12
STORE_UNREADABLE = 13


class FatalError(Exception):
    """An unrecoverable error"""

    status = 1


class PermissionDeniedError(FatalError):
    """We were not allowed to read the user's immunization records"""

    status = PERMISSION_DENIED


class StoreUnreadableError(FatalError):
    """The record store could not be read at all"""

    status = STORE_UNREADABLE


class DecodeCause(enum.Enum):
    """Why a single record could not be decoded"""

    MISSING_FIELD = "missing field"
    MALFORMED_DATE = "malformed date"
    MALFORMED_PAYLOAD = "malformed payload"
    UNSUPPORTED_VERSION = "unsupported version"


class DecodeError(Exception):
    """
    A single record could not be turned into an immunization fact.

    These are recoverable: a scan records them and moves on to the next record.
    Two errors are equal if they share the same resource type, cause, and field.
    """

    def __init__(
        self, resource_type: str, cause: DecodeCause, field: str | None = None, detail: str = ""
    ):
        self.resource_type = resource_type
        self.cause = cause
        self.field = field
        self.detail = detail
        super().__init__(str(self))

    def __str__(self) -> str:
        message = f"Failed to decode {self.resource_type}: {self.cause.value}"
        if self.field:
            message += f" '{self.field}'"
        if self.detail:
            message += f" ({self.detail})"
        return message

    def __repr__(self) -> str:
        return f"DecodeError({self.resource_type!r}, {self.cause}, field={self.field!r})"

    def _key(self) -> tuple:
        return self.resource_type, self.cause, self.field

    def __eq__(self, other):
        if not isinstance(other, DecodeError):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())


def fatal(message: str, status: int) -> NoReturn:
    """Convenience method to exit the program with a user-friendly error message a test-friendly status code"""
    stderr = rich.console.Console(stderr=True)
    stderr.print(message, style="bold red", highlight=False)
    sys.exit(status)  # raises a SystemExit exception
