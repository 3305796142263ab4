"""Exceptions raised while loading a directory listing.

Each exception carries an ``error_code``, a ``user_message`` and a
``suggestion`` that the outer surfaces pass to end users through
``shared.hardening.ErrorFormatter``.
"""

from __future__ import annotations


class ListingError(Exception):
    """Base class for all listing load failures."""

    error_code = "LOAD"
    suggestion = "Make sure the file is the unmodified output of `tree`."

    @property
    def user_message(self) -> str:
        return "The listing could not be loaded."


class ListingIOError(ListingError):
    """Raised when the listing cannot be read or is too short for a header."""

    error_code = "IO"
    suggestion = "Check that the file is a complete listing in the expected encoding."

    @property
    def user_message(self) -> str:
        return "The listing could not be read."


class FormatError(ListingError):
    """Raised when a header line is missing its expected marker.

    Attributes:
        line_number: 1-based line number of the offending header line.
    """

    error_code = "FMT"

    def __init__(self, message: str, line_number: int) -> None:
        self.line_number = line_number
        super().__init__(f"Line {line_number}: {message}")

    @property
    def user_message(self) -> str:
        return f"Line {self.line_number} of the listing is not a valid header line."


class StructuralError(ListingError):
    """Raised when an entry cannot be attached to the tree.

    Happens when the indentation asks for a parent or a previous
    sibling that does not exist, e.g. a first entry two levels deep.

    Attributes:
        line_number: 1-based line number of the entry.
        line: Raw text of the entry line.
    """

    error_code = "STRUCT"
    suggestion = "Regenerate the listing with `tree` and do not edit its indentation."

    def __init__(self, message: str, line_number: int, line: str) -> None:
        self.line_number = line_number
        self.line = line
        super().__init__(f"Line {line_number}: {message}: {line!r}")

    @property
    def user_message(self) -> str:
        return f"The listing's indentation is inconsistent at line {self.line_number}."
