"""Hardening utilities for the Folderview surfaces.

Provides user-friendly error formatting and input validation with path
traversal prevention. The CLI and the HTTP server both use these at
their boundaries. Domain exceptions that define ``error_code``,
``user_message`` and ``suggestion`` are formatted from those attributes,
so this module depends on no application package.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# 1. Error Formatting
# ---------------------------------------------------------------------------


@dataclass
class UserFriendlyError:
    """A structured error designed for end-user consumption.

    Attributes:
        message: Clear description for the user.
        suggestion: Actionable guidance.
        component: Originating subsystem (listing, outline, server).
        error_code: Machine-readable identifier (e.g. "LIST_STRUCT").
        technical_detail: Debugging info for logs only -- never shown to users.
    """

    message: str
    suggestion: str
    component: str
    error_code: str
    technical_detail: str = ""

    def to_dict(self) -> dict[str, str]:
        """Serialize for API responses (excludes technical_detail).

        Returns:
            Dictionary safe for sending to end users.
        """
        return {
            "message": self.message,
            "suggestion": self.suggestion,
            "component": self.component,
            "error_code": self.error_code,
        }


class ErrorFormatter:
    """Convert internal exceptions to user-friendly messages.

    All methods return a ``UserFriendlyError`` and never expose internal
    paths or stack traces to the end user.
    """

    def format_listing_error(self, error: Exception) -> UserFriendlyError:
        """Format an error raised while loading a listing.

        Args:
            error: The caught exception.

        Returns:
            User-friendly error with actionable suggestion.
        """
        return self._format(error, component="listing", code_prefix="LIST")

    def format_server_error(self, error: Exception) -> UserFriendlyError:
        """Format an error raised while serving the outline.

        Args:
            error: The caught exception.

        Returns:
            User-friendly error with actionable suggestion.
        """
        return self._format(error, component="server", code_prefix="SRV")

    # ------------------------------------------------------------------

    def _format(
        self,
        error: Exception,
        *,
        component: str,
        code_prefix: str,
    ) -> UserFriendlyError:
        """Shared formatting logic.

        Args:
            error: The caught exception.
            component: Subsystem name.
            code_prefix: Short prefix for error code.

        Returns:
            Structured error with safe user message.
        """
        message, suggestion, code_suffix = _classify_error(error)
        return UserFriendlyError(
            message=message,
            suggestion=suggestion,
            component=component,
            error_code=f"{code_prefix}_{code_suffix}",
            technical_detail=repr(error),
        )


def _classify_error(error: Exception) -> tuple[str, str, str]:
    """Map an exception to (message, suggestion, code_suffix).

    Args:
        error: The caught exception.

    Returns:
        Tuple of user message, suggestion text, and error code suffix.
    """
    error_code = getattr(error, "error_code", None)
    if error_code is not None:
        # Domain errors carry their own user-facing fields.
        return error.user_message, error.suggestion, error_code
    if isinstance(error, ValidationError):
        return (
            str(error),
            "Check the listing path and try again.",
            "INPUT",
        )
    if isinstance(error, IndexError):
        return (
            "The requested folder does not exist in this listing.",
            "Reload the outline and try again.",
            "003",
        )
    return (
        "An unexpected error occurred.",
        "If this keeps happening, please report the issue.",
        "999",
    )


# ---------------------------------------------------------------------------
# 2. Input Validation
# ---------------------------------------------------------------------------

# Characters that could be used for path traversal
_TRAVERSAL_PATTERN = re.compile(r"(\.\.[\\/]|[\\/]\.\.)")
# Null bytes in paths
_NULL_BYTE = re.compile(r"\x00")

_BYTES_PER_MB = 1024 * 1024


class ValidationError(Exception):
    """Raised when input validation fails."""


class InputValidator:
    """Validate inputs at system boundaries.

    All methods raise ``ValidationError`` on failure.
    """

    def validate_file_path(
        self,
        path: str | Path,
        *,
        must_exist: bool = True,
        base_directory: Path | None = None,
    ) -> Path:
        """Validate a file path, preventing traversal attacks.

        Args:
            path: Raw path from user input.
            must_exist: Require the file to exist on disk.
            base_directory: Confine resolved path under this directory.

        Returns:
            Resolved, validated Path.

        Raises:
            ValidationError: On any validation failure.
        """
        raw = str(path)
        self._check_traversal(raw)
        resolved = Path(raw).resolve()

        if base_directory is not None:
            base = base_directory.resolve()
            if not _is_subpath(resolved, base):
                raise ValidationError("Path is outside the allowed directory.")

        if must_exist and not resolved.is_file():
            raise ValidationError("File does not exist.")

        return resolved

    def validate_file_size(self, path: Path, max_size_mb: float) -> None:
        """Reject files larger than *max_size_mb*.

        Args:
            path: Path to an existing file.
            max_size_mb: Upper bound in megabytes.

        Raises:
            ValidationError: When the file is too large.
        """
        size_mb = path.stat().st_size / _BYTES_PER_MB
        if size_mb > max_size_mb:
            logger.warning("Rejected %s: %.1f MB exceeds %.1f MB", path.name, size_mb, max_size_mb)
            raise ValidationError(
                f"File is too large ({size_mb:.1f} MB). The limit is {max_size_mb:g} MB."
            )

    # ------------------------------------------------------------------

    @staticmethod
    def _check_traversal(raw: str) -> None:
        """Reject paths with traversal sequences or null bytes.

        Args:
            raw: Raw path string.

        Raises:
            ValidationError: On dangerous patterns.
        """
        if _NULL_BYTE.search(raw):
            raise ValidationError("Path contains null bytes.")
        if _TRAVERSAL_PATTERN.search(raw):
            raise ValidationError("Path traversal is not allowed.")


def _is_subpath(child: Path, parent: Path) -> bool:
    """Return True when *child* is under *parent*.

    Args:
        child: Resolved candidate path.
        parent: Resolved base directory.

    Returns:
        True if child is equal to or nested inside parent.
    """
    try:
        child.relative_to(parent)
        return True
    except ValueError:
        return False
