"""Runtime configuration for the Folderview viewer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

from shared.hardening import InputValidator


@dataclass(frozen=True)
class ViewerConfig:
    """Settings for loading and serving one listing.

    Attributes:
        listing_path: Location of the ``tree`` report to load.
        encoding: Text encoding of the report.
        host: Bind address for the HTTP server.
        port: Port for the HTTP server.
        max_file_size_mb: Listings larger than this are rejected.
        base_directory: When set, the listing must lie under this directory.
    """

    listing_path: Path
    encoding: str = "utf-8"
    host: str = "127.0.0.1"
    port: int = 8420
    max_file_size_mb: float = 50.0
    base_directory: Path | None = None

    def validated(self, validator: InputValidator | None = None) -> ViewerConfig:
        """Return a copy with a resolved, checked listing path.

        Args:
            validator: Validator to use. Defaults to a new InputValidator.

        Returns:
            Config whose listing_path exists and is within the size limit.

        Raises:
            ValidationError: If the path is unsafe, missing, outside
                base_directory or too large.
        """
        checker = validator or InputValidator()
        resolved = checker.validate_file_path(
            self.listing_path,
            must_exist=True,
            base_directory=self.base_directory,
        )
        checker.validate_file_size(resolved, self.max_file_size_mb)
        return replace(self, listing_path=resolved)
