"""
Listing header parsing.

The first three lines of a ``tree`` report describe the volume::

    Folder PATH listing for volume X
    Volume serial number is 1234-ABCD
    X:\\
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from treelist.listing.errors import FormatError, ListingIOError

VOLUME_MARKER = "Folder PATH listing for volume "
SERIAL_MARKER = "Volume serial number is "
HEADER_LINES = 3


@dataclass(frozen=True)
class VolumeHeader:
    """Volume metadata from the top of a listing.

    Attributes:
        volume_name: Text following the volume marker on line 1.
        serial_number: Text following the serial marker on line 2.
        root_label: Line 3 verbatim; also the label of the tree root.
    """

    volume_name: str
    serial_number: str
    root_label: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON export."""
        return {
            "volume_name": self.volume_name,
            "serial_number": self.serial_number,
            "root_label": self.root_label,
        }


def _suffix_after(line: str, marker: str, line_number: int) -> str:
    _, found, suffix = line.partition(marker)
    if not found:
        raise FormatError(f"expected {marker.strip()!r}", line_number)
    return suffix


def parse_header(lines: Sequence[str]) -> VolumeHeader:
    """Parse the three header lines of a listing.

    Args:
        lines: Header lines without their line terminators.

    Returns:
        The parsed VolumeHeader.

    Raises:
        ListingIOError: If fewer than three lines are given.
        FormatError: If line 1 or line 2 lacks its marker.
    """
    if len(lines) < HEADER_LINES:
        raise ListingIOError(
            f"Listing has {len(lines)} line(s); a header needs {HEADER_LINES}"
        )

    return VolumeHeader(
        volume_name=_suffix_after(lines[0], VOLUME_MARKER, 1),
        serial_number=_suffix_after(lines[1], SERIAL_MARKER, 2),
        root_label=lines[2],
    )
