"""Tests for listing header parsing."""

from __future__ import annotations

import pytest

from treelist.listing.errors import FormatError, ListingIOError
from treelist.listing.header import VolumeHeader, parse_header


def _header(
    first: str = "Folder PATH listing for volume X",
    second: str = "Volume serial number is 1234-ABCD",
    third: str = "X:\\",
) -> list[str]:
    return [first, second, third]


class TestParseHeader:
    """Tests for parse_header."""

    def test_valid_header(self):
        header = parse_header(_header())
        assert header == VolumeHeader(
            volume_name="X", serial_number="1234-ABCD", root_label="X:\\"
        )

    def test_volume_name_with_spaces(self):
        header = parse_header(_header(first="Folder PATH listing for volume Data Disk"))
        assert header.volume_name == "Data Disk"

    def test_marker_may_follow_other_text(self):
        header = parse_header(_header(first="\ufeffFolder PATH listing for volume X"))
        assert header.volume_name == "X"

    def test_empty_volume_name(self):
        header = parse_header(_header(first="Folder PATH listing for volume "))
        assert header.volume_name == ""

    def test_root_label_verbatim(self):
        header = parse_header(_header(third="  C:. "))
        assert header.root_label == "  C:. "

    def test_missing_volume_marker(self):
        with pytest.raises(FormatError) as exc_info:
            parse_header(_header(first="Directory of X"))
        assert exc_info.value.line_number == 1

    def test_missing_serial_marker(self):
        with pytest.raises(FormatError) as exc_info:
            parse_header(_header(second="Serial: 1234-ABCD"))
        assert exc_info.value.line_number == 2

    @pytest.mark.parametrize("count", [0, 1, 2])
    def test_too_few_lines(self, count: int):
        with pytest.raises(ListingIOError):
            parse_header(_header()[:count])

    def test_extra_lines_ignored(self):
        header = parse_header(_header() + ["+---folder1"])
        assert header.root_label == "X:\\"


class TestVolumeHeader:
    """Tests for the VolumeHeader value object."""

    def test_to_dict(self):
        header = VolumeHeader("X", "1234-ABCD", "X:\\")
        assert header.to_dict() == {
            "volume_name": "X",
            "serial_number": "1234-ABCD",
            "root_label": "X:\\",
        }

    def test_is_immutable(self):
        header = VolumeHeader("X", "1234-ABCD", "X:\\")
        with pytest.raises(AttributeError):
            header.volume_name = "Y"  # type: ignore[misc]
