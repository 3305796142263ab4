"""
Pytest configuration and fixtures for Folderview tests.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from pathlib import Path

import pytest

from treelist.listing import ListingTree, VolumeHeader, load_tree
from treelist.listing.classifier import BRANCH_CONTINUE, BRANCH_LAST

HEADER_TEXT = (
    "Folder PATH listing for volume X\n"
    "Volume serial number is 1234-ABCD\n"
    "X:\\\n"
)

SAMPLE_LISTING = HEADER_TEXT + (
    "+---folder1\n"
    "|   \\---folder1a\n"
    "+---folder2\n"
    "|   \\---folder2a\n"
    "+---folder3\n"
    "+---folder4\n"
    "|   +---folder4a\n"
    "|   |   +---folder4aa\n"
)

# Nested (label, children) pairs
Shape = list[tuple[str, "Shape"]]


def format_listing(shape: Shape, header: str = HEADER_TEXT) -> str:
    """Render a nested shape the way ``tree`` prints it."""
    lines: list[str] = []
    stack: list[tuple[Shape, int, str]] = [(shape, 0, "")]
    while stack:
        siblings, position, prefix = stack.pop()
        if position >= len(siblings):
            continue
        label, children = siblings[position]
        is_last = position == len(siblings) - 1
        branch = BRANCH_LAST if is_last else BRANCH_CONTINUE
        lines.append(f"{prefix}{branch}{label}")
        stack.append((siblings, position + 1, prefix))
        stack.append((children, 0, prefix + ("    " if is_last else "|   ")))
    return header + "".join(f"{line}\n" for line in lines)


def random_shape(rng: random.Random, max_depth: int = 6, max_children: int = 4) -> Shape:
    """Generate a random folder shape with unique labels."""
    counter = 0

    def grow(depth: int) -> Shape:
        nonlocal counter
        if depth > max_depth:
            return []
        shape: Shape = []
        for _ in range(rng.randint(0, max_children if depth > 1 else max_children + 1)):
            counter += 1
            label = f"dir{counter}"
            shape.append((label, grow(depth + 1) if rng.random() < 0.5 else []))
        return shape

    return grow(1)


@pytest.fixture
def sample_listing() -> str:
    """The listing used throughout the docs."""
    return SAMPLE_LISTING


@pytest.fixture
def sample_loaded(sample_listing: str) -> tuple[ListingTree, VolumeHeader]:
    """The sample listing, loaded."""
    return load_tree(sample_listing.splitlines(keepends=True))


@pytest.fixture
def sample_tree(sample_loaded: tuple[ListingTree, VolumeHeader]) -> ListingTree:
    return sample_loaded[0]


@pytest.fixture
def sample_header(sample_loaded: tuple[ListingTree, VolumeHeader]) -> VolumeHeader:
    return sample_loaded[1]


@pytest.fixture
def listing_file(tmp_path: Path, sample_listing: str) -> Path:
    """The sample listing written to disk."""
    path = tmp_path / "content.txt"
    path.write_text(sample_listing, encoding="utf-8")
    return path


@pytest.fixture
def make_listing() -> Callable[[Shape], str]:
    """Factory turning a nested shape into listing text."""
    return format_listing


@pytest.fixture
def make_random_shape() -> Callable[[int], Shape]:
    """Factory for seeded random shapes."""
    return lambda seed: random_shape(random.Random(seed))
