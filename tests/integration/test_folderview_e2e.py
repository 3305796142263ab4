"""End-to-end tests for the Folderview application.

Validates the path from a listing file on disk to the rendered outline:
file -> loader -> tree -> CLI text output, and file -> server state ->
HTTP outline through the mounted application.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

import folderview_server
from treelist.config import ViewerConfig
from treelist.server import _state, configure_from_path

LISTING = (
    "Folder PATH listing for volume X\n"
    "Volume serial number is 1234-ABCD\n"
    "X:\\\n"
    "+---folder1\n"
    "|   \\---folder1a\n"
    "+---folder2\n"
    "|   \\---folder2a\n"
    "+---folder3\n"
    "+---folder4\n"
    "|   +---folder4a\n"
    "|   |   +---folder4aa\n"
)


@pytest.fixture
def listing_path(tmp_path: Path) -> Path:
    path = tmp_path / "content.txt"
    path.write_text(LISTING, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_state():
    saved = dict(_state)
    yield
    _state.update(saved)


class TestCommandLine:
    """Tests for the folderview command-line entry point."""

    def test_print_outline(self, listing_path: Path, capsys) -> None:
        assert folderview_server.main([str(listing_path), "--print"]) == 0
        out = capsys.readouterr().out
        assert out.startswith("Volume Name: X\nVolume Serial Number: 1234-ABCD\n")
        assert "      [ ] folder4aa\n" in out

    def test_missing_file(self, tmp_path: Path, capsys) -> None:
        status = folderview_server.main([str(tmp_path / "missing.txt"), "--print"])
        assert status == 1
        assert "does not exist" in capsys.readouterr().err

    def test_malformed_listing(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "bad.txt"
        path.write_text(LISTING.replace("Volume serial number is", "Serial"), encoding="utf-8")
        assert folderview_server.main([str(path), "--print"]) == 1
        assert "Line 2" in capsys.readouterr().err

    def test_parser_requires_listing(self) -> None:
        with pytest.raises(SystemExit):
            folderview_server.build_parser().parse_args([])

    def test_run_server_loads_before_serving(self, listing_path: Path, monkeypatch) -> None:
        calls: list[tuple[str, int]] = []
        monkeypatch.setattr(
            "uvicorn.run", lambda app, host, port: calls.append((host, port))
        )
        status = folderview_server.main([str(listing_path), "--port", "9001"])
        assert status == 0
        assert calls == [("127.0.0.1", 9001)]
        assert _state["header"].volume_name == "X"


class TestApplication:
    """Tests for the mounted FastAPI application."""

    def test_browse_listing(self, listing_path: Path) -> None:
        configure_from_path(ViewerConfig(listing_path=listing_path))
        client = TestClient(folderview_server.app)

        assert client.get("/api/health").json()["status"] == "ok"
        rows = client.get("/api/listing/outline").json()["rows"]
        assert [row["label"] for row in rows] == ["X:\\"]

        client.post("/api/listing/nodes/0/toggle")
        rows = client.get("/api/listing/outline").json()["rows"]
        folder4 = next(row for row in rows if row["label"] == "folder4")
        assert folder4["has_children"] is True

        client.post(f"/api/listing/nodes/{folder4['index']}/toggle")
        labels = [row["label"] for row in client.get("/api/listing/outline").json()["rows"]]
        assert labels == [
            "X:\\",
            "folder1",
            "folder2",
            "folder3",
            "folder4",
            "folder4a",
        ]
