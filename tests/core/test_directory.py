"""
Unit tests for directory layout and the destination precondition.
"""

import pytest
from pathlib import Path

from espkit.core.directory import (
    ensure_destination_available,
    get_cargo_home,
    get_dist_path,
    get_espressif_home,
    get_rustup_home,
    get_tool_path,
)
from espkit.core.exceptions import InstallationConflictError


class TestHomeDirectories:
    """Test storage root resolution."""

    def test_espressif_home_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("IDF_TOOLS_PATH", str(tmp_path / "idf"))
        assert get_espressif_home() == tmp_path / "idf"

    def test_espressif_home_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("IDF_TOOLS_PATH", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_espressif_home() == tmp_path / ".espressif"

    def test_tool_and_dist_paths(self, isolated_home):
        assert get_tool_path("xtensa-esp32-elf-clang") == (
            isolated_home / ".espressif" / "tools" / "xtensa-esp32-elf-clang"
        )
        assert get_dist_path("rust") == isolated_home / ".espressif" / "dist" / "rust"

    def test_rustup_and_cargo_home(self, isolated_home):
        assert get_rustup_home() == isolated_home / ".rustup"
        assert get_cargo_home() == isolated_home / ".cargo"

    def test_rustup_home_default(self, monkeypatch, tmp_path):
        monkeypatch.delenv("RUSTUP_HOME", raising=False)
        monkeypatch.setattr(Path, "home", lambda: tmp_path)
        assert get_rustup_home() == tmp_path / ".rustup"


class TestEnsureDestinationAvailable:
    """Test the shared destination precondition."""

    def test_missing_destination(self, tmp_path):
        ensure_destination_available(tmp_path / "new", False, "LLVM")

    def test_existing_destination_rejected(self, tmp_path):
        dest = tmp_path / "existing"
        dest.mkdir()

        with pytest.raises(InstallationConflictError) as exc_info:
            ensure_destination_available(dest, False, "LLVM")

        assert exc_info.value.path == dest
        assert "remove the directory" in str(exc_info.value)

    def test_existing_destination_allowed(self, tmp_path):
        dest = tmp_path / "existing"
        dest.mkdir()

        ensure_destination_available(dest, True, "Xtensa Rust")
