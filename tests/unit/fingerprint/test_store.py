"""Unit tests for the fingerprint store."""

from pathlib import Path

import pytest
from scratchctl.fingerprint.store import (
    get_store_dir,
    is_reusable,
    load_fingerprint,
    save_fingerprint,
)


class TestGetStoreDir:
    """Tests for get_store_dir function."""

    def test_default_under_cache(self, tmp_path: Path) -> None:
        """Store lives in the XDG cache directory."""
        assert get_store_dir() == tmp_path / "xdg-cache" / "scratchctl" / "fingerprints"

    def test_override(self, tmp_path: Path) -> None:
        """An explicit base dir is respected."""
        assert get_store_dir(tmp_path) == tmp_path / "fingerprints"


class TestSaveAndLoad:
    """Tests for save_fingerprint and load_fingerprint."""

    def test_missing_is_none(self, tmp_path: Path) -> None:
        """Nothing stored yet gives None."""
        assert load_fingerprint("build", tmp_path) is None

    def test_save_then_load(self, tmp_path: Path) -> None:
        """A saved value is loaded back."""
        path = save_fingerprint("build", "abc123", tmp_path)

        assert path == tmp_path / "fingerprints" / "build.key"
        assert load_fingerprint("build", tmp_path) == "abc123"

    def test_overwrite(self, tmp_path: Path) -> None:
        """Saving again replaces the value and leaves no temp file."""
        save_fingerprint("build", "first", tmp_path)
        save_fingerprint("build", "second", tmp_path)

        assert load_fingerprint("build", tmp_path) == "second"
        assert list((tmp_path / "fingerprints").glob("*.tmp")) == []

    def test_empty_file_is_none(self, tmp_path: Path) -> None:
        """A blank key file counts as nothing stored."""
        store = tmp_path / "fingerprints"
        store.mkdir()
        (store / "build.key").write_text("\n")

        assert load_fingerprint("build", tmp_path) is None

    @pytest.mark.parametrize("name", ["", ".", "..", "a/b", "x y"])
    def test_invalid_names(self, tmp_path: Path, name: str) -> None:
        """Names that could escape the store are rejected."""
        with pytest.raises(ValueError, match="Invalid fingerprint name"):
            save_fingerprint(name, "abc", tmp_path)


class TestIsReusable:
    """Tests for is_reusable function."""

    def test_match(self, tmp_path: Path) -> None:
        """Matching fingerprint means the output can be reused."""
        save_fingerprint("build", "abc", tmp_path)

        assert is_reusable("build", "abc", tmp_path) is True

    def test_mismatch(self, tmp_path: Path) -> None:
        """A different fingerprint means stale output."""
        save_fingerprint("build", "abc", tmp_path)

        assert is_reusable("build", "def", tmp_path) is False

    def test_nothing_stored(self, tmp_path: Path) -> None:
        """Without a stored value nothing is reusable."""
        assert is_reusable("build", "abc", tmp_path) is False
