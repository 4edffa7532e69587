"""Unit tests for ScratchConfig and related functions."""

from pathlib import Path

import pytest
from pydantic import ValidationError
from scratchctl.core.config import (
    ScratchConfig,
    load_config,
    load_config_or_default,
    save_config,
)
from scratchctl.core.errors import ConfigError, ConfigNotFoundError, ConfigParseError


class TestScratchConfig:
    """Tests for ScratchConfig Pydantic model."""

    def test_default_values(self) -> None:
        """ScratchConfig has correct default values."""
        config = ScratchConfig()

        assert config.temp_base_dir is None
        assert config.max_workers is None
        assert config.hash_algorithm == "md5"
        assert config.cleanup_on_exit is True

    def test_max_workers_minimum(self) -> None:
        """Zero workers is rejected."""
        with pytest.raises(ValidationError):
            ScratchConfig(max_workers=0)

    def test_max_workers_maximum(self) -> None:
        """Unreasonably large pools are rejected."""
        with pytest.raises(ValidationError):
            ScratchConfig(max_workers=1000)

    def test_hash_algorithm_normalized(self) -> None:
        """Algorithm names are stripped and lowercased."""
        assert ScratchConfig(hash_algorithm=" SHA256 ").hash_algorithm == "sha256"

    def test_unknown_hash_algorithm(self) -> None:
        """Unknown algorithms are rejected."""
        with pytest.raises(ValidationError, match="unsupported hash algorithm"):
            ScratchConfig(hash_algorithm="nope")

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            ScratchConfig(unknown=True)  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("max_workers = = 3")

        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text("max_workers = 0\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_valid_file(self, tmp_path: Path) -> None:
        """Values are read from the file."""
        path = tmp_path / "config.toml"
        path.write_text(
            'temp_base_dir = "/var/tmp/scratch"\nmax_workers = 4\ncleanup_on_exit = false\n'
        )

        config = load_config(path)

        assert config.temp_base_dir == Path("/var/tmp/scratch")
        assert config.max_workers == 4
        assert config.cleanup_on_exit is False

    def test_default_location(self, tmp_path: Path) -> None:
        """Without a path, the XDG config location is used."""
        config_dir = tmp_path / "xdg-config" / "scratchctl"
        config_dir.mkdir(parents=True)
        (config_dir / "config.toml").write_text("max_workers = 2\n")

        assert load_config().max_workers == 2


class TestLoadConfigOrDefault:
    """Tests for load_config_or_default function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """Missing file falls back to defaults."""
        assert load_config_or_default(tmp_path / "missing.toml") == ScratchConfig()

    def test_parse_errors_propagate(self, tmp_path: Path) -> None:
        """Broken files are still reported."""
        path = tmp_path / "config.toml"
        path.write_text("[[[")

        with pytest.raises(ConfigParseError):
            load_config_or_default(path)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_round_trip(self, tmp_path: Path) -> None:
        """Saved config loads back equal."""
        path = tmp_path / "nested" / "config.toml"
        config = ScratchConfig(
            temp_base_dir=tmp_path / "scratch",
            max_workers=8,
            hash_algorithm="sha1",
            cleanup_on_exit=False,
        )

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_unset_values_omitted(self, tmp_path: Path) -> None:
        """None values are not written to TOML."""
        path = save_config(ScratchConfig(), tmp_path / "config.toml")

        content = path.read_text()
        assert "temp_base_dir" not in content
        assert "max_workers" not in content
        assert 'hash_algorithm = "md5"' in content

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """Atomic write leaves no .tmp files behind."""
        save_config(ScratchConfig(), tmp_path / "config.toml")

        assert list(tmp_path.glob("*.tmp")) == []
