"""Tests for PathResolver and ConfigStorage."""

import os
from pathlib import Path

import pytest

from optionstore.errors import DocumentNotFoundError
from optionstore.storage import CONFIG_DIR_ENV, ConfigStorage, PathResolver


class TestPathResolver:
    """Test config path resolution."""

    def test_explicit_directory_wins(self, tmp_path, mocker):
        """Should use the injected directory over the environment."""
        mocker.patch.dict(os.environ, {CONFIG_DIR_ENV: "/from/env"})
        assert PathResolver(tmp_path).get_config_dir() == tmp_path

    def test_environment_fallback(self, mocker):
        """Should fall back to OPTIONSTORE_CONFIG_DIR."""
        mocker.patch.dict(os.environ, {CONFIG_DIR_ENV: "/from/env"})
        assert PathResolver().get_config_dir() == Path("/from/env")

    def test_default_directory(self, mocker):
        """Should default to ./config."""
        mocker.patch.dict(os.environ, {}, clear=True)
        assert PathResolver().get_config_dir() == Path("config")

    def test_slash_separated_filenames(self, tmp_path):
        """Should split filenames on / into path components."""
        path = PathResolver(tmp_path).get_config_path("modid/sub/example.json")
        assert path == tmp_path / "modid" / "sub" / "example.json"

    @pytest.mark.parametrize("filename", ["", "/", "../escape.json", "mod/../../x.json"])
    def test_invalid_filenames(self, tmp_path, filename):
        """Should reject empty names and parent directory references."""
        with pytest.raises(ValueError):
            PathResolver(tmp_path).get_config_path(filename)


class TestConfigStorage:
    """Test raw document reads and writes."""

    def test_read_missing(self, tmp_path):
        """Should raise DocumentNotFoundError for a missing file."""
        storage = ConfigStorage(tmp_path / "missing.json")
        assert not storage.exists()
        with pytest.raises(DocumentNotFoundError) as exc_info:
            storage.read()
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_write_creates_parents_and_overwrites(self, tmp_path):
        """Should create directories and replace existing content."""
        storage = ConfigStorage(tmp_path / "a" / "b" / "config.json")

        storage.write(b"first")
        storage.write(b"second")

        assert storage.exists()
        assert storage.read() == b"second"

    def test_other_read_errors_propagate(self, tmp_path):
        """Should not disguise non-missing errors as missing files."""
        directory = tmp_path / "is_a_directory"
        directory.mkdir()
        with pytest.raises(OSError) as exc_info:
            ConfigStorage(directory).read()
        assert not isinstance(exc_info.value, DocumentNotFoundError)
