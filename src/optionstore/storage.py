"""Filesystem locations and raw reads/writes for config documents."""

import logging
import os
from pathlib import Path

from optionstore.errors import DocumentNotFoundError

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "OPTIONSTORE_CONFIG_DIR"


class PathResolver:
    """Resolves config filenames to paths under a base config directory.

    The directory is injected explicitly; the ``OPTIONSTORE_CONFIG_DIR``
    environment variable and then ``./config`` are only fallbacks.
    """

    def __init__(self, config_dir: Path | str | None = None) -> None:
        if config_dir is None:
            config_dir = os.getenv(CONFIG_DIR_ENV) or Path("config")
        self.config_dir = Path(config_dir)

    def get_config_dir(self) -> Path:
        """Get the base config directory."""
        return self.config_dir

    def get_config_path(self, filename: str) -> Path:
        """Get the path of a config file.

        ``filename`` may contain ``/`` separators (``modid/example.json``), which are
        translated to the platform's separator.
        """
        parts = [part for part in filename.split("/") if part]
        if not parts or any(part == ".." for part in parts):
            raise ValueError(f"Invalid config filename: {filename!r}")
        return self.config_dir.joinpath(*parts)


class ConfigStorage:
    """Reads and writes the bytes of a single config document."""

    def __init__(self, path: Path):
        self.path = path

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> bytes:
        """Read the stored document.

        Raises:
            DocumentNotFoundError: If nothing has been stored yet
            OSError: For any other read failure
        """
        try:
            return self.path.read_bytes()
        except FileNotFoundError as e:
            raise DocumentNotFoundError(self.path) from e

    def write(self, data: bytes) -> None:
        """Overwrite the stored document, creating parent directories as needed.

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_bytes(data)
        logger.debug("Wrote %d bytes to %s", len(data), self.path)
