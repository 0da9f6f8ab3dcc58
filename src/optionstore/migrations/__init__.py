"""Data fixers that migrate config documents between schema versions."""

from .engine import (
    OLDEST_VERSION,
    VERSION_KEY,
    DataFixer,
    Document,
    MigrationEngine,
    RenameKeyFixer,
)

__all__ = [
    "OLDEST_VERSION",
    "VERSION_KEY",
    "DataFixer",
    "Document",
    "MigrationEngine",
    "RenameKeyFixer",
]
