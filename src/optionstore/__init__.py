"""Versioned persistence for typed application config options.

This package provides:
- Typed, thread-safe config options with serialize/deserialize contracts
- An insertion-ordered option registry
- Data fixers that migrate stored documents one schema version at a time
- JSON and YAML document storage with failure isolation on load
"""

from .config import Config, LoadResult, LoadStatus
from .errors import (
    DeserializationError,
    DocumentFormatError,
    DocumentNotFoundError,
    DuplicateIdentityError,
    FixerError,
    MigrationError,
    OptionStoreError,
    VersionTooNewError,
)
from .identifier import Identifier
from .migrations import MigrationEngine, RenameKeyFixer
from .registry import OptionRegistry
from .storage import PathResolver

__all__ = [
    "Config",
    "DeserializationError",
    "DocumentFormatError",
    "DocumentNotFoundError",
    "DuplicateIdentityError",
    "FixerError",
    "Identifier",
    "LoadResult",
    "LoadStatus",
    "MigrationEngine",
    "MigrationError",
    "OptionRegistry",
    "OptionStoreError",
    "PathResolver",
    "RenameKeyFixer",
    "VersionTooNewError",
]
