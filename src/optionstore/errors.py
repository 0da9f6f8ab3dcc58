"""Exceptions raised by the option store."""

from pathlib import Path
from typing import Any


class OptionStoreError(Exception):
    """Base class for all option store errors."""


class DuplicateIdentityError(OptionStoreError, KeyError):
    """Raised when an option is registered under an identifier that is already taken."""

    def __init__(self, identifier: Any):
        self.identifier = identifier
        super().__init__(f"An option is already registered as {identifier}")

    def __str__(self) -> str:
        # KeyError would repr() the message
        return str(self.args[0])


class DeserializationError(OptionStoreError, ValueError):
    """Raised when a stored value cannot be turned back into an option value."""

    def __init__(self, message: str, identifier: Any = None):
        self.identifier = identifier
        super().__init__(message)


class MigrationError(OptionStoreError):
    """Base class for failures that invalidate a whole document during migration."""


class VersionTooNewError(MigrationError):
    """Raised when a document was written by a newer schema than the one in use."""

    def __init__(self, document_version: int, schema_version: int, source: str | None = None):
        self.document_version = document_version
        self.schema_version = schema_version
        where = f" {source}" if source else ""
        super().__init__(
            f"Config{where} is too new: document is version {document_version} "
            f"but the schema is only version {schema_version}"
        )


class FixerError(MigrationError):
    """Raised when a data fixer fails; the original error is chained as ``__cause__``."""

    def __init__(self, version: int, fixer: Any, message: str | None = None):
        self.version = version
        self.fixer = fixer
        super().__init__(
            message or f"Data fixer {fixer!r} for version {version} raised an exception"
        )


class DocumentNotFoundError(OptionStoreError, FileNotFoundError):
    """Raised when no stored document exists at the expected location."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"No config document at {path}")

    def __str__(self) -> str:
        return str(self.args[0])


class DocumentFormatError(OptionStoreError, ValueError):
    """Raised when stored text is not a document with an object at its top level."""
