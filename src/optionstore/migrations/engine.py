"""Version-gated data fixers for config documents."""

import logging
from collections.abc import Callable, MutableMapping
from typing import Any

from optionstore.errors import FixerError, VersionTooNewError

logger = logging.getLogger(__name__)

VERSION_KEY = "_version"
OLDEST_VERSION = 1

Document = MutableMapping[str, Any]
DataFixer = Callable[[Document], Document | None]


class RenameKeyFixer:
    """Data fixer that moves a top-level key to a new name.

    Keys are the string forms of option identifiers, e.g. ``"modid:option_1"``.
    """

    def __init__(self, old_key: str, new_key: str):
        self.old_key = old_key
        self.new_key = new_key

    def __call__(self, document: Document) -> None:
        # A missing key means the chain ran out of order or on the wrong version
        if self.old_key not in document:
            raise KeyError(f"Cannot rename missing key '{self.old_key}' to '{self.new_key}'")
        document[self.new_key] = document.pop(self.old_key)

    def __repr__(self) -> str:
        return f"RenameKeyFixer({self.old_key!r} -> {self.new_key!r})"


def describe_fixer(fixer: DataFixer) -> str:
    """Return a human readable name for a fixer, for log messages."""
    return getattr(fixer, "__qualname__", None) or repr(fixer)


class MigrationEngine:
    """Upgrades config documents one schema version at a time.

    A fixer registered for version ``v`` upgrades a document from ``v`` to
    ``v + 1``. Fixers for the same version run in registration order and share
    the same document.
    """

    def __init__(self, schema_version: int = OLDEST_VERSION, source: str | None = None):
        """Initialize the engine.

        Args:
            schema_version: Version documents are migrated to
            source: Name of the document being migrated, used in log messages
        """
        if schema_version < OLDEST_VERSION:
            raise ValueError(f"Schema version must be at least {OLDEST_VERSION}")
        self.schema_version = schema_version
        self.source = source
        self._fixers: dict[int, list[DataFixer]] = {}

    def register(self, version: int, fixer: DataFixer) -> DataFixer:
        """Register a data fixer that upgrades documents from ``version``.

        Args:
            version: Source version the fixer upgrades from
            fixer: Callable that mutates the document in place or returns a replacement

        Returns:
            The fixer, so this can back a decorator

        Raises:
            ValueError: If the fixer could never run for this schema version
        """
        if not OLDEST_VERSION <= version < self.schema_version:
            raise ValueError(
                f"Cannot register a data fixer for version {version}; "
                f"fixers must be for versions {OLDEST_VERSION} to {self.schema_version - 1}"
            )
        self._fixers.setdefault(version, []).append(fixer)
        return fixer

    def fixer(self, version: int) -> Callable[[DataFixer], DataFixer]:
        """Decorator form of ``register``."""

        def decorator(fn: DataFixer) -> DataFixer:
            return self.register(version, fn)

        return decorator

    def register_rename(self, version: int, old_key: str, new_key: str) -> RenameKeyFixer:
        """Register a fixer that renames a top-level key when upgrading from ``version``."""
        rename = RenameKeyFixer(old_key, new_key)
        self.register(version, rename)
        return rename

    def fixers_for(self, version: int) -> list[DataFixer]:
        """Return a copy of the fixers registered for ``version``."""
        return list(self._fixers.get(version, []))

    def document_version(self, document: Document) -> int:
        """Read the declared version of a document, assuming the oldest when unusable."""
        raw = document.get(VERSION_KEY)
        if isinstance(raw, float) and raw.is_integer():
            raw = int(raw)
        if isinstance(raw, bool) or not isinstance(raw, int) or raw < OLDEST_VERSION:
            logger.warning(
                "The %s key is missing or invalid in config %s (%r). Assuming version %d.",
                VERSION_KEY,
                self.source or "<unnamed>",
                raw,
                OLDEST_VERSION,
            )
            return OLDEST_VERSION
        return raw

    def migrate(self, document: Document, from_version: int | None = None) -> Document:
        """Bring ``document`` up to the schema version.

        Args:
            document: Freshly loaded document
            from_version: Version already read with ``document_version``, if any

        Returns:
            The migrated document; the input itself unless a fixer replaced it

        Raises:
            VersionTooNewError: If the document is newer than the schema
            FixerError: If any fixer raises; the document must then be discarded
        """
        document_version = from_version
        if document_version is None:
            document_version = self.document_version(document)

        if document_version > self.schema_version:
            raise VersionTooNewError(document_version, self.schema_version, self.source)

        for version in range(document_version, self.schema_version):
            fixers = self._fixers.get(version)

            if not fixers:
                logger.warning(
                    "Version %d of config %s has no data fixers. The version should only be "
                    "incremented for breaking changes, so this may indicate programmer error. "
                    "Register a no-op data fixer to silence this warning.",
                    version,
                    self.source or "<unnamed>",
                )
            else:
                document = self._run_fixers(version, fixers, document)

            document[VERSION_KEY] = version + 1

        return document

    def _run_fixers(self, version: int, fixers: list[DataFixer], document: Document) -> Document:
        for fixer in fixers:
            try:
                result = fixer(document)
            except Exception as e:
                logger.error(
                    "Data fixer %s for version %d of config %s raised an exception; "
                    "the config will not be loaded.",
                    describe_fixer(fixer),
                    version,
                    self.source or "<unnamed>",
                )
                raise FixerError(
                    version,
                    fixer,
                    f"Data fixer {describe_fixer(fixer)} for version {version} "
                    "raised an exception",
                ) from e
            if result is not None:
                if not isinstance(result, MutableMapping):
                    logger.error(
                        "Data fixer %s for version %d of config %s returned %s instead of a "
                        "document; the config will not be loaded.",
                        describe_fixer(fixer),
                        version,
                        self.source or "<unnamed>",
                        type(result).__name__,
                    )
                    raise FixerError(
                        version,
                        fixer,
                        f"Data fixer {describe_fixer(fixer)} for version {version} "
                        f"returned {type(result).__name__} instead of a document",
                    )
                document = result
        return document
