"""Loading and saving a config document backed by an option registry."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from optionstore.document import DocumentCodec, codec_for_path
from optionstore.editor import ConfigScreen, EntryBuilder
from optionstore.errors import (
    DeserializationError,
    DocumentNotFoundError,
    FixerError,
    MigrationError,
    OptionStoreError,
)
from optionstore.migrations import VERSION_KEY, DataFixer, MigrationEngine, RenameKeyFixer
from optionstore.options.base import ConfigOption
from optionstore.registry import OptionRegistry
from optionstore.storage import ConfigStorage, PathResolver

logger = logging.getLogger(__name__)

OptionT = TypeVar("OptionT", bound=ConfigOption[Any])


class LoadStatus(str, Enum):
    """Outcome of ``Config.load``."""

    LOADED = "loaded"
    MISSING = "missing"
    FAILED = "failed"


@dataclass
class LoadResult:
    """What happened during a load.

    ``error`` holds the failure that discarded the whole document, if any;
    ``option_errors`` holds per-option failures, keyed by identifier string.
    """

    status: LoadStatus
    document_version: int | None = None
    error: Exception | None = None
    option_errors: dict[str, DeserializationError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.error is None and not self.option_errors

    def raise_for_error(self) -> None:
        """Raise the document-level error, or the first option error."""
        if self.error is not None:
            raise self.error
        for error in self.option_errors.values():
            raise error


class Config:
    """A config document made of registered options.

    Increment ``version`` when an option is renamed or restructured, and register
    a data fixer for the old version. Adding or removing options needs neither:
    new options start at their defaults and removed ones disappear on the next save.
    """

    def __init__(
        self,
        filename: str,
        version: int = 1,
        path_resolver: PathResolver | None = None,
        codec: DocumentCodec | None = None,
    ):
        """Initialize the config.

        Args:
            filename: File name relative to the config directory; may contain ``/``
            version: Current schema version of this config
            path_resolver: Supplies the config directory. If None, creates a new one.
            codec: Document encoding. If None, chosen from the filename suffix.
        """
        self.filename = filename
        self.version = version
        self.path_resolver = path_resolver or PathResolver()
        self.config_path = self.path_resolver.get_config_path(filename)
        self.storage = ConfigStorage(self.config_path)
        self.codec = codec or codec_for_path(self.config_path)
        self.registry = OptionRegistry()
        self.migrations = MigrationEngine(version, source=filename)

    def add(self, option: OptionT) -> OptionT:
        """Add an option to the registry and return it."""
        self.registry.register(option)
        return option

    def register_data_fixer(self, version: int, data_fixer: DataFixer) -> DataFixer:
        """Register a data fixer that upgrades a document from ``version`` to ``version + 1``."""
        return self.migrations.register(version, data_fixer)

    def data_fixer(self, version: int) -> Callable[[DataFixer], DataFixer]:
        """Decorator form of ``register_data_fixer``."""
        return self.migrations.fixer(version)

    def register_rename_data_fixer(
        self, version: int, old_name: str, new_name: str
    ) -> RenameKeyFixer:
        """Register a data fixer renaming a top-level key.

        Keys are identifier strings: to move ``Identifier("modid", "option_1")`` to
        ``Identifier("modid", "option_2")`` while upgrading from version 1, call
        ``register_rename_data_fixer(1, "modid:option_1", "modid:option_2")``.
        """
        return self.migrations.register_rename(version, old_name, new_name)

    def to_document(self) -> dict[str, Any]:
        """Build a fresh document from the current option values."""
        document: dict[str, Any] = {VERSION_KEY: self.version}
        return self.registry.serialize_all(document)

    def save(self) -> None:
        """Write every option to the config file.

        Raises:
            OSError: If the config file cannot be written
            ValueError: If an option holds a value that cannot be stored
        """
        self.storage.write(self.codec.encode(self.to_document()))
        logger.info("Configuration saved successfully to %s", self.config_path)

    def load(self) -> LoadResult:
        """Load option values from the config file.

        Never raises. A missing file leaves every option untouched. A document that
        cannot be read or migrated is discarded as a whole and leaves every option
        untouched. An option whose stored value cannot be deserialized is reset to
        its default without affecting the others.

        Returns:
            LoadResult: Outcome of the load
        """
        try:
            document = self.codec.decode(self.storage.read())
        except DocumentNotFoundError:
            logger.debug("No config file at %s; using defaults", self.config_path)
            return LoadResult(LoadStatus.MISSING)
        except (OSError, OptionStoreError) as e:
            logger.exception("Config %s could not be read and will not be loaded", self.filename)
            return LoadResult(LoadStatus.FAILED, error=e)

        document_version = self.migrations.document_version(document)

        try:
            document = self.migrations.migrate(document, document_version)
        except MigrationError as e:
            upgrading = f" upgrading from version {e.version}" if isinstance(e, FixerError) else ""
            logger.warning(
                "Data fixing failed%s: %s. Config %s will not be loaded.",
                upgrading,
                e,
                self.filename,
                exc_info=e.__cause__ is not None,
            )
            return LoadResult(LoadStatus.FAILED, document_version, error=e)

        result = LoadResult(LoadStatus.LOADED, document_version)
        for option in self.registry:
            key = str(option.identifier)
            if key not in document:
                continue
            try:
                option.deserialize_to_value(document[key])
            except Exception as e:
                option.reset_to_default()
                if not isinstance(e, DeserializationError):
                    error = DeserializationError(str(e), option.identifier)
                    error.__cause__ = e
                else:
                    error = e
                result.option_errors[key] = error
                logger.warning(
                    "Config value %s could not be deserialized from config %s: %s",
                    key,
                    self.filename,
                    e,
                )

        logger.info(
            "Configuration loaded from %s (version %d, %d option error(s))",
            self.config_path,
            document_version,
            len(result.option_errors),
        )
        return result

    def reload(self) -> LoadResult:
        """Reset every option to its default, then load from disk."""
        self.registry.reset_all()
        return self.load()

    def build_screen(self, entry_builder: EntryBuilder) -> ConfigScreen:
        """Build editor entries for every option, grouped by category."""
        screen = ConfigScreen(on_save=self.save)
        for option in self.registry:
            screen.add_entry(option.category_translation_key, option.build_entry(entry_builder))
        return screen
