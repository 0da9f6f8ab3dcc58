"""Insertion-ordered registry of config options."""

import logging
from collections.abc import Callable, Iterator
from typing import Any

from optionstore.errors import DuplicateIdentityError
from optionstore.identifier import Identifier
from optionstore.options.base import ConfigOption

logger = logging.getLogger(__name__)


class OptionRegistry:
    """Holds every option of one config document, keyed by identifier.

    Membership is meant to be fixed during startup; reads after that need no
    synchronization.
    """

    def __init__(self):
        """Initialize an empty registry."""
        self._options: dict[Identifier, ConfigOption[Any]] = {}

    def register(self, option: ConfigOption[Any]) -> ConfigOption[Any]:
        """Add an option to the registry.

        Args:
            option: Option to register

        Returns:
            ConfigOption: The registered option, for chaining

        Raises:
            DuplicateIdentityError: If an option with the same identifier exists
        """
        if option.identifier in self._options:
            raise DuplicateIdentityError(option.identifier)
        self._options[option.identifier] = option
        logger.debug("Registered config option %s", option.identifier)
        return option

    def get(self, identifier: Identifier | str) -> ConfigOption[Any] | None:
        """Look up an option by identifier or its ``namespace:path`` string."""
        if isinstance(identifier, str):
            try:
                identifier = Identifier.parse(identifier)
            except ValueError:
                return None
        return self._options.get(identifier)

    def for_each(self, fn: Callable[[ConfigOption[Any]], None]) -> None:
        """Call ``fn`` on every option in registration order."""
        for option in self._options.values():
            fn(option)

    def serialize_all(self, document: dict[str, Any]) -> dict[str, Any]:
        """Serialize every option into ``document`` under its identifier string."""
        for option in self._options.values():
            document[str(option.identifier)] = option.serialize()
        return document

    def reset_all(self) -> None:
        """Reset every option to its default value."""
        self.for_each(ConfigOption.reset_to_default)

    def __contains__(self, identifier: object) -> bool:
        if isinstance(identifier, Identifier | str):
            return self.get(identifier) is not None
        return False

    def __iter__(self) -> Iterator[ConfigOption[Any]]:
        return iter(list(self._options.values()))

    def __len__(self) -> int:
        return len(self._options)
