"""Contract between config options and an editor UI.

Widgets are out of scope here; an editor supplies an ``EntryBuilder`` and lays out
the resulting ``ConfigScreen`` however it likes.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from optionstore.options.base import ConfigOption


class EntryBuilder(Protocol):
    """Creates one editor entry for an option.

    The entry should call ``option.set`` when the user applies a change.
    """

    def build(self, option: "ConfigOption[Any]") -> Any: ...


@dataclass
class ConfigScreen:
    """Editor entries grouped by category translation key."""

    categories: dict[str, list[Any]] = field(default_factory=dict)
    on_save: Callable[[], None] | None = None

    def add_entry(self, category_key: str, entry: Any) -> None:
        self.categories.setdefault(category_key, []).append(entry)

    def save(self) -> None:
        """Run the save callback, if any."""
        if self.on_save is not None:
            self.on_save()
