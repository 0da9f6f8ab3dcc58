"""Base class for config options."""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from optionstore.identifier import Identifier
from optionstore.utils.atomic import AtomicReference

if TYPE_CHECKING:
    from optionstore.editor import EntryBuilder

T = TypeVar("T")

DocumentValue = Any


class ConfigOption(ABC, Generic[T]):
    """A named, typed unit of configuration state.

    The registry only relies on the type-independent part of this interface
    (``identifier``, ``serialize``, ``deserialize_to_value`` and
    ``reset_to_default``), so options of different value types can live side by
    side in one registry.
    """

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: T,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        """Initialize the option with its default as the current value.

        Args:
            identifier: Key this option is stored under; also roots its translation key
            category: Grouping label, namespaced like the identifier
            default_value: Value used before loading and whenever loading fails
            tweak_entry: Optional hook applied to each editor entry built for this option
        """
        if isinstance(identifier, str):
            identifier = Identifier.parse(identifier)
        self.identifier = identifier
        self.category = Identifier(identifier.namespace, category)
        self.default_value = default_value
        self.tweak_entry = tweak_entry
        self.value: AtomicReference[T] = AtomicReference(default_value)

        self.translation_key = f"{identifier.namespace}.config.{identifier.path}"
        self.category_translation_key = (
            f"{self.category.namespace}.config.category.{self.category.path}"
        )

    def get(self) -> T:
        """Get the current value of this option."""
        return self.value.get()

    def set(self, new_value: T) -> None:
        """Set the current value. This does not save it; see ``Config.save``."""
        self.value.set(new_value)

    @abstractmethod
    def serialize(self) -> DocumentValue:
        """Serialize the current value into something ``deserialize`` will accept."""

    @abstractmethod
    def deserialize(self, document_value: DocumentValue) -> T:
        """Turn a document value into a value of this option's type.

        Must not touch the current value.

        Raises:
            DeserializationError: If the document value has the wrong shape or type
        """

    def deserialize_to_value(self, document_value: DocumentValue) -> None:
        """Deserialize ``document_value`` and make it the current value."""
        self.set(self.deserialize(document_value))

    def reset_to_default(self) -> None:
        """Reset the current value to the default."""
        self.value.set(self.default_value)

    def build_entry(self, entry_builder: "EntryBuilder") -> Any:
        """Build an editor entry for this option and apply ``tweak_entry`` to it."""
        entry = entry_builder.build(self)
        if self.tweak_entry is not None:
            self.tweak_entry(entry)
        return entry

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identifier}, value={self.get()!r})"
