"""Concrete option types for common value shapes."""

import math
import re
from collections.abc import Callable
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from optionstore.errors import DeserializationError
from optionstore.identifier import Identifier
from optionstore.options.base import ConfigOption, DocumentValue

E = TypeVar("E", bound=Enum)
M = TypeVar("M", bound=BaseModel)


def _type_name(value: Any) -> str:
    return type(value).__name__


class BooleanOption(ConfigOption[bool]):
    """A true/false option."""

    def serialize(self) -> DocumentValue:
        return self.get()

    def deserialize(self, document_value: DocumentValue) -> bool:
        if not isinstance(document_value, bool):
            raise DeserializationError(
                f"Expected a boolean, got {_type_name(document_value)}", self.identifier
            )
        return document_value


class IntegerOption(ConfigOption[int]):
    """An integer option with optional inclusive bounds."""

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: int,
        min_value: int | None = None,
        max_value: int | None = None,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, default_value, tweak_entry)
        self.min_value = min_value
        self.max_value = max_value

    def serialize(self) -> DocumentValue:
        return self.get()

    def deserialize(self, document_value: DocumentValue) -> int:
        # bool is an int subclass but never a valid integer setting
        if isinstance(document_value, bool) or not isinstance(document_value, int):
            raise DeserializationError(
                f"Expected an integer, got {_type_name(document_value)}", self.identifier
            )
        if self.min_value is not None and document_value < self.min_value:
            raise DeserializationError(
                f"{document_value} is below the minimum of {self.min_value}", self.identifier
            )
        if self.max_value is not None and document_value > self.max_value:
            raise DeserializationError(
                f"{document_value} is above the maximum of {self.max_value}", self.identifier
            )
        return document_value


class FloatOption(ConfigOption[float]):
    """A finite floating point option with optional inclusive bounds."""

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: float,
        min_value: float | None = None,
        max_value: float | None = None,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, default_value, tweak_entry)
        self.min_value = min_value
        self.max_value = max_value

    def serialize(self) -> DocumentValue:
        value = float(self.get())
        if not math.isfinite(value):
            raise ValueError(f"Cannot store non-finite value {value} for {self.identifier}")
        return value

    def deserialize(self, document_value: DocumentValue) -> float:
        if isinstance(document_value, bool) or not isinstance(document_value, int | float):
            raise DeserializationError(
                f"Expected a number, got {_type_name(document_value)}", self.identifier
            )
        value = float(document_value)
        if not math.isfinite(value):
            raise DeserializationError(f"Expected a finite number, got {value}", self.identifier)
        if self.min_value is not None and value < self.min_value:
            raise DeserializationError(
                f"{value} is below the minimum of {self.min_value}", self.identifier
            )
        if self.max_value is not None and value > self.max_value:
            raise DeserializationError(
                f"{value} is above the maximum of {self.max_value}", self.identifier
            )
        return value


class StringOption(ConfigOption[str]):
    """A text option, optionally constrained by a regular expression."""

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: str,
        pattern: str | None = None,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, default_value, tweak_entry)
        self.pattern = re.compile(pattern) if pattern is not None else None

    def serialize(self) -> DocumentValue:
        return self.get()

    def deserialize(self, document_value: DocumentValue) -> str:
        if not isinstance(document_value, str):
            raise DeserializationError(
                f"Expected a string, got {_type_name(document_value)}", self.identifier
            )
        if self.pattern is not None and not self.pattern.fullmatch(document_value):
            raise DeserializationError(
                f"'{document_value}' does not match {self.pattern.pattern}", self.identifier
            )
        return document_value


class EnumOption(ConfigOption[E]):
    """An option holding one member of an Enum, stored by member name."""

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: E,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, default_value, tweak_entry)
        self.enum_class: type[E] = type(default_value)

    def serialize(self) -> DocumentValue:
        return self.get().name

    def deserialize(self, document_value: DocumentValue) -> E:
        if not isinstance(document_value, str):
            raise DeserializationError(
                f"Expected a member name, got {_type_name(document_value)}", self.identifier
            )
        try:
            return self.enum_class[document_value]
        except KeyError:
            choices = ", ".join(self.enum_class.__members__)
            raise DeserializationError(
                f"'{document_value}' is not one of: {choices}", self.identifier
            ) from None


class StringListOption(ConfigOption[tuple[str, ...]]):
    """An ordered list of strings.

    The value is held as a tuple so callers cannot mutate it behind the cell's back.
    """

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: tuple[str, ...] | list[str] = (),
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, tuple(default_value), tweak_entry)

    def set(self, new_value: tuple[str, ...] | list[str]) -> None:
        super().set(tuple(new_value))

    def serialize(self) -> DocumentValue:
        return list(self.get())

    def deserialize(self, document_value: DocumentValue) -> tuple[str, ...]:
        if not isinstance(document_value, list):
            raise DeserializationError(
                f"Expected a list, got {_type_name(document_value)}", self.identifier
            )
        for index, item in enumerate(document_value):
            if not isinstance(item, str):
                raise DeserializationError(
                    f"Expected a string at index {index}, got {_type_name(item)}",
                    self.identifier,
                )
        return tuple(document_value)


class ModelOption(ConfigOption[M]):
    """An option whose value is a pydantic model, stored as a nested object."""

    def __init__(
        self,
        identifier: Identifier | str,
        category: str,
        default_value: M,
        tweak_entry: Callable[[Any], None] | None = None,
    ):
        super().__init__(identifier, category, default_value, tweak_entry)
        self.model_class: type[M] = type(default_value)

    def serialize(self) -> DocumentValue:
        return self.get().model_dump(mode="json")

    def deserialize(self, document_value: DocumentValue) -> M:
        if not isinstance(document_value, dict):
            raise DeserializationError(
                f"Expected an object, got {_type_name(document_value)}", self.identifier
            )
        try:
            return self.model_class.model_validate(document_value)
        except ValidationError as e:
            raise DeserializationError(
                f"Invalid {self.model_class.__name__}: {e.error_count()} validation error(s)",
                self.identifier,
            ) from e
