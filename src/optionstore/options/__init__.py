"""Config option types."""

from .base import ConfigOption, DocumentValue
from .types import (
    BooleanOption,
    EnumOption,
    FloatOption,
    IntegerOption,
    ModelOption,
    StringListOption,
    StringOption,
)

__all__ = [
    "BooleanOption",
    "ConfigOption",
    "DocumentValue",
    "EnumOption",
    "FloatOption",
    "IntegerOption",
    "ModelOption",
    "StringListOption",
    "StringOption",
]
