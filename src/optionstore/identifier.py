"""Namespaced identifiers used as option keys."""

import re

from pydantic import BaseModel, ConfigDict, field_validator

DEFAULT_NAMESPACE = "config"

_NAMESPACE_PATTERN = re.compile(r"^[a-z0-9_.-]+$")
_PATH_PATTERN = re.compile(r"^[a-z0-9_./-]+$")


class Identifier(BaseModel):
    """A ``namespace:path`` pair.

    The string form doubles as the key an option is stored under in the config
    document and as the root of its translation keys.
    """

    model_config = ConfigDict(frozen=True)

    namespace: str
    path: str

    def __init__(self, namespace: str, path: str, **kwargs):
        super().__init__(namespace=namespace, path=path, **kwargs)

    @field_validator("namespace")
    @classmethod
    def validate_namespace(cls, v: str) -> str:
        """Validate namespace characters."""
        if not _NAMESPACE_PATTERN.match(v):
            raise ValueError(
                f"Invalid namespace '{v}'. "
                "Must contain only lowercase letters, digits, underscores, dots, and hyphens."
            )
        return v

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate path characters."""
        if not _PATH_PATTERN.match(v):
            raise ValueError(
                f"Invalid path '{v}'. "
                "Must contain only lowercase letters, digits, underscores, dots, hyphens, "
                "and forward slashes."
            )
        return v

    @classmethod
    def parse(cls, value: str) -> "Identifier":
        """Parse ``namespace:path``; a bare ``path`` gets the default namespace."""
        namespace, sep, path = value.partition(":")
        if not sep:
            return cls(DEFAULT_NAMESPACE, value)
        return cls(namespace, path)

    def __str__(self) -> str:
        return f"{self.namespace}:{self.path}"
