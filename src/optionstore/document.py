"""Encoding config documents to and from text."""

import json
from pathlib import Path
from typing import Any, Protocol

import yaml

from optionstore.errors import DocumentFormatError


class DocumentCodec(Protocol):
    """Converts between a document mapping and its stored bytes."""

    def encode(self, document: dict[str, Any]) -> bytes:
        """Encode a document into UTF-8 bytes."""
        ...

    def decode(self, data: bytes) -> dict[str, Any]:
        """Decode stored bytes into a document.

        Raises:
            DocumentFormatError: If the data is not a document with an object at the top
        """
        ...


def _require_object(document: Any) -> dict[str, Any]:
    if not isinstance(document, dict):
        raise DocumentFormatError(
            f"Expected an object at the top level of the document, got {type(document).__name__}"
        )
    return document


class JsonDocumentCodec:
    """JSON documents, pretty printed with a configurable indent (tabs by default)."""

    def __init__(self, indent: str | int | None = "\t"):
        self.indent = indent

    def encode(self, document: dict[str, Any]) -> bytes:
        text = json.dumps(document, indent=self.indent, ensure_ascii=False, allow_nan=False)
        return (text + "\n").encode("utf-8")

    def decode(self, data: bytes) -> dict[str, Any]:
        try:
            document = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise DocumentFormatError(f"Config document is not valid JSON: {e}") from e
        return _require_object(document)


class YamlDocumentCodec:
    """YAML documents, written in block style with insertion order preserved."""

    def encode(self, document: dict[str, Any]) -> bytes:
        text = yaml.dump(
            document, default_flow_style=False, sort_keys=False, allow_unicode=True
        )
        return text.encode("utf-8")

    def decode(self, data: bytes) -> dict[str, Any]:
        try:
            document = yaml.safe_load(data.decode("utf-8"))
        except (UnicodeDecodeError, yaml.YAMLError, RecursionError) as e:
            raise DocumentFormatError(f"Config document is not valid YAML: {e}") from e
        if document is None:
            # An empty YAML file is an empty document
            return {}
        return _require_object(document)


def codec_for_path(path: Path | str) -> DocumentCodec:
    """Pick a codec from the file suffix; anything that isn't YAML is JSON."""
    if Path(path).suffix.lower() in (".yaml", ".yml"):
        return YamlDocumentCodec()
    return JsonDocumentCodec()
