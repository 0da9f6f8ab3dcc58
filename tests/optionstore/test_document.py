"""Tests for the document codecs."""

import pytest

from optionstore.document import JsonDocumentCodec, YamlDocumentCodec, codec_for_path
from optionstore.errors import DocumentFormatError


class TestJsonDocumentCodec:
    """Test JSON encoding and decoding."""

    def test_preserves_key_order(self):
        """Should keep insertion order on both sides."""
        codec = JsonDocumentCodec()
        document = {"_version": 1, "b:z": 1, "a:y": {"nested": [1, 2]}}

        decoded = codec.decode(codec.encode(document))

        assert list(decoded) == ["_version", "b:z", "a:y"]
        assert decoded == document

    def test_tab_indent_and_trailing_newline(self):
        """Should indent with tabs and end with a newline."""
        encoded = JsonDocumentCodec().encode({"_version": 1})
        assert encoded == b'{\n\t"_version": 1\n}\n'

    def test_custom_indent(self):
        """Should honor a configured indent."""
        encoded = JsonDocumentCodec(indent=2).encode({"_version": 1})
        assert encoded == b'{\n  "_version": 1\n}\n'

    def test_non_ascii_written_as_utf8(self):
        """Should write non-ASCII text as UTF-8 instead of escapes."""
        encoded = JsonDocumentCodec().encode({"mod:name": "café"})
        assert "café".encode() in encoded

    @pytest.mark.parametrize("data", [b"{broken", b"[1, 2]", b"42", b"\xff\xfe"])
    def test_rejects_non_documents(self, data):
        """Should reject invalid JSON and non-object top levels."""
        with pytest.raises(DocumentFormatError):
            JsonDocumentCodec().decode(data)


class TestYamlDocumentCodec:
    """Test YAML encoding and decoding."""

    def test_round_trip(self):
        """Should decode what it encodes, in order."""
        codec = YamlDocumentCodec()
        document = {"_version": 2, "mod:items": ["a", "b"], "mod:flag": True}

        decoded = codec.decode(codec.encode(document))

        assert decoded == document
        assert list(decoded) == ["_version", "mod:items", "mod:flag"]

    def test_empty_file_is_empty_document(self):
        """Should treat an empty file as an empty document."""
        assert YamlDocumentCodec().decode(b"") == {}

    @pytest.mark.parametrize("data", [b"- a\n- b\n", b"key: [unclosed\n"])
    def test_rejects_non_documents(self, data):
        """Should reject lists and invalid YAML."""
        with pytest.raises(DocumentFormatError):
            YamlDocumentCodec().decode(data)


class TestCodecForPath:
    """Test codec selection."""

    @pytest.mark.parametrize(
        "path,codec_class",
        [
            ("config.yaml", YamlDocumentCodec),
            ("config.YML", YamlDocumentCodec),
            ("config.json", JsonDocumentCodec),
            ("config", JsonDocumentCodec),
        ],
    )
    def test_selects_by_suffix(self, path, codec_class):
        """Should choose YAML only for YAML suffixes."""
        assert isinstance(codec_for_path(path), codec_class)


class TestDecodeLimits:
    """Test decoding pathological input."""

    @pytest.mark.parametrize("codec_class", [JsonDocumentCodec, YamlDocumentCodec])
    def test_deep_nesting_is_a_format_error(self, codec_class):
        """Should turn a recursion overflow into DocumentFormatError."""
        depth = 100000
        data = ('{"mod:b": ' + "[" * depth + "]" * depth + "}").encode()
        with pytest.raises(DocumentFormatError):
            codec_class().decode(data)

    def test_json_encode_rejects_nan(self):
        """Should refuse to write non-standard JSON."""
        with pytest.raises(ValueError):
            JsonDocumentCodec().encode({"mod:f": float("nan")})
