"""
Raw source model and boundary decoding.

A RawSource is always bytes. Text handed in by a caller is encoded once as
UTF-8 and remembered as such, so every adapter decodes through the same path
exactly once, before any format-specific logic runs.

Declared encodings use the names accepted by ``validate_options``; ``base64``
and ``hex`` render the payload bytes as base64/hex text rather than decoding
them. Unknown or absent encodings decode as UTF-8 (the validator reports
unknown names).
"""

from __future__ import annotations

import base64
import codecs
from dataclasses import dataclass
from pathlib import Path

from data_profiler.exceptions import InvalidFormatError

# Declared encoding name (lower-cased) -> Python codec or rendering mode
_CODECS: dict[str, str] = {
    "utf8": "utf-8-sig",
    "utf-8": "utf-8-sig",
    "ascii": "ascii",
    "utf16le": "utf-16-le",
    "ucs2": "utf-16-le",
    "latin1": "latin-1",
    "binary": "latin-1",
    "base64": "base64",
    "hex": "hex",
}

SUPPORTED_ENCODINGS: tuple[str, ...] = tuple(_CODECS)

_DEFAULT_CODEC = "utf-8-sig"


@dataclass(frozen=True)
class RawSource:
    """Byte payload plus optional file name and declared source type."""

    data: bytes
    file_name: str | None = None
    source_type: str | None = None
    text_input: bool = False

    @classmethod
    def of(
        cls,
        payload: str | bytes,
        *,
        file_name: str | None = None,
        source_type: str | None = None,
    ) -> RawSource:
        if isinstance(payload, str):
            return cls(payload.encode("utf-8"), file_name, source_type, True)
        return cls(bytes(payload), file_name, source_type)

    @classmethod
    def from_path(cls, path: Path, source_type: str | None = None) -> RawSource:
        return cls(path.read_bytes(), path.name, source_type)


def resolve_codec(encoding: str | None) -> str:
    """Map a declared encoding name to a codec; unknown names fall back to UTF-8."""
    if not encoding:
        return _DEFAULT_CODEC
    return _CODECS.get(encoding.lower(), _DEFAULT_CODEC)


def decode_text(source: RawSource, encoding: str | None, source_type: str) -> str:
    """Decode the whole payload once. Raises InvalidFormatError on bad bytes."""
    codec = "utf-8" if source.text_input else resolve_codec(encoding)
    if codec == "base64":
        return base64.b64encode(source.data).decode("ascii")
    if codec == "hex":
        return source.data.hex()
    try:
        return source.data.decode(codec)
    except UnicodeDecodeError as e:
        raise InvalidFormatError(
            source_type, f"Cannot decode {source_type.upper()} payload as {codec}: {e.reason}"
        ) from e


class StreamDecoder:
    """Incremental decoder for chunked input.

    ``feed`` returns whatever text the chunk completes; ``finish`` flushes the
    remainder. A decode error surfaces on the chunk that caused it.
    """

    def __init__(self, encoding: str | None, source_type: str):
        self._codec = resolve_codec(encoding)
        self._source_type = source_type
        self._raw = bytearray()
        self._decoder = (
            None
            if self._codec in ("base64", "hex")
            else codecs.getincrementaldecoder(self._codec)()
        )

    def feed(self, chunk: bytes) -> str:
        if self._decoder is None:
            self._raw.extend(chunk)
            return ""
        return self._decode(chunk, final=False)

    def finish(self) -> str:
        if self._decoder is None:
            data = bytes(self._raw)
            if self._codec == "base64":
                return base64.b64encode(data).decode("ascii")
            return data.hex()
        return self._decode(b"", final=True)

    def _decode(self, chunk: bytes, final: bool) -> str:
        try:
            return self._decoder.decode(chunk, final)
        except UnicodeDecodeError as e:
            raise InvalidFormatError(
                self._source_type,
                f"Cannot decode {self._source_type.upper()} payload as {self._codec}: {e.reason}",
            ) from e
