"""Content codec — UTF-8 text / raw bytes <-> the API's base64 transfer encoding.

Everything operates on byte sequences, so characters outside the BMP and
arbitrary binary payloads survive a round trip unchanged.
"""

from __future__ import annotations

import base64
import binascii

from repo_workbench.domain.exceptions import UnsupportedEncodingError


def encode_for_transport(data: bytes) -> str:
    """Return the standard base64 encoding of *data* as ASCII text."""
    return base64.b64encode(data).decode("ascii")


def decode_from_transport(text: str) -> bytes:
    """Decode a base64 payload; GitHub wraps it with newlines every 60 chars."""
    compact = "".join(text.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise UnsupportedEncodingError(f"Payload is not valid base64: {exc}") from exc


def encode_text(text: str) -> str:
    return encode_for_transport(text.encode("utf-8"))


def decode_text(text: str) -> str:
    """Decode a base64 payload and validate it as UTF-8."""
    raw = decode_from_transport(text)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise UnsupportedEncodingError(
            f"Content is not valid UTF-8 text (byte {exc.start})"
        ) from exc
