from __future__ import annotations

from typing import Optional

from .rules import BOM_SIGNATURES


def _match_signature(data: bytes) -> Optional[tuple[bytes, str]]:
    for signature, encoding in BOM_SIGNATURES:
        if data.startswith(signature):
            return signature, encoding
    return None


def strip_bom(data: bytes) -> bytes:
    """Return ``data`` without a leading byte-order mark, if it has one."""
    match = _match_signature(data)
    if match is None:
        return bytes(data)
    return bytes(data[len(match[0]):])


def bom_encoding(data: bytes) -> Optional[str]:
    """Codec name announced by the leading byte-order mark, or None."""
    match = _match_signature(data)
    return match[1] if match else None
