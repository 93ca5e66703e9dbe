"""
Encoding detection for interchange files.

Resolution order, first match wins:
1. encoding declared in the XML prolog of a well-formed XML document
2. strict UTF-8 decode succeeds
3. byte-order mark of the original buffer
4. zero bytes at offsets 1, 3 and 5 (UTF-16 little endian without BOM)
5. fallback code page (caller override or configured legacy code page)
"""

from __future__ import annotations

import codecs
import logging
import re
from dataclasses import dataclass
from typing import Optional

from charset_normalizer import from_bytes
from lxml import etree

from .bom import bom_encoding
from .exceptions import UnknownEncodingError
from .models import EncodingSource
from .rules import (
    DEFAULT_LEGACY_ENCODING,
    UTF16_HEURISTIC_ENCODING,
    UTF16_HEURISTIC_OFFSETS,
)

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(
    r"^\ufeff?<\?xml[^>]*?\sencoding\s*=\s*([\"'])([A-Za-z0-9._:-]+)\1",
)

# First bytes of "<?" in the encodings that are not ASCII-compatible.
_XML_START_UNITS = (
    (b"<\x00\x00\x00", "utf-32-le"),
    (b"\x00\x00\x00<", "utf-32-be"),
    (b"<\x00?\x00", "utf-16-le"),
    (b"\x00<\x00?", "utf-16-be"),
)

_GENERIC_UNICODE = ("utf-16", "utf-32")

PROLOG_SAMPLE_SIZE = 512

# charset-normalizer only needs a sample
HINT_SAMPLE_SIZE = 8192


@dataclass(frozen=True)
class EncodingResolution:
    encoding: str
    source: EncodingSource


def canonical_encoding(name: str) -> str:
    """Python codec name for ``name``. Raises LookupError for unknown names."""
    return codecs.lookup(name).name


def checked_encoding(name: str) -> str:
    """Like canonical_encoding, but raises UnknownEncodingError."""
    try:
        return canonical_encoding(name)
    except LookupError:
        raise UnknownEncodingError(name) from None


def _xml_parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


def _start_unit_encoding(data: bytes) -> Optional[str]:
    for prefix, encoding in _XML_START_UNITS:
        if data.startswith(prefix):
            return encoding
    return None


def _has_explicit_declaration(data: bytes) -> bool:
    # docinfo reports UTF-8 even without a declaration, so look at the prolog.
    head = data[:PROLOG_SAMPLE_SIZE].decode(
        bom_encoding(data) or _start_unit_encoding(data) or "latin-1", errors="replace"
    )
    return _XML_DECLARATION.match(head) is not None


def _endian_specific(name: str, data: bytes, original: Optional[bytes]) -> str:
    if name not in _GENERIC_UNICODE:
        return name
    for candidate in (bom_encoding(original or b""), bom_encoding(data), _start_unit_encoding(data)):
        if candidate and candidate.startswith(name + "-"):
            return candidate
    return name


def xml_declared_encoding(data: bytes, original: Optional[bytes] = None) -> Optional[str]:
    """
    Encoding named by the XML declaration, if ``data`` is a well-formed XML
    document that has one.

    Generic ``utf-16``/``utf-32`` names are narrowed to the byte order given
    by the BOM of ``original`` or by the document's first bytes.

    Anything that does not parse as XML, or that names an encoding Python does
    not know, yields None.
    """
    if (
        not data.lstrip().startswith(b"<")
        and _start_unit_encoding(data) is None
        and bom_encoding(data) is None
    ):
        return None

    try:
        root = etree.fromstring(data, _xml_parser())
    except (etree.XMLSyntaxError, ValueError, LookupError):
        return None

    name = root.getroottree().docinfo.encoding
    if not name or not _has_explicit_declaration(data):
        return None

    try:
        declared = canonical_encoding(name)
    except LookupError:
        logger.debug("XML declaration names unknown encoding %r", name)
        return None
    return _endian_specific(declared, data, original)


def _is_strict_utf8(data: bytes) -> bool:
    try:
        data.decode("utf-8", errors="strict")
    except UnicodeDecodeError:
        return False
    return True


def _looks_like_utf16_le(data: bytes) -> bool:
    if len(data) <= max(UTF16_HEURISTIC_OFFSETS):
        return False
    return all(data[i] == 0 for i in UTF16_HEURISTIC_OFFSETS)


def resolve_encoding(
    data: bytes,
    declared_xml_encoding: Optional[str] = None,
    *,
    original: Optional[bytes] = None,
    fallback: Optional[str] = None,
) -> EncodingResolution:
    """
    Resolve the encoding of BOM-stripped ``data``.

    ``original`` is the buffer before BOM stripping (defaults to ``data``).
    ``fallback`` replaces the legacy code page in the last step only.

    Raises UnknownEncodingError if ``declared_xml_encoding`` or ``fallback``
    names a codec Python does not know.
    """
    fallback = checked_encoding(fallback or DEFAULT_LEGACY_ENCODING)
    if declared_xml_encoding:
        return EncodingResolution(
            checked_encoding(declared_xml_encoding), EncodingSource.XML_DECLARATION
        )

    declared = xml_declared_encoding(data, original)
    if declared:
        return EncodingResolution(declared, EncodingSource.XML_DECLARATION)

    if _is_strict_utf8(data):
        return EncodingResolution("utf-8", EncodingSource.UTF8)

    from_bom = bom_encoding(original if original is not None else data)
    if from_bom:
        return EncodingResolution(canonical_encoding(from_bom), EncodingSource.BOM)

    if _looks_like_utf16_le(data):
        return EncodingResolution(
            canonical_encoding(UTF16_HEURISTIC_ENCODING), EncodingSource.UTF16_HEURISTIC
        )

    return EncodingResolution(fallback, EncodingSource.FALLBACK)


def detect_encoding(
    data: bytes,
    declared_xml_encoding: Optional[str] = None,
    *,
    original: Optional[bytes] = None,
    fallback: Optional[str] = None,
) -> str:
    return resolve_encoding(
        data, declared_xml_encoding, original=original, fallback=fallback
    ).encoding


def decode(data: bytes, encoding: str) -> str:
    # Invalid sequences become U+FFFD so a resolved encoding always decodes.
    return data.decode(encoding, errors="replace")


def charset_hint(data: bytes) -> Optional[str]:
    """
    Best guess from charset-normalizer, for diagnostics only.

    It never takes part in the resolution order above.
    """
    if not data:
        return None
    match = from_bytes(data[:HINT_SAMPLE_SIZE]).best()
    if match is None:
        return None
    return match.encoding
