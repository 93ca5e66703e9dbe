"""
EDIFACT control characters and segment splitting.

A leading UNA service segment declares, in order: component separator,
element separator, decimal mark, release character, a reserved character and
the segment terminator. Without UNA the syntax defaults apply.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

UNA_TAG = "UNA"
UNA_LENGTH = 9


@dataclass(frozen=True)
class CharSpec:
    component_separator: str = ":"
    element_separator: str = "+"
    decimal_mark: str = "."
    release_character: str = "?"
    reserved: str = " "
    segment_terminator: str = "'"

    @classmethod
    def from_una(cls, una: str) -> "CharSpec":
        chars = una[len(UNA_TAG):UNA_LENGTH]
        return cls(*chars)

    @classmethod
    def from_una_or_default(cls, text: str) -> "CharSpec":
        if text.startswith(UNA_TAG) and len(text) >= UNA_LENGTH:
            return cls.from_una(text[:UNA_LENGTH])
        return cls()


DEFAULT_CHAR_SPEC = CharSpec()


def _split(text: str, separator: str, release: str, keep_separator: bool) -> List[str]:
    parts: List[str] = []
    current: List[str] = []
    escaped = False

    for ch in text:
        if escaped:
            current.append(ch)
            escaped = False
            continue
        if ch == release:
            current.append(ch)
            escaped = True
            continue
        if ch == separator:
            if keep_separator:
                current.append(ch)
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)

    parts.append("".join(current))
    return parts


def split_segments(text: str, spec: CharSpec = DEFAULT_CHAR_SPEC) -> List[str]:
    """
    Split ``text`` into segments, terminators kept attached.

    Line breaks around segments are dropped and so are empty segments.
    A terminator preceded by the release character does not end a segment.
    """
    body = text
    if body.startswith(UNA_TAG) and len(body) >= UNA_LENGTH:
        segments = [body[:UNA_LENGTH]]
        body = body[UNA_LENGTH:]
    else:
        segments = []

    for segment in _split(body, spec.segment_terminator, spec.release_character, True):
        segment = segment.strip("\r\n")
        if segment:
            segments.append(segment)
    return segments


def split_elements(segment: str, spec: CharSpec = DEFAULT_CHAR_SPEC) -> List[str]:
    """Data elements of one segment, the tag first. Terminator removed."""
    if segment.endswith(spec.segment_terminator) and not _is_released(segment, spec):
        segment = segment[: -len(spec.segment_terminator)]
    return _split(segment, spec.element_separator, spec.release_character, False)


def split_components(element: str, spec: CharSpec = DEFAULT_CHAR_SPEC) -> List[str]:
    return _split(element, spec.component_separator, spec.release_character, False)


def unescape(value: str, spec: CharSpec = DEFAULT_CHAR_SPEC) -> str:
    """Drop release characters; a doubled release character stands for itself."""
    chars: List[str] = []
    escaped = False
    for ch in value:
        if ch == spec.release_character and not escaped:
            escaped = True
            continue
        chars.append(ch)
        escaped = False
    return "".join(chars)


def _is_released(segment: str, spec: CharSpec) -> bool:
    # Count release characters directly before the terminator; odd means escaped.
    count = 0
    i = len(segment) - len(spec.segment_terminator) - 1
    while i >= 0 and segment[i] == spec.release_character:
        count += 1
        i -= 1
    return count % 2 == 1
