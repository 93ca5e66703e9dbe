"""
Envelope-level parsers, one per document family.

They read only what identifies an interchange (headers, record types, root
elements). Full grammars can be plugged in through the Dispatcher instead.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Protocol

from lxml import etree

from .edifact import CharSpec, split_components, split_elements, split_segments, unescape
from .exceptions import InterchangeSyntaxError
from .models import (
    EdifactInterchange,
    Family,
    InhouseInterchange,
    Interchange,
    VdaInterchange,
    VdaRecord,
    XmlBiztalkInterchange,
    XmlEcodInterchange,
)
from .rules import ECOD_MARKER, INHOUSE_PREFIXES, VDA_RECORD_LENGTH

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


class InterchangeParser(Protocol):
    def parse(self, text: str) -> Interchange: ...


def _first_component(elements: List[str], index: int, spec: CharSpec) -> Optional[str]:
    if index >= len(elements) or not elements[index]:
        return None
    return unescape(split_components(elements[index], spec)[0], spec) or None


class EdifactParser:
    def parse(self, text: str) -> EdifactInterchange:
        spec = CharSpec.from_una_or_default(text)
        segments = split_segments(text, spec)

        header = None
        message_types = []
        for segment in segments:
            elements = split_elements(segment, spec)
            tag = elements[0]
            if tag == "UNB" and header is None:
                header = elements
            elif tag == "UNH":
                message_type = _first_component(elements, 2, spec)
                if message_type:
                    message_types.append(message_type)

        if header is None:
            raise InterchangeSyntaxError("EDIFACT interchange has no UNB segment")

        prepared = None
        if len(header) > 4 and header[4]:
            prepared = ":".join(unescape(c, spec) for c in split_components(header[4], spec))

        return EdifactInterchange(
            syntax_identifier=_first_component(header, 1, spec),
            sender=_first_component(header, 2, spec),
            recipient=_first_component(header, 3, spec),
            prepared=prepared,
            control_reference=_first_component(header, 5, spec),
            message_types=message_types,
            segments=segments,
        )


def vda_records(text: str) -> List[str]:
    """Records are lines when the file has line breaks, else fixed-width chunks."""
    if "\n" in text or "\r" in text:
        return [line for line in text.splitlines() if line.strip()]
    return [
        text[pos:pos + VDA_RECORD_LENGTH]
        for pos in range(0, len(text), VDA_RECORD_LENGTH)
        if text[pos:pos + VDA_RECORD_LENGTH].strip()
    ]


class VdaParser:
    def parse(self, text: str) -> VdaInterchange:
        records = []
        for number, record in enumerate(vda_records(text), start=1):
            record_type = record[:3]
            if not record_type.isdigit() or len(record_type) != 3:
                raise InterchangeSyntaxError(
                    f"VDA record {number} has invalid record type {record_type!r}"
                )
            records.append(
                VdaRecord(record_type=record_type, version=record[3:5], content=record)
            )

        if not records:
            raise InterchangeSyntaxError("VDA interchange has no records")
        return VdaInterchange(records=records)


class InhouseParser:
    def parse(self, text: str) -> InhouseInterchange:
        lines = [line for line in text.splitlines() if line.strip()]
        if not lines or lines[0][:3] not in INHOUSE_PREFIXES:
            raise InterchangeSyntaxError("in-house interchange must start with a SYS header")
        return InhouseInterchange(header=lines[0], records=lines[1:])


def _parse_xml_text(text: str) -> etree._Element:
    # Already decoded: the declaration's encoding no longer applies.
    body = _XML_DECLARATION.sub("", text, count=1)
    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)
    try:
        return etree.fromstring(body, parser)
    except etree.XMLSyntaxError as exc:
        raise InterchangeSyntaxError(f"malformed XML: {exc}") from exc


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


class XmlBiztalkParser:
    def parse(self, text: str) -> XmlBiztalkInterchange:
        root = _parse_xml_text(text)
        container = next(
            (el for el in root.iter() if isinstance(el.tag, str) and _local_name(el) == "body"),
            root,
        )
        documents = sum(1 for child in container if isinstance(child.tag, str))
        return XmlBiztalkInterchange(root_tag=_local_name(root), documents=documents)


class XmlEcodParser:
    def parse(self, text: str) -> XmlEcodInterchange:
        root = _parse_xml_text(text)
        prefix = ECOD_MARKER.lstrip("<")
        document_type = None
        for element in root.iter():
            if isinstance(element.tag, str) and _local_name(element).startswith(prefix):
                document_type = _local_name(element)[len(prefix):] or None
                break
        return XmlEcodInterchange(root_tag=_local_name(root), document_type=document_type)


DEFAULT_PARSERS: Dict[Family, InterchangeParser] = {
    Family.INHOUSE: InhouseParser(),
    Family.EDIFACT: EdifactParser(),
    Family.VDA: VdaParser(),
    Family.XML_BIZTALK: XmlBiztalkParser(),
    Family.XML_ECOD: XmlEcodParser(),
}
