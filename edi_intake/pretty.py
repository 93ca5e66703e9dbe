"""
Human-readable rendering of a loaded document.

Best effort: every renderer returns None when it cannot render, and the
document's decoded text is returned unchanged in that case.
"""

from __future__ import annotations

import logging
from typing import Optional

from lxml import etree

from .classify import family_for_prefix
from .edifact import CharSpec, split_segments
from .models import Family, LoadedDocument
from .rules import LINE_BREAK, PREFIX_LENGTH, VDA_RECORD_LENGTH, XML_PROLOG

logger = logging.getLogger(__name__)


def prettify_xml(content: bytes) -> Optional[str]:
    parser = etree.XMLParser(
        remove_blank_text=True, resolve_entities=False, no_network=True, load_dtd=False
    )
    try:
        tree = etree.ElementTree(etree.fromstring(content, parser))
    except (etree.XMLSyntaxError, ValueError, LookupError) as exc:
        logger.debug("XML re-parse failed, keeping text as is: %s", exc)
        return None
    return etree.tostring(tree, pretty_print=True, encoding="unicode").rstrip("\n")


def prettify_edifact(text: str) -> str:
    spec = CharSpec.from_una_or_default(text)
    return LINE_BREAK.join(split_segments(text, spec))


def prettify_vda(text: str) -> str:
    return "".join(
        text[pos:pos + VDA_RECORD_LENGTH] + LINE_BREAK
        for pos in range(0, len(text), VDA_RECORD_LENGTH)
    )


def pretty_print(document: LoadedDocument) -> str:
    text = document.text

    rendered = None
    if text.startswith(XML_PROLOG):
        rendered = prettify_xml(document.raw_content)
    elif len(text) >= PREFIX_LENGTH:
        family = family_for_prefix(text[:PREFIX_LENGTH])
        if family is Family.EDIFACT:
            rendered = prettify_edifact(text)
        elif family is Family.VDA:
            rendered = prettify_vda(text)

    if rendered is None:
        return text
    return rendered
