from __future__ import annotations

import logging

from .models import Classification, Family, Recognition
from .rules import (
    BIZTALK_MARKER,
    ECOD_MARKER,
    EDIFACT_PREFIXES,
    INHOUSE_PREFIXES,
    PREFIX_LENGTH,
    UNSUPPORTED_PREFIXES,
    VDA_PREFIXES,
)

logger = logging.getLogger(__name__)

# Substring markers, checked before any prefix.
_XML_MARKERS = (
    (BIZTALK_MARKER, Family.XML_BIZTALK),
    (ECOD_MARKER, Family.XML_ECOD),
)

_PREFIX_FAMILIES = (
    (INHOUSE_PREFIXES, Family.INHOUSE),
    (EDIFACT_PREFIXES, Family.EDIFACT),
    (VDA_PREFIXES, Family.VDA),
)


def family_for_prefix(prefix: str):
    for prefixes, family in _PREFIX_FAMILIES:
        if prefix in prefixes:
            return family
    return None


def classify(text: str) -> Classification:
    """
    Decide the document family of decoded ``text`` from its content.

    XML markers match anywhere in the text and win over the leading
    three-character code. Known headers without a parser come back as
    ``Recognition.UNSUPPORTED``; everything else, including text too short to
    carry a code, as ``Recognition.UNRECOGNIZED``.
    """
    for marker, family in _XML_MARKERS:
        if marker in text:
            return Classification(
                recognition=Recognition.RECOGNIZED, family=family, prefix=marker
            )

    if len(text) < PREFIX_LENGTH:
        logger.debug("Text too short to classify (%d chars)", len(text))
        return Classification(recognition=Recognition.UNRECOGNIZED, prefix=text or None)

    prefix = text[:PREFIX_LENGTH]

    family = family_for_prefix(prefix)
    if family is not None:
        return Classification(
            recognition=Recognition.RECOGNIZED, family=family, prefix=prefix
        )

    dialect = UNSUPPORTED_PREFIXES.get(prefix)
    if dialect is not None:
        return Classification(
            recognition=Recognition.UNSUPPORTED,
            family=Family.X12 if dialect == Family.X12.value else None,
            prefix=prefix,
            dialect=dialect,
        )

    return Classification(recognition=Recognition.UNRECOGNIZED, prefix=prefix)
