"""
Loading of interchange documents.

Responsibilities:
- byte-order mark removal
- encoding detection + decoding
- family classification
- dispatch to the family parser, with failure capture
- response envelopes for the HTTP service
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .bom import strip_bom
from .classify import classify
from .config import IntakeSettings, get_settings
from .dispatch import Dispatcher, default_dispatcher
from .encoding import charset_hint, decode, resolve_encoding
from .exceptions import InterchangeSyntaxError, ParseFailedError
from .models import LoadedDocument
from .pretty import pretty_print

logger = logging.getLogger(__name__)


def load(
    content: bytes,
    file_name: str = "",
    *,
    strict: bool = False,
    encoding: Optional[str] = None,
    dispatcher: Optional[Dispatcher] = None,
    settings: Optional[IntakeSettings] = None,
) -> LoadedDocument:
    """
    Load an interchange from raw bytes.

    ``encoding`` replaces the configured legacy code page as the last-resort
    fallback; an XML declaration, valid UTF-8, a BOM or the UTF-16 heuristic
    still take precedence over it.
    An unknown ``encoding`` name raises UnknownEncodingError.

    With ``strict`` a parser failure raises ParseFailedError. Otherwise it is
    recorded in ``parse_error`` and the document is returned.
    """
    settings = settings or get_settings()
    dispatcher = dispatcher or default_dispatcher

    raw = strip_bom(content)
    resolution = resolve_encoding(
        raw,
        original=content,
        fallback=encoding or settings.legacy_encoding,
    )
    text = decode(raw, resolution.encoding)
    classification = classify(text)
    logger.debug(
        "Loaded %r: encoding=%s (%s), recognition=%s, family=%s",
        file_name,
        resolution.encoding,
        resolution.source.value,
        classification.recognition.value,
        classification.family.value if classification.family else None,
    )

    interchange = None
    parse_error = None
    if classification.has_parser_family and dispatcher.parser_for(classification.family) is None:
        logger.info("%r is %s, but no parser is registered", file_name, classification.family.value)
    elif classification.has_parser_family:
        try:
            interchange = dispatcher.dispatch(classification.family, text)
            if interchange is None:
                raise InterchangeSyntaxError("parser returned no interchange")
        except Exception as exc:
            parse_error = str(exc) or exc.__class__.__name__
            logger.warning(
                "Parsing %r as %s failed: %s",
                file_name,
                classification.family.value,
                parse_error,
            )
            if strict:
                raise ParseFailedError(parse_error, classification.family) from exc
    elif classification.dialect:
        logger.info("%r looks like %s, which has no parser", file_name, classification.dialect)

    return LoadedDocument(
        file_name=file_name,
        raw_content=raw,
        encoding=resolution.encoding,
        encoding_source=resolution.source,
        text=text,
        classification=classification,
        parse_error=parse_error,
        interchange=interchange,
    )


def load_file(
    path: Union[str, Path],
    *,
    strict: bool = False,
    encoding: Optional[str] = None,
    dispatcher: Optional[Dispatcher] = None,
    settings: Optional[IntakeSettings] = None,
) -> LoadedDocument:
    path = Path(path)
    content = path.read_bytes()
    return load(
        content,
        path.name,
        strict=strict,
        encoding=encoding,
        dispatcher=dispatcher,
        settings=settings,
    )


def load_response(document: LoadedDocument) -> Dict[str, Any]:
    """Envelope for the /load endpoint."""
    return {
        "file_name": document.file_name,
        "encoding": {
            "resolved": document.encoding,
            "source": document.encoding_source,
            "charset_hint": charset_hint(document.raw_content),
        },
        "classification": document.classification,
        "interchange": document.interchange,
        "parse_error": document.parse_error,
        "text": document.text,
    }


def pretty_response(document: LoadedDocument) -> Dict[str, Any]:
    return {
        "file_name": document.file_name,
        "classification": document.classification,
        "text": pretty_print(document),
    }
