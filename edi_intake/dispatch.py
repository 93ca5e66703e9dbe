from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

from .models import Family, Interchange
from .parsers import DEFAULT_PARSERS, InterchangeParser

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Routes decoded text to the parser registered for its family.

    Parser exceptions are not handled here; the loader records or re-raises
    them depending on strict mode.
    """

    def __init__(self, parsers: Optional[Mapping[Family, InterchangeParser]] = None) -> None:
        self._parsers: Dict[Family, InterchangeParser] = dict(
            DEFAULT_PARSERS if parsers is None else parsers
        )

    def parser_for(self, family: Family) -> Optional[InterchangeParser]:
        return self._parsers.get(family)

    def with_parser(self, family: Family, parser: InterchangeParser) -> "Dispatcher":
        """Copy of this dispatcher with ``parser`` registered for ``family``."""
        parsers = dict(self._parsers)
        parsers[family] = parser
        return Dispatcher(parsers)

    def dispatch(self, family: Family, text: str) -> Optional[Interchange]:
        parser = self.parser_for(family)
        if parser is None:
            logger.info("No parser registered for family %s", family.value)
            return None
        return parser.parse(text)


default_dispatcher = Dispatcher()
