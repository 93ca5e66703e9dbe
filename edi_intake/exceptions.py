"""Intake exceptions."""

from __future__ import annotations

from typing import Optional

from .models import Family


class IntakeError(Exception):
    """Base exception for the intake pipeline."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InterchangeSyntaxError(IntakeError):
    """Raised by a parser when the text does not have the expected envelope."""


class ParseFailedError(IntakeError):
    """
    Raised in strict mode when the family parser failed.

    The parser's own exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, family: Optional[Family] = None) -> None:
        self.family = family
        super().__init__(message)


class UnknownEncodingError(IntakeError, ValueError):
    """Raised when a caller-supplied encoding name is not a known codec."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"unknown encoding: {encoding}")
