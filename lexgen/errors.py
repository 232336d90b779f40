"""Exceptions raised while loading Lexicons and decoding TIDs."""

from __future__ import annotations

from typing import Optional


class LexgenError(Exception):
    """Base class for all compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        """``message (path; code) Hint: hint``, leaving out the parts that are unset."""
        meta = "; ".join(part for part in (self.path, self.code) if part)
        text = f"{self.message} ({meta})" if meta else self.message
        if self.hint:
            text = f"{text} Hint: {self.hint}"
        return text


class MalformedDocumentError(LexgenError):
    """Raised when a Lexicon payload is not valid JSON or lacks an ``id``."""

    code = "LEX001"


class InvalidTIDError(LexgenError, ValueError):
    """Raised when a string is not a canonical 13-character TID."""

    code = "LEX002"


__all__ = [
    "LexgenError",
    "MalformedDocumentError",
    "InvalidTIDError",
]
