"""
Error taxonomy
==============
Every failure raised by the cascade cipher carries an ErrorKind, so callers
can branch on `err.kind` instead of matching message strings.

    ValidationError          — bad caller input, detected before any arithmetic
    DefensiveInvariantError  — a key table lookup failed; construction bug
    RequestError             — malformed cipher request / message payload
"""

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    INVALID_KEY_FORMAT    = "InvalidKeyFormat"
    INVALID_KEY_LENGTH    = "InvalidKeyLength"
    INVALID_TEXT_FORMAT   = "InvalidTextFormat"
    UNKNOWN_CHARACTER     = "UnknownCharacter"
    UNDECODABLE_CHARACTER = "UndecodableCharacter"
    INVALID_REQUEST       = "InvalidRequest"


class CipherError(Exception):
    """Base class for every cascade cipher failure."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind    = kind
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message, "kind": self.kind.value}


class ValidationError(CipherError, ValueError):
    pass


class DefensiveInvariantError(CipherError, RuntimeError):
    pass


class RequestError(CipherError, ValueError):
    """A request field is missing or has the wrong type."""

    def __init__(self, field: str, message: str,
                 kind: ErrorKind = ErrorKind.INVALID_REQUEST):
        super().__init__(kind, message)
        self.field: Optional[str] = field

    def to_dict(self) -> dict:
        body = super().to_dict()
        body["field"] = self.field
        return body
