"""
Cascade cipher — request boundary
=================================
CascadeCipher is the stateless entry point over both layers:

    encrypt:  validate → key table → cascade encode → (block reversal)
    decrypt:  validate → (undo block reversal) → key tables → cascade decode

run() takes a parsed CipherRequest and never raises for cipher failures;
it returns a CipherResult holding either the output or the error.
"""

import logging
from typing import Any, Mapping, NamedTuple, Optional

from .errors import CipherError, RequestError
from .layers import layer1_substitution

logger = logging.getLogger(__name__)

OPERATIONS = ("encrypt", "decrypt")


class CascadeCipher:
    """Cascade substitution with optional five-letter block reversal."""

    @staticmethod
    def encrypt(message: str, key: str, start_number: int,
                reverse_groups: bool = False) -> str:
        return layer1_substitution.encode(message, key, start_number, reverse_groups)

    @staticmethod
    def decrypt(ciphertext: str, key: str, start_number: int,
                reverse_groups: bool = False) -> str:
        return layer1_substitution.decode(ciphertext, key, start_number, reverse_groups)

    def __repr__(self):
        return "CascadeCipher()"


class CipherRequest(NamedTuple):
    text: str
    key: str
    start_number: int
    operation: str
    reverse_groups: bool = False

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CipherRequest":
        """
        Parse a JSON-style request:
            {"text", "key", "startNumber", "reverseGroups"?, "operation"}
        Raises RequestError naming the first bad field.
        """
        if not isinstance(payload, Mapping):
            raise RequestError("body", "Request body must be a JSON object")

        text = payload.get("text")
        if not isinstance(text, str) or not text:
            raise RequestError("text", "text must be a non-empty string")

        key = payload.get("key")
        if not isinstance(key, str):
            raise RequestError("key", "key must be a string")

        start_number = payload.get("startNumber")
        if isinstance(start_number, bool) or not isinstance(start_number, int):
            raise RequestError("startNumber", "startNumber must be an integer")

        reverse_groups = payload.get("reverseGroups", False)
        if not isinstance(reverse_groups, bool):
            raise RequestError("reverseGroups", "reverseGroups must be a boolean")

        operation = payload.get("operation")
        if operation not in OPERATIONS:
            raise RequestError("operation", "operation must be 'encrypt' or 'decrypt'")

        return cls(text=text, key=key, start_number=start_number,
                   operation=operation, reverse_groups=reverse_groups)


class CipherResult(NamedTuple):
    result: Optional[str] = None
    error: Optional[CipherError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        if self.error is not None:
            return self.error.to_dict()
        return {"result": self.result}


def run(request: CipherRequest) -> CipherResult:
    """Execute one cipher request; failures come back inside the result."""
    if request.operation == "encrypt":
        op = CascadeCipher.encrypt
    elif request.operation == "decrypt":
        op = CascadeCipher.decrypt
    else:
        return CipherResult(error=RequestError(
            "operation", "operation must be 'encrypt' or 'decrypt'"))
    try:
        output = op(request.text, request.key, request.start_number,
                    request.reverse_groups)
    except CipherError as e:
        logger.info(f"Cipher {request.operation} rejected: {e.kind.value}")
        return CipherResult(error=e)
    return CipherResult(result=output)
