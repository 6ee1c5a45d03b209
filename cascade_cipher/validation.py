"""
Input validation shared by both cipher directions.

Keys must be at least three uppercase letters; text may only hold uppercase
letters and spaces. Callers are expected to upper-case input themselves.
"""

import re

from .errors import ErrorKind, ValidationError

MIN_KEY_LENGTH = 3

_KEY_RE  = re.compile(r"[A-Z]+")
_TEXT_RE = re.compile(r"[A-Z ]*")


def validate(text: str, key: str) -> None:
    """Raise ValidationError on the first violated constraint."""
    if not key or not _KEY_RE.fullmatch(key):
        raise ValidationError(ErrorKind.INVALID_KEY_FORMAT,
                              "Key must contain only uppercase letters A-Z")
    if len(key) < MIN_KEY_LENGTH:
        raise ValidationError(ErrorKind.INVALID_KEY_LENGTH,
                              f"Key must be at least {MIN_KEY_LENGTH} characters long")
    if not _TEXT_RE.fullmatch(text):
        raise ValidationError(ErrorKind.INVALID_TEXT_FORMAT,
                              "Text must contain only uppercase letters A-Z and spaces")
