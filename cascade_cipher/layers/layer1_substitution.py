"""
Layer 1 — SUBSTITUTION: Keyed Cascade
=====================================
A keyed additive substitution where each letter is shifted by the
CIPHER value of the letter before it. The first letter is shifted by
the caller's start number.

    cipher[i] = ((rank(plain[i]) + cipher[i-1] - 1) mod 26) + 1
    cipher[-1] = start_number

Values are 1-indexed (A=1 ... Z=26), so the wrap goes 26 → 1 and never
yields 0. Because the chain runs on ciphertext values on both sides,
decoding only needs the previous ciphertext letter, never the plaintext.

Not secure. Frequency analysis breaks it in minutes.
"""

import logging

from ..keytable import ALPHA, SIZE, build_key_table, build_reverse_key_table
from ..validation import validate
from . import layer2_groups

logger = logging.getLogger(__name__)


def _wrap(value: int) -> int:
    """Fold any integer into 1..26."""
    return ((value - 1) % SIZE) + 1


def encode(message: str, key: str, start_number: int,
           reverse_groups: bool = False) -> str:
    """Encrypt `message`. Spaces are dropped."""
    validate(message, key)
    table = build_key_table(key)
    clean = message.replace(" ", "")

    result   = []
    previous = start_number
    for letter in clean:
        cipher_value = _wrap(table.rank(letter) + previous)
        result.append(ALPHA[cipher_value - 1])
        previous = cipher_value

    ciphertext = "".join(result)
    if reverse_groups:
        ciphertext = layer2_groups.apply_reversal(ciphertext)
    logger.debug(f"Encoded {len(clean)} letters -> {len(ciphertext)} "
                 f"(reverse_groups={reverse_groups})")
    return ciphertext


def decode(ciphertext: str, key: str, start_number: int,
           reverse_groups: bool = False) -> str:
    """
    Decrypt `ciphertext` produced by encode() with the same parameters.

    Trailing X letters are always removed from the result, so a plaintext
    that really ended in X comes back without it.
    """
    validate(ciphertext, key)
    table   = build_key_table(key)
    reverse = build_reverse_key_table(table)
    clean   = ciphertext.replace(" ", "")

    if reverse_groups:
        clean = layer2_groups.undo_reversal(clean).rstrip(layer2_groups.PAD_CHAR)

    result   = []
    previous = start_number
    for letter in clean:
        cipher_value = ALPHA.index(letter) + 1
        result.append(reverse.letter(_wrap(cipher_value - previous)))
        previous = cipher_value

    plaintext = "".join(result).rstrip(layer2_groups.PAD_CHAR)
    logger.debug(f"Decoded {len(clean)} letters -> {len(plaintext)} "
                 f"(reverse_groups={reverse_groups})")
    return plaintext
