"""
Layer 2 — OBFUSCATION: Five-letter Block Reversal
=================================================
Classic telegraph-style grouping, with a twist: every block of five
letters is written backwards.

    FAQU  →  FAQUX  →  XUQAF
             (pad)     (reverse each block)

Padding uses "X" and is only ever added on the way in. undo_reversal()
does not strip it; the decoder removes trailing padding itself.
"""

GROUP_SIZE = 5
PAD_CHAR   = "X"


def _reverse_blocks(text: str) -> str:
    return "".join(text[i:i + GROUP_SIZE][::-1]
                   for i in range(0, len(text), GROUP_SIZE))


def apply_reversal(text: str) -> str:
    """Strip spaces, pad with X to a multiple of 5, reverse every block."""
    clean  = text.replace(" ", "")
    target = -(-len(clean) // GROUP_SIZE) * GROUP_SIZE
    return _reverse_blocks(clean.ljust(target, PAD_CHAR))


def undo_reversal(text: str) -> str:
    """
    Reverse every block of 5 back into place.
    A short final block (foreign or truncated ciphertext) is reversed as-is.
    """
    return _reverse_blocks(text)
