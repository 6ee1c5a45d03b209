"""
Key tables
==========
A key table ranks every letter A-Z with a distinct number 1..26.

Key letters come first, in order of first appearance; the rest of the
alphabet follows in A-Z order. With key "KOD":

    K=1  O=2  D=3  A=4  B=5  C=6  E=7 ... Z=26

Both tables are fixed 26-slot tuples: KeyTable is indexed by letter offset
(A=0), ReverseKeyTable by rank - 1.
"""

from typing import Tuple

from .errors import DefensiveInvariantError, ErrorKind

ALPHA = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
SIZE  = len(ALPHA)


class KeyTable:
    """Letter -> rank (1..26)."""

    __slots__ = ("_ranks",)

    def __init__(self, ranks: Tuple[int, ...]):
        if sorted(ranks) != list(range(1, SIZE + 1)):
            raise DefensiveInvariantError(
                ErrorKind.UNKNOWN_CHARACTER,
                "Key table is not a bijection over A-Z")
        self._ranks = tuple(ranks)

    def rank(self, letter: str) -> int:
        offset = ALPHA.find(letter) if len(letter) == 1 else -1
        if offset < 0:
            raise DefensiveInvariantError(ErrorKind.UNKNOWN_CHARACTER,
                                          f"Invalid character: {letter!r}")
        return self._ranks[offset]

    def items(self):
        return zip(ALPHA, self._ranks)

    def __len__(self):
        return SIZE

    def __eq__(self, other):
        return isinstance(other, KeyTable) and self._ranks == other._ranks

    def __hash__(self):
        return hash(self._ranks)

    def __repr__(self):
        return "KeyTable(" + " ".join(f"{c}={r}" for c, r in self.items()) + ")"


class ReverseKeyTable:
    """Rank (1..26) -> letter."""

    __slots__ = ("_letters",)

    def __init__(self, letters: Tuple[str, ...]):
        self._letters = tuple(letters)

    def letter(self, rank: int) -> str:
        if not 1 <= rank <= SIZE:
            raise DefensiveInvariantError(ErrorKind.UNDECODABLE_CHARACTER,
                                          f"No letter has rank {rank}")
        return self._letters[rank - 1]

    def __len__(self):
        return SIZE

    def __repr__(self):
        return "ReverseKeyTable(" + "".join(self._letters) + ")"


def build_key_table(key: str) -> KeyTable:
    """Rank key letters first, then the unused alphabet in A-Z order."""
    ranks     = [0] * SIZE
    next_rank = 1
    for letter in key + ALPHA:
        offset = ALPHA.find(letter)
        if offset < 0:
            raise DefensiveInvariantError(ErrorKind.UNKNOWN_CHARACTER,
                                          f"Invalid key character: {letter!r}")
        if ranks[offset] == 0:
            ranks[offset] = next_rank
            next_rank += 1
    return KeyTable(tuple(ranks))


def build_reverse_key_table(table: KeyTable) -> ReverseKeyTable:
    letters = [""] * SIZE
    for letter, rank in table.items():
        letters[rank - 1] = letter
    return ReverseKeyTable(tuple(letters))
