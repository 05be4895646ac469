from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Trit(Enum):
    NEG = -1
    ZERO = 0
    POS = 1

    def __int__(self):
        return self.value

    def __lt__(self, other):
        if not isinstance(other, Trit):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other):
        if not isinstance(other, Trit):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other):
        if not isinstance(other, Trit):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other):
        if not isinstance(other, Trit):
            return NotImplemented
        return self.value >= other.value

    def __neg__(self):
        return negate_trit(self)

    def __str__(self):
        return encode_trit(self)


@dataclass(frozen=True)
class SumResult:
    result: Trit
    carry: Trit


_ENCODING = {Trit.POS: '+', Trit.NEG: '-', Trit.ZERO: '0'}


def trit_from_encoded(encoded: str) -> Trit:
    if encoded == '+':
        return Trit.POS
    elif encoded == '-':
        return Trit.NEG
    return Trit.ZERO


def encode_trit(trit: Trit) -> str:
    return _ENCODING[trit]


def negate_trit(trit: Trit) -> Trit:
    if trit == Trit.POS:
        return Trit.NEG
    elif trit == Trit.NEG:
        return Trit.POS
    return Trit.ZERO


def _half_add(t1: Trit, t2: Trit) -> SumResult:
    if t1 == Trit.ZERO:
        return SumResult(t2, Trit.ZERO)
    elif t2 == Trit.ZERO:
        return SumResult(t1, Trit.ZERO)
    elif t1 == negate_trit(t2):
        return SumResult(Trit.ZERO, Trit.ZERO)
    # Two equal non-zero trits: 1 + 1 = 3 - 1, -1 + -1 = -3 + 1.
    return SumResult(negate_trit(t1), t1)


def add_trits(t1: Trit, t2: Trit, carry: Optional[Trit] = None) -> SumResult:
    """
    Half-adder when called with two trits, full-adder with three.

    For every input, ``3 * carry + result`` equals the sum of the inputs.
    """
    if carry is None:
        return _half_add(t1, t2)

    if t1 == Trit.ZERO:
        return _half_add(t2, carry)
    elif t2 == Trit.ZERO:
        return _half_add(t1, carry)
    elif carry == Trit.ZERO:
        return _half_add(t1, t2)

    # All three are non-zero; a cancelling pair leaves the third trit.
    if negate_trit(t1) == t2:
        return SumResult(carry, Trit.ZERO)
    elif negate_trit(t1) == carry:
        return SumResult(t2, Trit.ZERO)
    elif negate_trit(t2) == carry:
        return SumResult(t1, Trit.ZERO)
    return SumResult(Trit.ZERO, t1)
