from typing import Dict, Iterable, Iterator, List, Tuple, Type

from ternary.trit import Trit, add_trits, encode_trit, negate_trit, trit_from_encoded


class TernaryZeroDivisionError(ZeroDivisionError):
    """Raised when a number is divided by zero. No quotient is ever produced."""
    def __init__(self):
        super().__init__("Attempt to divide by zero")


_number_types: Dict[int, Type['AbstractNumber']] = {}


class AbstractNumber:
    """
    Fixed-width balanced ternary integer.

    The width is a class attribute, so every width is its own type and binary
    operators refuse operands of another width. Trits are stored most
    significant first. Results that do not fit the width keep only the least
    significant trits; overflow is never reported by the plain operators.
    """
    length = 0

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.length > 0:
            _number_types.setdefault(cls.length, cls)

    def __init__(self, encoded: str = ""):
        if self.length <= 0:
            raise TypeError(f"{type(self).__name__} has no width, use number_type(n)")
        self.trits: List[Trit] = [Trit.ZERO] * self.length
        kept = encoded[-self.length:] if encoded else ""
        offset = self.length - len(kept)
        for i, ch in enumerate(kept):
            self.trits[offset + i] = trit_from_encoded(ch)

    @classmethod
    def zero(cls):
        return cls()

    @classmethod
    def one(cls):
        return cls('+')

    @classmethod
    def from_trits(cls, trits: Iterable[Trit]):
        trits = list(trits)
        if len(trits) != cls.length:
            raise ValueError(f"{cls.__name__} needs {cls.length} trits, got {len(trits)}")
        res = cls()
        # Trit() accepts members and their values -1, 0, 1; anything else is a ValueError.
        res.trits = [Trit(t) for t in trits]
        return res

    @classmethod
    def from_int(cls, value: int):
        """Keeps the `length` least significant trits, so out of range values wrap."""
        digits = []
        for _ in range(cls.length):
            rem = value % 3
            value //= 3
            if rem == 2:
                rem = -1
                value += 1
            digits.append(Trit(rem))
        return cls.from_trits(digits[::-1])

    def _blank(self):
        return type(self)()

    def _same_width(self, other) -> bool:
        return isinstance(other, AbstractNumber) and other.length == self.length

    def _check_width(self, other):
        if not self._same_width(other):
            raise TypeError(f"Expected a {self.length}-trit number, got {other!r}")

    def copy(self):
        return type(self).from_trits(self.trits)

    def resize(self, width: int) -> 'AbstractNumber':
        """Copy into another width. Growing pads with zero trits, shrinking drops the top trits."""
        res = number_type(width)()
        kept = min(width, self.length)
        res.trits[width - kept:] = self.trits[self.length - kept:]
        return res

    def encode(self) -> str:
        return "".join(encode_trit(t) for t in self.trits)

    def __len__(self):
        return self.length

    def __getitem__(self, item):
        return self.trits[item]

    def __iter__(self) -> Iterator[Trit]:
        return iter(self.trits)

    def compare(self, other) -> int:
        self._check_width(other)
        for mine, theirs in zip(self.trits, other.trits):
            if mine < theirs:
                return -1
            elif mine > theirs:
                return 1
        return 0

    def __eq__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.trits == other.trits

    def __lt__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.compare(other) >= 0

    def sign(self) -> Trit:
        return next((t for t in self.trits if t != Trit.ZERO), Trit.ZERO)

    def __bool__(self):
        return self.sign() != Trit.ZERO

    def __neg__(self):
        return type(self).from_trits(negate_trit(t) for t in self.trits)

    def __pos__(self):
        return self.copy()

    def __abs__(self):
        return -self if self.sign() == Trit.NEG else self.copy()

    def add(self, other, carry: Trit = Trit.ZERO) -> Tuple['AbstractNumber', Trit]:
        """Sum with the carry trit that fell off the most significant position."""
        self._check_width(other)
        res = self._blank()
        for i in range(self.length - 1, -1, -1):
            s = add_trits(self.trits[i], other.trits[i], carry)
            res.trits[i] = s.result
            carry = s.carry
        return res, carry

    def __add__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self.add(other)[0]

    def __iadd__(self, other):
        if not self._same_width(other):
            return NotImplemented
        self.trits[:] = self.add(other)[0].trits
        return self

    def __sub__(self, other):
        if not self._same_width(other):
            return NotImplemented
        return self + (-other)

    def __isub__(self, other):
        if not self._same_width(other):
            return NotImplemented
        self.trits[:] = (self - other).trits
        return self

    def __mul__(self, other):
        if not self._same_width(other):
            return NotImplemented
        res = self._blank()
        for t in self.trits:
            res <<= 1
            if t == Trit.POS:
                res += other
            elif t == Trit.NEG:
                res -= other
        return res

    def __imul__(self, other):
        if not self._same_width(other):
            return NotImplemented
        self.trits[:] = (self * other).trits
        return self

    def __lshift__(self, positions):
        if not isinstance(positions, int):
            return NotImplemented
        if positions < 0:
            raise ValueError("negative shift count")
        res = self._blank()
        if positions < self.length:
            res.trits[:self.length - positions] = self.trits[positions:]
        return res

    def __ilshift__(self, positions):
        if not isinstance(positions, int):
            return NotImplemented
        if positions < 0:
            raise ValueError("negative shift count")
        positions = min(positions, self.length)
        self.trits[:] = self.trits[positions:] + self.trits[:positions]
        for i in range(self.length - positions, self.length):
            self.trits[i] = Trit.ZERO
        return self

    def _unit(self, trit: Trit):
        res = self._blank()
        res.trits[-1] = trit
        return res

    def increment(self):
        self += self._unit(Trit.POS)
        return self

    def decrement(self):
        self += self._unit(Trit.NEG)
        return self

    def post_increment(self):
        previous = self.copy()
        self.increment()
        return previous

    def post_decrement(self):
        previous = self.copy()
        self.decrement()
        return previous

    def __divmod__(self, other):
        """
        Quotient truncated toward zero and the remainder, which has the sign of
        the dividend, so that ``self == q * other + r`` and ``|r| < |other|``.
        """
        if not self._same_width(other):
            return NotImplemented
        if not other:
            raise TernaryZeroDivisionError()
        # Two spare trits keep every shifted divisor and partial remainder in range.
        width = self.length + 2
        dividend = self.resize(width)
        divisor = other.resize(width)
        leading = next(i for i, t in enumerate(divisor.trits) if t != Trit.ZERO)
        quotient = number_type(width)()
        remainder = dividend.copy()
        for shift in range(leading - 1, -1, -1):
            step = divisor << shift
            candidates = [
                (Trit.ZERO, remainder),
                (Trit.POS, remainder - step),
                (Trit.NEG, remainder + step),
            ]
            digit, remainder = min(candidates, key=lambda c: abs(c[1]))
            quotient.trits[width - 1 - shift] = digit
        # |remainder| <= |divisor| / 2 here; move it onto the dividend's side of zero.
        if remainder and remainder.sign() != dividend.sign():
            if remainder.sign() == divisor.sign():
                quotient.increment()
                remainder -= divisor
            else:
                quotient.decrement()
                remainder += divisor
        return quotient.resize(self.length), remainder.resize(self.length)

    def __truediv__(self, other):
        res = self.__divmod__(other)
        if res is NotImplemented:
            return res
        return res[0]

    # Truncates toward zero like __truediv__, not floor division.
    __floordiv__ = __truediv__

    def __mod__(self, other):
        res = self.__divmod__(other)
        if res is NotImplemented:
            return res
        return res[1]

    def __itruediv__(self, other):
        if not self._same_width(other):
            return NotImplemented
        self.trits[:] = (self / other).trits
        return self

    __ifloordiv__ = __itruediv__

    def overflowing_add(self, other) -> Tuple['AbstractNumber', bool]:
        self._check_width(other)
        res, carry = self.add(other)
        return res, carry != Trit.ZERO

    def overflowing_sub(self, other) -> Tuple['AbstractNumber', bool]:
        self._check_width(other)
        res, carry = self.add(-other)
        return res, carry != Trit.ZERO

    def overflowing_mul(self, other) -> Tuple['AbstractNumber', bool]:
        self._check_width(other)
        exact = self.resize(2 * self.length) * other.resize(2 * self.length)
        res = exact.resize(self.length)
        return res, res.resize(2 * self.length) != exact

    def overflowing_lshift(self, positions: int) -> Tuple['AbstractNumber', bool]:
        if not isinstance(positions, int):
            raise TypeError(f"Shift count must be an int, got {positions!r}")
        res = self << positions
        dropped = self.trits[:min(positions, self.length)]
        return res, any(t != Trit.ZERO for t in dropped)

    def to_int(self) -> int:
        res = 0
        weight = 1
        for t in reversed(self.trits):
            if t == Trit.POS:
                res += weight
            elif t == Trit.NEG:
                res -= weight
            weight *= 3
        return res

    def to_int32(self) -> int:
        """The value as a signed 32-bit integer would hold it."""
        res = self.to_int() & 0xFFFFFFFF
        if res >= 1 << 31:
            res -= 1 << 32
        return res

    def __int__(self):
        return self.to_int()

    def __str__(self):
        # Exact value rather than the 32-bit view; to_int32() gives the wrapped one.
        return f"{self.encode()} ({self.to_int()})"

    def __repr__(self):
        return f"{type(self).__name__}('{self.encode()}')"


def number_type(width: int) -> Type[AbstractNumber]:
    """The number class of the given width, created on first use."""
    if width not in _number_types:
        if width <= 0:
            raise ValueError(f"Width must be positive, got {width}")
        type(f"Number{width}", (AbstractNumber,), {'length': width, '__module__': __name__})
    return _number_types[width]


class Number8(AbstractNumber):
    length = 8


class Number16(AbstractNumber):
    length = 16


class Number32(AbstractNumber):
    length = 32
