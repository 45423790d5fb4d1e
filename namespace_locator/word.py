# ==================================================
# namespace_locator/word.py
# ==================================================
import struct
from functools import total_ordering
from string import hexdigits

from .const import WORD_FMT, WORD_MOD, WORD_SIZE, LIMB_BITS, LIMB_MASK

_WORD = struct.Struct(WORD_FMT)


@total_ordering
class Word:
    """Unsigned 256‑bit integer with modulo 2**256 arithmetic.

    Every operation reduces its result back into ``[0, 2**256)`` so a
    subtraction below zero wraps to the top of the range instead of
    producing a negative int.
    """
    __slots__ = ("_v",)

    def __init__(self, value=0):
        if isinstance(value, Word):
            value = value._v
        elif not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"Word needs an int, got {type(value).__name__}")
        self._v = value % WORD_MOD

    # -- fixed‑width encoding ----------------------------------------------
    def to_bytes(self) -> bytes:
        v = self._v
        return _WORD.pack(v >> 3 * LIMB_BITS,
                          (v >> 2 * LIMB_BITS) & LIMB_MASK,
                          (v >> LIMB_BITS) & LIMB_MASK,
                          v & LIMB_MASK)

    @classmethod
    def from_bytes(cls, data) -> "Word":
        data = bytes(data)
        if len(data) != WORD_SIZE:
            raise ValueError(f"Word needs {WORD_SIZE} bytes, got {len(data)}")
        v = 0
        for limb in _WORD.unpack(data):
            v = (v << LIMB_BITS) | limb
        return cls(v)

    # -- hex rendering -----------------------------------------------------
    def hex(self) -> str:
        return f"0x{self._v:0{2 * WORD_SIZE}x}"

    @classmethod
    def from_hex(cls, text: str) -> "Word":
        if not isinstance(text, str):
            raise TypeError("hex slot must be a str")
        digits = text.strip()
        if digits[:2] in ("0x", "0X"):
            digits = digits[2:]
        if not 0 < len(digits) <= 2 * WORD_SIZE or not all(c in hexdigits for c in digits):
            raise ValueError(f"not a 256‑bit hex value: {text!r}")
        return cls(int(digits, 16))

    @classmethod
    def coerce(cls, value) -> "Word":
        """Accept a Word, an in‑range int or a hex string."""
        if isinstance(value, str):
            return cls.from_hex(value)
        if isinstance(value, int) and not isinstance(value, bool) and not 0 <= value < WORD_MOD:
            raise ValueError(f"slot out of 256‑bit range: {value}")
        return cls(value)

    # -- arithmetic --------------------------------------------------------
    def __add__(self, other):
        if isinstance(other, (Word, int)) and not isinstance(other, bool):
            return Word(self._v + int(other))
        return NotImplemented
    __radd__ = __add__

    def __sub__(self, other):
        if isinstance(other, (Word, int)) and not isinstance(other, bool):
            return Word(self._v - int(other))
        return NotImplemented

    def __rsub__(self, other):
        if isinstance(other, int) and not isinstance(other, bool):
            return Word(other - self._v)
        return NotImplemented

    def __and__(self, other):
        if isinstance(other, (Word, int)) and not isinstance(other, bool):
            return Word(self._v & int(other))
        return NotImplemented
    __rand__ = __and__

    def __invert__(self):
        return Word(~self._v)

    # -- int protocol ------------------------------------------------------
    def __int__(self):   return self._v
    def __index__(self): return self._v
    def __hash__(self):  return hash(self._v)

    def __eq__(self, other):
        if isinstance(other, Word):
            return self._v == other._v
        if isinstance(other, int) and not isinstance(other, bool):
            return self._v == other
        return NotImplemented

    def __lt__(self, other):
        if isinstance(other, (Word, int)) and not isinstance(other, bool):
            return self._v < int(other)
        return NotImplemented

    def __repr__(self): return f"Word({self.hex()})"
    __str__ = hex
