# ==================================================
# namespace_locator/locator.py
# ==================================================
"""Namespace base slot derivation.

    ns_loc(id) = H(encode32(H(id) - 1))

``H`` is an injected 256‑bit hash (Keccak‑256 by default) and the
subtraction wraps modulo 2**256.  Fields of a namespace live at
``ns_loc(id) + k``.
"""
import logging

from .const   import ALIGN_MASK
from .errors  import FormatError
from .hashing import HashFn, hash_word, keccak256
from .word    import Word

log = logging.getLogger(__name__)

_ASCII_WS = frozenset(b" \t\n\r\x0b\x0c")


# ── identifier handling ──────────────────────────────────────
def _id_bytes(identifier) -> bytes:
    if isinstance(identifier, str):
        return identifier.encode("utf-8")
    if isinstance(identifier, (bytes, bytearray, memoryview)):
        return bytes(identifier)
    raise TypeError(f"namespace id must be str or bytes, got {type(identifier).__name__}")


def validate_identifier(identifier) -> bytes:
    """Return the id as bytes, or raise FormatError if it holds whitespace."""
    raw = _id_bytes(identifier)
    if any(b in _ASCII_WS for b in raw):
        raise FormatError(raw, "contains whitespace")
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise FormatError(raw, f"not valid UTF-8 ({e.reason})") from e
    if any(ch.isspace() for ch in text):
        raise FormatError(raw, "contains whitespace")
    return raw


# ── derivation ───────────────────────────────────────────────
def ns_loc(identifier, hash_fn: HashFn = keccak256) -> Word:
    raw = _id_bytes(identifier)
    x   = hash_word(hash_fn, raw) - 1              # wraps to 2**256‑1 when H(id) == 0
    return hash_word(hash_fn, x.to_bytes())


def ns_loc_strict(identifier, hash_fn: HashFn = keccak256) -> Word:
    try:
        raw = validate_identifier(identifier)
    except FormatError as e:
        log.debug("rejected namespace id %r: %s", e.identifier, e.reason)
        raise
    return ns_loc(raw, hash_fn)


def aligned_slot(slot) -> Word:
    """Clear the low byte so the namespace starts on a 256‑slot boundary."""
    return Word(slot) & ~Word(ALIGN_MASK)


def erc7201_slot(identifier, hash_fn: HashFn = keccak256) -> Word:
    return aligned_slot(ns_loc(identifier, hash_fn))


def field_slot(base, k: int) -> Word:
    if not isinstance(k, int) or isinstance(k, bool):
        raise TypeError(f"field offset must be an int, got {type(k).__name__}")
    if k < 0:
        raise ValueError(f"field offset must be non‑negative, got {k}")
    return Word(base) + k


# ── object form with an injected primitive ───────────────────
class Locator:
    """Locator bound to one hash primitive.

    With ``memoize=True`` results are kept in a plain id → slot map.  The
    derivation is pure so entries never go stale and concurrent writers
    can only store the same value.
    """
    def __init__(self, hash_fn: HashFn = keccak256, memoize: bool = False):
        self.hash_fn = hash_fn
        self._memo   = {} if memoize else None

    def locate(self, identifier) -> Word:
        raw = _id_bytes(identifier)
        if self._memo is None:
            return ns_loc(raw, self.hash_fn)
        slot = self._memo.get(raw)
        if slot is None:
            slot = self._memo[raw] = ns_loc(raw, self.hash_fn)
        return slot

    def locate_strict(self, identifier) -> Word:
        return self.locate(validate_identifier(identifier))

    def locate_aligned(self, identifier) -> Word:
        return aligned_slot(self.locate(identifier))

    def field(self, identifier, k: int) -> Word:
        return field_slot(self.locate(identifier), k)

    def verify(self, claimed, identifier, aligned: bool = False) -> bool:
        claimed = Word.coerce(claimed)
        slot    = self.locate_aligned(identifier) if aligned else self.locate(identifier)
        if claimed != slot:
            log.debug("slot mismatch for %r: claimed %s, derived %s",
                      identifier, claimed.hex(), slot.hex())
            return False
        return True

    def __len__(self):
        return len(self._memo) if self._memo is not None else 0
