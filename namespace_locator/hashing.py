# ==================================================
# namespace_locator/hashing.py
# ==================================================
from typing import Callable

from Crypto.Hash import keccak

from .const  import WORD_SIZE
from .errors import HashUnavailable
from .word   import Word

HashFn = Callable[[bytes], bytes]          # any 256‑bit hash over byte strings


def keccak256(data: bytes) -> bytes:
    """Keccak‑256 with the original padding (not NIST SHA3‑256)."""
    return keccak.new(digest_bits=256, data=bytes(data)).digest()


def hash_word(hash_fn: HashFn, data: bytes) -> Word:
    """Run the primitive and read its digest as a Word."""
    try:
        digest = hash_fn(data)
    except HashUnavailable:
        raise
    except Exception as e:
        raise HashUnavailable(f"hash primitive failed: {e}") from e
    if not isinstance(digest, (bytes, bytearray, memoryview)) or len(digest) != WORD_SIZE:
        raise HashUnavailable(f"hash primitive must return {WORD_SIZE} bytes, "
                              f"got {digest!r:.80}")
    return Word.from_bytes(digest)
