# ==================================================
# namespace_locator/verify.py
# ==================================================
"""Slot verification and a finite model of the sequential allocator.

The model covers the three ways the conventional layout addresses
storage:

* top‑level variables take slots ``0, 1, 2, …``;
* elements of a dynamic array stored at ``p`` start at ``H(encode32(p))``;
* the value for ``key`` in a mapping stored at ``p`` starts at
  ``H(key ++ encode32(p))``.

Any slot ``anchor + j`` reached that way can itself hold a nested array or
mapping, so the model recurses ``depth`` times over the sampled offsets.
Each hashed anchor is treated as the start of a run of ``span`` slots.
"""
import logging
from functools import lru_cache
from typing import Iterable, List, Optional

import numpy as np

from .const   import MODEL_DEPTH, MODEL_SPAN, SEQUENTIAL_SLOTS, WORD_SIZE
from .hashing import HashFn, hash_word, keccak256
from .locator import Locator
from .word    import Word

log = logging.getLogger(__name__)


def verify(claimed, identifier, hash_fn: HashFn = keccak256, aligned: bool = False) -> bool:
    """True iff ``claimed`` is the base slot derived from ``identifier``."""
    return Locator(hash_fn).verify(claimed, identifier, aligned=aligned)


def _key_bytes(key) -> bytes:
    # value types are padded to a word, byte strings are hashed as they are
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray)):
        return bytes(key)
    return Word(int(key)).to_bytes()


def _overlaps(start: Word, size: int, other: Word, other_size: int) -> bool:
    # two runs on the 2**256 ring intersect iff one start lies inside the other run
    return int(start - other) < other_size or int(other - start) < size


# ── allocator model ──────────────────────────────────────────
class AllocatorModel:
    def __init__(self,
                 hash_fn: HashFn = keccak256,
                 sequential_slots: int = SEQUENTIAL_SLOTS,
                 containers: Optional[Iterable] = None,
                 keys: Iterable = (),
                 offsets: Iterable[int] = (0,),
                 depth: int = MODEL_DEPTH,
                 span: int = MODEL_SPAN):
        if sequential_slots < 0 or span < 1 or depth < 1:
            raise ValueError("sequential_slots >= 0, span >= 1 and depth >= 1 required")
        self.hash_fn          = hash_fn
        self.sequential_slots = sequential_slots
        self.containers       = [Word(int(c)) for c in
                                 (containers if containers is not None
                                  else range(min(sequential_slots, 16)))]
        self.keys             = [_key_bytes(k) for k in keys]
        self.offsets          = sorted({int(j) for j in offsets})
        if any(j < 0 for j in self.offsets):
            raise ValueError("offsets must be non‑negative")
        self.depth            = depth
        self.span             = span
        self._anchors: Optional[List[Word]] = None

    @classmethod
    def sampled(cls, rng: np.random.Generator,
                hash_fn: HashFn = keccak256,
                n_containers: int = 8,
                n_keys: int = 4,
                n_offsets: int = 3,
                **kw) -> "AllocatorModel":
        """Model with random container locations, mapping keys and offsets."""
        seq        = kw.get("sequential_slots", SEQUENTIAL_SLOTS)
        containers = list(range(min(seq, n_containers)))
        containers += [int.from_bytes(rng.bytes(WORD_SIZE), "big") for _ in range(n_containers)]
        keys       = [int(k) for k in rng.integers(0, 2**63 - 1, size=n_keys)]
        keys      += [rng.bytes(int(n)) for n in rng.integers(1, 64, size=n_keys)]
        offsets    = [0] + [int(j) for j in rng.integers(1, 2**32, size=n_offsets)]
        return cls(hash_fn, containers=containers, keys=keys, offsets=offsets, **kw)

    # ------------------------------------------------------------------
    def anchors(self) -> List[Word]:
        """Every hashed anchor the modelled layout can start a run at."""
        if self._anchors is None:
            anchors, level = [], self.containers
            for _ in range(self.depth):
                nxt = []
                for p in level:
                    enc   = p.to_bytes()
                    found = [hash_word(self.hash_fn, enc)]
                    found += [hash_word(self.hash_fn, k + enc) for k in self.keys]
                    anchors.extend(found)
                    nxt.extend(a + j for a in found for j in self.offsets)
                level = nxt
            self._anchors = anchors
            log.debug("allocator model: %d anchors over depth %d", len(anchors), self.depth)
        return self._anchors

    def collision_model_check(self, candidate, namespace_size: int = 1) -> bool:
        """True iff ``[candidate, candidate + namespace_size)`` avoids every modelled slot."""
        if namespace_size < 1:
            raise ValueError(f"namespace_size must be positive, got {namespace_size}")
        start = Word.coerce(candidate)
        if self.sequential_slots and _overlaps(start, namespace_size, Word(0), self.sequential_slots):
            return False
        return not any(_overlaps(start, namespace_size, a, self.span) for a in self.anchors())

    def produces(self, slot) -> bool:
        return not self.collision_model_check(slot, 1)


@lru_cache(maxsize=None)
def _default_model() -> AllocatorModel:
    return AllocatorModel(keys=(0, 1), offsets=(0, 1))


def collision_model_check(candidate_slot, namespace_size: int = 1,
                          model: Optional[AllocatorModel] = None) -> bool:
    return (model or _default_model()).collision_model_check(candidate_slot, namespace_size)
