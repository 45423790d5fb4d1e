from .errors  import FormatError, HashUnavailable, LocatorError
from .hashing import HashFn, hash_word, keccak256
from .locator import (Locator, aligned_slot, erc7201_slot, field_slot,
                      ns_loc, ns_loc_strict, validate_identifier)
from .verify  import AllocatorModel, collision_model_check, verify
from .word    import Word

__all__ = [
    "AllocatorModel", "FormatError", "HashFn", "HashUnavailable", "Locator",
    "LocatorError", "Word", "aligned_slot", "collision_model_check",
    "erc7201_slot", "field_slot", "hash_word", "keccak256", "ns_loc",
    "ns_loc_strict", "validate_identifier", "verify",
]
