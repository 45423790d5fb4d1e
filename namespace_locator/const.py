# ==================================================
# namespace_locator/const.py
# ==================================================
WORD_BITS  = 256
WORD_SIZE  = 32                   # bytes
WORD_MOD   = 1 << WORD_BITS
WORD_MAX   = WORD_MOD - 1
WORD_FMT   = ">4Q"                # four big‑endian u64 limbs, most significant first
LIMB_BITS  = 64
LIMB_MASK  = (1 << LIMB_BITS) - 1

ALIGN_MASK = 0xFF                 # low byte cleared by the aligned variant
TAG_PREFIX = "erc7201:"           # source annotation tag

# allocator model defaults
SEQUENTIAL_SLOTS = 10_000
MODEL_SPAN       = 1 << 64        # slots covered past every hashed anchor
MODEL_DEPTH      = 2
