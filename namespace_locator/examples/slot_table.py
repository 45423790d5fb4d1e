# ==================================================
# examples/slot_table.py
# ==================================================
import argparse, sys

from namespace_locator import FormatError, Locator, Word, field_slot
from namespace_locator.const import TAG_PREFIX


def strip_tag(arg: str) -> str:
    return arg[len(TAG_PREFIX):] if arg.startswith(TAG_PREFIX) else arg


def main(argv=None) -> int:
    p = argparse.ArgumentParser(description="print namespace base slots")
    p.add_argument("ids", nargs="+", help="namespace ids, bare or tagged erc7201:<id>")
    p.add_argument("--strict",  action="store_true", help="reject ids holding whitespace")
    p.add_argument("--aligned", action="store_true", help="clear the low byte of each slot")
    p.add_argument("--fields",  type=int, default=0, metavar="N",
                   help="also print the first N field slots")
    p.add_argument("--verify",  metavar="SLOT",
                   help="compare SLOT against every id; exit 1 on mismatch")
    args = p.parse_args(argv)

    claimed = None
    if args.verify is not None:
        try:
            claimed = Word.from_hex(args.verify)
        except ValueError as e:
            p.error(str(e))

    loc    = Locator(memoize=True)
    status = 0
    for ident in map(strip_tag, args.ids):
        try:
            if args.strict:
                loc.locate_strict(ident)
        except FormatError as e:
            print(f"{ident}\terror: {e.reason}", file=sys.stderr)
            status = 2
            continue
        slot = loc.locate_aligned(ident) if args.aligned else loc.locate(ident)
        if claimed is not None:
            ok = loc.verify(claimed, ident, aligned=args.aligned)
            print(f"{ident}\t{slot.hex()}\t{'match' if ok else 'MISMATCH'}")
            status = status or (0 if ok else 1)
            continue
        print(f"{ident}\t{slot.hex()}")
        for k in range(args.fields):
            print(f"  +{k}\t{field_slot(slot, k).hex()}")
    return status


if __name__ == "__main__":
    sys.exit(main())
