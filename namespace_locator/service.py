#!/usr/bin/env python3
"""
Namespace slot service
─────────────────────────────────────────────────────────────
* GET  /slot/<id>   one base slot       (?strict=1 &aligned=1)
* POST /slots       batch of ids        {"ids": [...], "strict", "aligned"}
* POST /verify      claimed slot check  {"id", "slot", "aligned"}
* POST /field       k‑th field slot     {"id", "offset"}
"""
from __future__ import annotations
import logging, os

from flask import Flask, request, jsonify

from .errors        import FormatError, HashUnavailable
from .locator       import Locator, aligned_slot
from .observability import setup_logging

# ───────────────────────── configuration ──────────────────────
HOST       = os.getenv("HOST",       "0.0.0.0")
PORT       = int(os.getenv("PORT",       "5000"))
LOG_LEVEL  = os.getenv("LOG_LEVEL",  "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
MAX_BATCH  = int(os.getenv("MAX_BATCH",  "1000"))
MEMOIZE    = os.getenv("NS_MEMOIZE", "1") not in ("0", "false", "no")

log = logging.getLogger(__name__)

app     = Flask(__name__)
locator = Locator(memoize=MEMOIZE)

# ───────────────────────── helpers ────────────────────────────
def flag(value) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes", "on")
    return bool(value)

def body() -> dict:
    data = request.get_json(force=True, silent=True)
    if not isinstance(data, dict):
        raise ValueError("request body must be a JSON object")
    return data

def slot_of(identifier, strict: bool, aligned: bool) -> dict:
    slot = locator.locate_strict(identifier) if strict else locator.locate(identifier)
    if aligned:
        slot = aligned_slot(slot)
    return {"id": identifier, "slot": slot.hex(), "aligned": aligned}

# ───────────────────────── error mapping ──────────────────────
@app.errorhandler(FormatError)
def bad_id(e: FormatError):
    return jsonify({"error": str(e), "reason": e.reason}), 400

@app.errorhandler(ValueError)
@app.errorhandler(TypeError)
def bad_request(e):
    return jsonify({"error": str(e)}), 400

@app.errorhandler(HashUnavailable)
def no_hash(e: HashUnavailable):
    log.error("hash primitive unavailable: %s", e)
    return jsonify({"error": str(e)}), 503

# ───────────────────────── endpoints ──────────────────────────
@app.get("/slot/<path:identifier>")
def one_slot(identifier):
    return jsonify(slot_of(identifier,
                           flag(request.args.get("strict", "")),
                           flag(request.args.get("aligned", ""))))

@app.post("/slots")
def many_slots():
    data = body()
    ids  = data.get("ids")
    if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
        raise ValueError("'ids' must be a list of strings")
    if len(ids) > MAX_BATCH:
        return jsonify({"error": f"batch of {len(ids)} exceeds {MAX_BATCH}"}), 413
    strict, aligned = flag(data.get("strict")), flag(data.get("aligned"))
    log.info("batch slot request", extra={"batch_size": len(ids)})
    return jsonify([slot_of(i, strict, aligned) for i in ids])

@app.post("/verify")
def verify_slot():
    data = body()
    ident, claimed = data.get("id"), data.get("slot")
    if not isinstance(ident, str) or claimed is None:
        raise ValueError("'id' and 'slot' are required")
    match = locator.verify(claimed, ident, aligned=flag(data.get("aligned")))
    return jsonify({"id": ident, "slot": claimed, "match": match})

@app.post("/field")
def field():
    data = body()
    ident, k = data.get("id"), data.get("offset", 0)
    if not isinstance(ident, str):
        raise ValueError("'id' is required")
    return jsonify({"id": ident, "offset": k, "slot": locator.field(ident, k).hex()})

# ─────────────────────────── main ─────────────────────────────
def main():
    setup_logging(LOG_LEVEL, LOG_FORMAT)
    log.info("namespace slot service on %s:%s (memoize=%s, max batch=%d)",
             HOST, PORT, MEMOIZE, MAX_BATCH)
    app.run(host=HOST, port=PORT)

if __name__ == "__main__":
    main()
