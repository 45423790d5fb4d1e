import numpy as np
import pytest

from namespace_locator import (AllocatorModel, HashUnavailable, Word,
                               collision_model_check, keccak256, ns_loc, verify)
from namespace_locator.const import WORD_MAX
from tests.conftest import EXAMPLE_MAIN_ALIGNED

IDS = ["example.main", "openzeppelin.storage.ERC20", "acme.vault.v2", "", "x"]


# ── verify ───────────────────────────────────────────────────
def test_verify_match_forms():
    slot = ns_loc("example.main")
    assert verify(slot, "example.main")
    assert verify(int(slot), "example.main")
    assert verify(slot.hex(), "example.main")
    assert verify(slot.hex()[2:].upper(), "example.main")


def test_verify_mismatch_is_false():
    slot = ns_loc("example.main")
    assert verify(slot + 1, "example.main") is False
    assert verify(slot, "example.other") is False


def test_verify_aligned():
    assert verify(EXAMPLE_MAIN_ALIGNED, "example.main", aligned=True)
    assert not verify(EXAMPLE_MAIN_ALIGNED, "example.main")


def test_verify_bad_hex_raises():
    with pytest.raises(ValueError):
        verify("0xnothex", "example.main")


def test_verify_hash_failure_is_not_a_mismatch():
    def broken(data):
        raise ConnectionError("crypto provider down")

    with pytest.raises(HashUnavailable):
        verify(0, "example.main", hash_fn=broken)


# ── allocator model ──────────────────────────────────────────
def test_sequential_slots_are_produced():
    model = AllocatorModel(sequential_slots=10_000, containers=[], depth=1)
    for n in (0, 1, 9_999):
        assert model.produces(n)
    assert not model.produces(10_000)


def test_array_and_mapping_anchors_are_produced():
    model = AllocatorModel(containers=[3], keys=[7, b"owner"], offsets=[0, 5], depth=2)
    p = Word(3).to_bytes()
    array_base = Word.from_bytes(keccak256(p))
    map_base   = Word.from_bytes(keccak256(Word(7).to_bytes() + p))
    str_base   = Word.from_bytes(keccak256(b"owner" + p))
    for base in (array_base, map_base, str_base):
        assert model.produces(base)
        assert model.produces(base + 12345)
    # nested: array element 5 of the outer array holds another array
    nested = Word.from_bytes(keccak256((array_base + 5).to_bytes()))
    assert model.produces(nested + 1)


def test_anchor_count():
    model = AllocatorModel(containers=[0, 1], keys=[1], offsets=[0, 1], depth=2)
    # depth 1: 2 containers * 2 anchors; depth 2: 8 containers * 2 anchors
    assert len(model.anchors()) == 4 + 16


def test_run_overlap_detects_partial_overlap():
    model = AllocatorModel(containers=[0], depth=1, span=10)
    anchor = model.anchors()[0]
    assert model.collision_model_check(anchor - 5, 5)
    assert model.collision_model_check(anchor - 5, 6) is False
    assert model.collision_model_check(anchor + 10, 3)
    assert not model.collision_model_check(anchor + 9, 1)


def test_run_wrapping_into_sequential_range():
    model = AllocatorModel(sequential_slots=4, containers=[], depth=1)
    assert not model.collision_model_check(WORD_MAX, 2)
    assert model.collision_model_check(WORD_MAX - 10, 5)


def test_namespace_size_must_be_positive():
    with pytest.raises(ValueError):
        collision_model_check(ns_loc("x"), 0)


def test_invalid_model_parameters():
    with pytest.raises(ValueError):
        AllocatorModel(offsets=[-1])
    with pytest.raises(ValueError):
        AllocatorModel(span=0)


def test_container_at_predecessor_would_collide():
    # an array stored at H(id) - 1 is the one layout the derivation can meet
    ident = b"example.main"
    x     = Word.from_bytes(keccak256(ident)) - 1
    model = AllocatorModel(containers=[x], depth=1)
    assert not model.collision_model_check(ns_loc(ident))


def test_zero_hash_predecessor_wraps_in_model(scripted_hash):
    h     = scripted_hash(b"\x00" * 32)
    slot  = ns_loc("anything", h)
    model = AllocatorModel(containers=[WORD_MAX], depth=1)
    assert model.produces(slot)


# ── derived namespaces stay clear of the allocator ───────────
@pytest.mark.parametrize("ident", IDS)
def test_namespaces_clear_default_model(ident):
    assert collision_model_check(ns_loc(ident), 1 << 16)


def test_namespaces_clear_small_sequential_slots():
    for ident in IDS:
        slot = ns_loc(ident)
        assert all(slot != n for n in range(10_001))


def test_namespaces_clear_sampled_model(rng):
    model = AllocatorModel.sampled(rng, n_containers=4, n_keys=2, n_offsets=2)
    ids   = [rng.bytes(int(n)) for n in rng.integers(1, 40, size=50)]
    for ident in ids:
        assert model.collision_model_check(ns_loc(ident), 64)


def test_nested_array_pattern_is_clear(rng):
    # H(H(x + j)) + k for sampled bases x, offsets j and small k
    slots = {ns_loc(i) for i in IDS}
    for x in (int.from_bytes(rng.bytes(32), "big") for _ in range(16)):
        for j in (0, 1, int(rng.integers(2, 2**32))):
            inner = Word.from_bytes(keccak256((Word(x) + j).to_bytes()))
            outer = Word.from_bytes(keccak256(inner.to_bytes()))
            for k in range(8):
                assert outer + k not in slots


def test_sampled_model_is_reproducible():
    a = AllocatorModel.sampled(np.random.default_rng(1), n_containers=2, n_keys=1, n_offsets=1)
    b = AllocatorModel.sampled(np.random.default_rng(1), n_containers=2, n_keys=1, n_offsets=1)
    assert a.anchors() == b.anchors()


@pytest.mark.parametrize("shift", [1 << 256, -(1 << 256)])
def test_verify_rejects_claims_outside_word_range(shift):
    slot = int(ns_loc("example.main"))
    with pytest.raises(ValueError):
        verify(slot + shift, "example.main")


def test_model_rejects_out_of_range_candidate():
    with pytest.raises(ValueError):
        collision_model_check(-1)
