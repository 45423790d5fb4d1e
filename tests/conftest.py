import numpy as np
import pytest

from namespace_locator import keccak256

EXAMPLE_MAIN         = 0x183a6125c38840424c4a85fa12bab2ab606c4b6d0e7cc73c0c06ba5300eab5da
EXAMPLE_MAIN_ALIGNED = 0x183a6125c38840424c4a85fa12bab2ab606c4b6d0e7cc73c0c06ba5300eab500


class ScriptedHash:
    """Hash stub: returns scripted digests in order, then falls back to keccak."""

    def __init__(self, *digests):
        self.digests = list(digests)
        self.calls   = []

    def __call__(self, data: bytes) -> bytes:
        self.calls.append(bytes(data))
        if self.digests:
            return self.digests.pop(0)
        return keccak256(data)


@pytest.fixture
def rng():
    return np.random.default_rng(7201)


@pytest.fixture
def scripted_hash():
    return ScriptedHash
