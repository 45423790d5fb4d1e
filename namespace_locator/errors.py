# ==================================================
# namespace_locator/errors.py
# ==================================================
class LocatorError(Exception):
    """Base class for every error raised by namespace_locator."""


class FormatError(LocatorError, ValueError):
    """Identifier rejected by strict validation."""

    def __init__(self, identifier: bytes, reason: str):
        self.identifier = identifier
        self.reason     = reason
        super().__init__(f"invalid namespace id {identifier!r}: {reason}")


class HashUnavailable(LocatorError, RuntimeError):
    """The injected hash primitive failed to produce a digest."""
