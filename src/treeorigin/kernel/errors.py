"""Exceptions raised by the origin bridge."""

from typing import Any, List


class OriginError(Exception):
    """Base exception for origin translation errors."""
    pass


class OriginValidationError(OriginError, ValueError):
    """Raised when an origin or config violates a structural invariant."""
    pass


class OriginParseError(OriginError, ValueError):
    """Raised when a well-formed key holds an ill-formed token."""
    def __init__(self, key: str, token: str, reason: str):
        self.key = key
        self.token = token
        self.reason = reason
        super().__init__(f"Parsing {key}: {reason}: {token!r}")


class StoreAccessError(OriginError):
    """Raised by a store for failures other than a missing section or key."""
    pass


class KeyFileError(StoreAccessError):
    """Raised when keyfile text or a keyfile value is malformed."""
    pass


class RoundTripMismatchError(OriginError):
    """Raised when a re-encoded origin does not describe the same composition."""
    def __init__(self, issues: List[Any]):
        self.issues = list(issues)
        super().__init__("; ".join(issue.message for issue in self.issues))


class RoundTripInvariantError(AssertionError):
    """Raised when decode(encode(config)) != config.

    This is a defect in the bridge itself rather than in the input.
    """
    def __init__(self, original: Any, roundtripped: Any):
        self.original = original
        self.roundtripped = roundtripped
        super().__init__(
            "Origin round trip produced a different config:\n"
            f"  before: {original!r}\n"
            f"  after:  {roundtripped!r}"
        )
