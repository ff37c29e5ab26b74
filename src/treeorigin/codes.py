"""Issue code constants for treeorigin.api.check_origin().

These constants prevent stringly-typed issue codes and ensure
client code matches on the codes actually emitted.
"""

from enum import Enum


class IssueCode(str, Enum):
    """Round-trip check issue codes."""

    # Re-encoded origin differs from the original
    MISMATCHED_VALUE = "MISMATCHED_VALUE"
    MISSING_KEY = "MISSING_KEY"
    UNEXPECTED_NEW_KEY = "UNEXPECTED_NEW_KEY"

    # Origin could not be decoded at all
    INVALID_ORIGIN = "INVALID_ORIGIN"
