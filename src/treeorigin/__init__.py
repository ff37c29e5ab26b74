"""treeorigin: lossless bridge between origin files and compose configs."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("treeorigin")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from treeorigin.api import check_origin, parse_origin, render_origin
from treeorigin.codes import IssueCode
from treeorigin.contracts import OriginIssue, RoundTripReport
from treeorigin.kernel.config import ComposeConfig
from treeorigin.kernel.errors import (
    OriginError,
    OriginParseError,
    OriginValidationError,
    RoundTripInvariantError,
    RoundTripMismatchError,
    StoreAccessError,
)

__all__ = [
    "__version__",
    "check_origin",
    "parse_origin",
    "render_origin",
    "ComposeConfig",
    "IssueCode",
    "OriginIssue",
    "RoundTripReport",
    "OriginError",
    "OriginParseError",
    "OriginValidationError",
    "RoundTripInvariantError",
    "RoundTripMismatchError",
    "StoreAccessError",
]
