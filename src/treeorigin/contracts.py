"""Public result models for the treeorigin package."""

from typing import List, Optional
from pydantic import BaseModel


class OriginIssue(BaseModel):
    """A problem found while round-tripping an origin."""
    code: str  # IssueCode value
    path: Optional[str] = None  # "section/key", None for INVALID_ORIGIN
    message: str
    original: Optional[str] = None  # Raw value in the original origin
    updated: Optional[str] = None  # Raw value in the re-encoded origin


class RoundTripReport(BaseModel):
    """Result of checking an origin round trip."""
    ok: bool
    source: Optional[str] = None  # Path of the checked origin, if read from disk
    may_require_local_assembly: Optional[bool] = None  # Flag used for encoding
    issues: List[OriginIssue]
