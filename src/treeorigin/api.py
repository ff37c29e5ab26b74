"""Public API for the treeorigin package.

High-level functions accepting paths, dicts or stores and returning complete,
structured results. Callers should use these instead of importing from
_internal.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Union

from treeorigin.codes import IssueCode
from treeorigin.contracts import OriginIssue, RoundTripReport
from treeorigin.kernel.config import ComposeConfig
from treeorigin.kernel.decode import origin_to_config
from treeorigin.kernel.encode import config_to_origin
from treeorigin.kernel.errors import (
    OriginError,
    OriginParseError,
    OriginValidationError,
    RoundTripMismatchError,
)
from treeorigin.kernel.roundtrip import RoundTripIssue, infer_local_assembly, validate_roundtrip
from treeorigin.kernel.store import OriginStore
from treeorigin._internal.canonical_json import canonical_dumps
from treeorigin._internal.io import load_json, read_keyfile

logger = logging.getLogger(__name__)

OriginSource = Union[str, os.PathLike, Path, OriginStore]


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def load_origin(source: OriginSource) -> OriginStore:
    """Return an origin store; paths are read as keyfiles."""
    if isinstance(source, OriginStore):
        return source
    return read_keyfile(_normalize_path(source))


def parse_origin(source: OriginSource) -> ComposeConfig:
    """Decode an origin (path or store) into a ComposeConfig."""
    return origin_to_config(load_origin(source))


def render_origin(config: ComposeConfig, may_require_local_assembly: bool = False) -> str:
    """Encode a ComposeConfig as origin keyfile text."""
    return config_to_origin(config, may_require_local_assembly).to_text()


def load_config(source: Union[str, os.PathLike, Path, Dict]) -> ComposeConfig:
    """Load a ComposeConfig from a JSON file or dict."""
    if isinstance(source, dict):
        return ComposeConfig(**source)
    return ComposeConfig(**load_json(_normalize_path(source)))


def config_to_json(config: ComposeConfig, indent: Optional[int] = 2) -> str:
    """Serialize a ComposeConfig as canonical JSON (absent fields omitted)."""
    return canonical_dumps(config.model_dump(mode="json", exclude_none=True), indent=indent)


def _issue_to_model(issue: RoundTripIssue) -> OriginIssue:
    return OriginIssue(
        code=IssueCode(issue.code).value,
        path=issue.path,
        message=issue.message,
        original=issue.original,
        updated=issue.updated,
    )


def check_origin(
    source: OriginSource,
    may_require_local_assembly: Optional[bool] = None,
) -> RoundTripReport:
    """
    Check that an origin survives a decode/encode round trip.

    Decode and round-trip failures are reported as issues rather than raised.
    Store failures (e.g. a malformed keyfile) and RoundTripInvariantError still
    propagate: the former is not an origin problem, the latter is a bug in
    the bridge.

    Args:
        source: Origin path or store
        may_require_local_assembly: Encoder flag; inferred from the origin when None

    Returns:
        RoundTripReport with ok=True when no issues were found.
    """
    store = load_origin(source)
    source_path = None if isinstance(source, OriginStore) else str(_normalize_path(source))
    if may_require_local_assembly is None:
        may_require_local_assembly = infer_local_assembly(store)
    issues = []
    try:
        validate_roundtrip(store, may_require_local_assembly)
    except RoundTripMismatchError as e:
        issues = [_issue_to_model(issue) for issue in e.issues]
    except (OriginValidationError, OriginParseError) as e:
        issues = [OriginIssue(
            code=IssueCode.INVALID_ORIGIN.value,
            path=getattr(e, "key", None),
            message=str(e),
        )]
    return RoundTripReport(
        ok=not issues,
        source=source_path,
        may_require_local_assembly=may_require_local_assembly,
        issues=issues,
    )


def origin_validate_roundtrip(store: OriginStore) -> bool:
    """Defensive round-trip check, meant to run after an origin is rewritten.

    This is a diagnostic safety net rather than a precondition: failures are
    logged at debug level and reported as False instead of raised.
    """
    try:
        validate_roundtrip(store)
    except OriginError as e:
        logger.debug("Failed to roundtrip origin: %s", e)
        return False
    return True
