"""Round-trip validation between an origin and its re-encoding.

Check performed by validate_roundtrip():

1. decode the origin and encode the result again;
2. compare both records key by key (diff_origins), collecting every
   discrepancy into a single RoundTripMismatchError;
3. decode the re-encoded record and assert the two configs are structurally
   identical (RoundTripInvariantError otherwise, a bridge defect).
"""

from dataclasses import dataclass
from typing import List, Literal, Optional

from . import keys as k
from .config import ComposeConfig
from .decode import origin_to_config
from .encode import config_to_origin
from .errors import RoundTripInvariantError, RoundTripMismatchError
from .keyfile import unescape_list, unescape_string
from .store import OriginStore


@dataclass(frozen=True)
class RoundTripIssue:
    """A single discrepancy between an origin and its re-encoding."""
    code: Literal[
        "MISMATCHED_VALUE",  # Key present in both, values not equivalent
        "MISSING_KEY",  # Key dropped by the re-encoding
        "UNEXPECTED_NEW_KEY",  # Key only present in the re-encoding
    ]
    section: str
    key: str
    original: Optional[str] = None
    updated: Optional[str] = None

    @property
    def path(self) -> str:
        return k.key_path(self.section, self.key)

    @property
    def message(self) -> str:
        if self.code == "MISMATCHED_VALUE":
            return f"Mismatched value for {self.path}: {self.original} vs {self.updated}"
        if self.code == "MISSING_KEY":
            return f"Missing key in re-encoded origin: {self.path} (was {self.original})"
        return f"Unexpected new key: {self.path}"


def _parse_bool(raw: str) -> Optional[bool]:
    value = raw.strip()
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    return None


def _override_replace_equal(a: List[str], b: List[str]) -> bool:
    if len(a) != len(b):
        return False
    for entry_a, entry_b in zip(a, b):
        source_a, *pkgs_a = entry_a.split(",")
        source_b, *pkgs_b = entry_b.split(",")
        if source_a != source_b or set(pkgs_a) != set(pkgs_b):
            return False
    return True


def values_equivalent(section: str, key: str, a: str, b: str) -> bool:
    """Whether two raw values of the same key describe the same thing.

    Values are compared unescaped. List values ignore trailing separators.
    """
    if a == b:
        return True
    path = k.key_path(section, key)
    if path in k.BOOLEAN_KEYS:
        parsed = _parse_bool(a)
        return parsed is not None and parsed == _parse_bool(b)
    if path not in k.LIST_KEYS:
        return unescape_string(a, section, key) == unescape_string(b, section, key)
    tokens_a = unescape_list(a, section, key)
    tokens_b = unescape_list(b, section, key)
    if path in k.UNORDERED_LIST_KEYS:
        return set(tokens_a) == set(tokens_b)
    if path == k.OVERRIDE_REPLACE_KEY:
        return _override_replace_equal(tokens_a, tokens_b)
    return tokens_a == tokens_b


def is_default_value(section: str, key: str, raw: str) -> bool:
    """Whether a raw value is the state the encoder represents by omission."""
    path = k.key_path(section, key)
    if path in k.LIST_KEYS:
        return not any(unescape_list(raw, section, key))
    if path in k.BOOLEAN_KEYS:
        return _parse_bool(raw) is False
    return False


def diff_origins(original: OriginStore, updated: OriginStore) -> List[RoundTripIssue]:
    """Compare two origin records and return every discrepancy found.

    The transient section of the original is ignored. Does not stop at the
    first issue.
    """
    issues: List[RoundTripIssue] = []

    for section in original.sections():
        if section == k.TRANSIENT:
            continue
        for key in original.keys(section):
            orig_value = original.get_value(section, key)
            new_value = updated.get_value(section, key)
            if new_value is None:
                if not is_default_value(section, key, orig_value):
                    issues.append(RoundTripIssue(
                        code="MISSING_KEY",
                        section=section,
                        key=key,
                        original=orig_value,
                    ))
            elif not values_equivalent(section, key, orig_value, new_value):
                issues.append(RoundTripIssue(
                    code="MISMATCHED_VALUE",
                    section=section,
                    key=key,
                    original=orig_value,
                    updated=new_value,
                ))

    for section in updated.sections():
        for key in updated.keys(section):
            if section == k.TRANSIENT or not original.has_key(section, key):
                issues.append(RoundTripIssue(
                    code="UNEXPECTED_NEW_KEY",
                    section=section,
                    key=key,
                    updated=updated.get_value(section, key),
                ))

    return issues


def infer_local_assembly(store: OriginStore) -> bool:
    """Recover the encoder flag an existing origin was written with."""
    return store.has_key(k.ORIGIN, k.BASEREFSPEC)


def validate_roundtrip(
    store: OriginStore,
    may_require_local_assembly: Optional[bool] = None,
) -> ComposeConfig:
    """Check that an origin converts to a config and back without loss.

    Args:
        store: Origin to check. Not modified.
        may_require_local_assembly: Passed to the encoder. When None, it is
            inferred from the origin: True iff it names its base via
            "baserefspec".

    Returns:
        The decoded config.

    Raises:
        OriginValidationError, OriginParseError: the origin cannot be decoded.
        RoundTripMismatchError: the re-encoded origin differs (all issues).
        RoundTripInvariantError: decoding the re-encoded origin gave a
            different config.
    """
    origin = store.copy()
    origin.remove_section(k.TRANSIENT)

    if may_require_local_assembly is None:
        may_require_local_assembly = infer_local_assembly(origin)

    config = origin_to_config(origin)
    reencoded = config_to_origin(config, may_require_local_assembly)

    issues = diff_origins(origin, reencoded)
    if issues:
        raise RoundTripMismatchError(issues)

    roundtripped = origin_to_config(reencoded)
    if roundtripped != config:
        raise RoundTripInvariantError(config, roundtripped)
    return config
