"""Parsing of compound tokens found in origin list values."""

import re
from typing import Tuple

from .errors import OriginParseError

_SHA256_RE = re.compile(r"^[0-9a-f]{64}$")


def is_sha256(value: str) -> bool:
    """Return True for a lowercase hex sha256 digest (no prefix)."""
    return bool(_SHA256_RE.match(value))


def decompose_sha256_nevra(token: str, key: str) -> Tuple[str, str]:
    """Split a "sha256:nevra" token into (nevra, sha256).

    Only the first ':' separates; the NEVRA may itself contain an epoch
    separator, e.g. "<sha256>:foo-1:2.0-1.x86_64".
    """
    sha256, sep, nevra = token.partition(":")
    if not sep:
        raise OriginParseError(key, token, "missing ':' in sha256:nevra entry")
    if not sha256 or not nevra:
        raise OriginParseError(key, token, "empty sha256 or NEVRA in sha256:nevra entry")
    if not is_sha256(sha256):
        raise OriginParseError(key, token, "invalid sha256 in sha256:nevra entry")
    return nevra, sha256


def format_sha256_nevra(nevra: str, sha256: str) -> str:
    return f"{sha256}:{nevra}"


def split_override_source(field: str, key: str) -> Tuple[str, str]:
    """Split an override source such as "repo=fedora" into (kind, name)."""
    kind, sep, name = field.partition("=")
    if not sep or not kind or not name:
        raise OriginParseError(key, field, "invalid override source")
    return kind, name
