"""Pure origin <-> compose config bridge: no file I/O, no output."""

from .config import ComposeConfig
from .decode import origin_to_config
from .encode import config_to_origin
from .keyfile import KeyFile
from .roundtrip import diff_origins, validate_roundtrip

__all__ = [
    "ComposeConfig",
    "KeyFile",
    "origin_to_config",
    "config_to_origin",
    "diff_origins",
    "validate_roundtrip",
]
