"""File I/O helpers (internal). The kernel never touches the filesystem."""

import json
from pathlib import Path
from typing import Any, Dict, Union

from treeorigin.kernel.keyfile import KeyFile


def read_keyfile(path: Union[str, Path]) -> KeyFile:
    """Load an origin keyfile from disk."""
    return KeyFile.from_text(Path(path).read_text(encoding="utf-8"))


def write_keyfile(kf: KeyFile, path: Union[str, Path]) -> None:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(kf.to_text(), encoding="utf-8")


def load_json(path: Union[str, Path]) -> Dict[str, Any]:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)
