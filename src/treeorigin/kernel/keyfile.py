"""In-memory keyfile store.

Follows the GLib keyfile text format that origin files are written in:

    [origin]
    refspec=fedora:fedora/34/x86_64/silverblue

    [packages]
    requested=libvirt;fish;

Values are kept raw (as they appear in the text); the typed getters and
setters apply the format's escaping rules.
"""

from typing import Dict, Iterable, List, Optional

from .errors import KeyFileError
from .store import OriginStore

LIST_SEPARATOR = ";"

_UNESCAPES = {
    "s": " ",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "\\": "\\",
}

_TRUE_VALUES = ("true", "1")
_FALSE_VALUES = ("false", "0")


def _unescape(raw: str, section: str, key: str, split: bool) -> List[str]:
    """Unescape a raw value, optionally splitting on unescaped separators."""
    tokens: List[str] = []
    current: List[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch == "\\":
            if i + 1 >= len(raw):
                raise KeyFileError(f"Value for {section}/{key} ends with a stray escape character")
            nxt = raw[i + 1]
            if nxt in _UNESCAPES:
                current.append(_UNESCAPES[nxt])
            elif split and nxt == LIST_SEPARATOR:
                current.append(LIST_SEPARATOR)
            else:
                raise KeyFileError(
                    f"Value for {section}/{key} contains invalid escape sequence '\\{nxt}'"
                )
            i += 2
            continue
        if split and ch == LIST_SEPARATOR:
            tokens.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    # A trailing separator does not start a new (empty) token.
    if current or not split:
        tokens.append("".join(current))
    return tokens


def _escape(value: str, escape_separator: bool) -> str:
    out: List[str] = []
    leading = True
    for ch in value:
        if ch == " " and leading:
            out.append("\\s")
            continue
        leading = False
        if ch == "\\":
            out.append("\\\\")
        elif ch == "\n":
            out.append("\\n")
        elif ch == "\t":
            out.append("\\t")
        elif ch == "\r":
            out.append("\\r")
        elif escape_separator and ch == LIST_SEPARATOR:
            out.append("\\" + LIST_SEPARATOR)
        else:
            out.append(ch)
    return "".join(out)


def unescape_string(raw: str, section: str = "", key: str = "") -> str:
    """Unescape a raw single-string value."""
    return _unescape(raw, section, key, split=False)[0]


def unescape_list(raw: str, section: str = "", key: str = "") -> List[str]:
    """Unescape a raw list value, dropping trailing empty tokens.

    "a;b", "a;b;" and "a;b;;" all give ["a", "b"].
    """
    tokens = _unescape(raw, section, key, split=True)
    while tokens and tokens[-1] == "":
        tokens.pop()
    return tokens


class KeyFile(OriginStore):
    """Ordered in-memory keyfile."""

    def __init__(self):
        self._groups: Dict[str, Dict[str, str]] = {}

    @classmethod
    def from_text(cls, text: str) -> "KeyFile":
        """Parse keyfile text. Comments and blank lines are not preserved."""
        kf = cls()
        group: Optional[str] = None
        for lineno, line in enumerate(text.splitlines(), start=1):
            line = line.lstrip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("["):
                header = line.rstrip()
                name = header[1:-1]
                if not header.endswith("]") or not name or "[" in name or "]" in name:
                    raise KeyFileError(f"Invalid group name at line {lineno}: {header}")
                group = name
                kf._groups.setdefault(group, {})
                continue
            if "=" not in line:
                raise KeyFileError(f"Key file contains line {lineno} which is not a key-value pair, group, or comment")
            if group is None:
                raise KeyFileError("Key file does not start with a group")
            key, _, value = line.partition("=")
            key = key.rstrip()
            if not key:
                raise KeyFileError(f"Empty key name at line {lineno}")
            kf._groups[group][key] = value.lstrip()
        return kf

    def to_text(self) -> str:
        """Serialize to keyfile text."""
        chunks = []
        for name, entries in self._groups.items():
            lines = [f"[{name}]"]
            lines.extend(f"{key}={value}" for key, value in entries.items())
            chunks.append("\n".join(lines) + "\n")
        return "\n".join(chunks)

    def __eq__(self, other):
        if not isinstance(other, KeyFile):
            return NotImplemented
        return self._groups == other._groups

    def __repr__(self):
        return f"KeyFile({self._groups!r})"

    def get_value(self, section: str, key: str) -> Optional[str]:
        return self._groups.get(section, {}).get(key)

    def get_string(self, section: str, key: str) -> Optional[str]:
        raw = self.get_value(section, key)
        if raw is None:
            return None
        return _unescape(raw, section, key, split=False)[0]

    def get_string_list(self, section: str, key: str) -> Optional[List[str]]:
        raw = self.get_value(section, key)
        if raw is None:
            return None
        return _unescape(raw, section, key, split=True)

    def get_bool(self, section: str, key: str) -> bool:
        raw = self.get_value(section, key)
        if raw is None:
            return False
        value = raw.rstrip()
        if value in _TRUE_VALUES:
            return True
        if value in _FALSE_VALUES:
            return False
        raise KeyFileError(f"Value {raw!r} for {section}/{key} cannot be interpreted as a boolean")

    def set_value(self, section: str, key: str, value: str) -> None:
        self._groups.setdefault(section, {})[key] = value

    def set_string(self, section: str, key: str, value: str) -> None:
        self.set_value(section, key, _escape(value, escape_separator=False))

    def set_string_list(self, section: str, key: str, values: Iterable[str]) -> None:
        raw = "".join(_escape(v, escape_separator=True) + LIST_SEPARATOR for v in values)
        self.set_value(section, key, raw)

    def set_bool(self, section: str, key: str, value: bool) -> None:
        self.set_value(section, key, "true" if value else "false")

    def sections(self) -> List[str]:
        return list(self._groups)

    def keys(self, section: str) -> List[str]:
        return list(self._groups.get(section, {}))

    def remove_section(self, section: str) -> bool:
        return self._groups.pop(section, None) is not None

    def copy(self) -> "KeyFile":
        kf = KeyFile()
        kf._groups = {name: dict(entries) for name, entries in self._groups.items()}
        return kf
