"""Pytest configuration for tests.

No sys.path hacks - tests should import from the installed treeorigin package.
"""

from pathlib import Path

import pytest

from treeorigin.kernel.keyfile import KeyFile

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"

BASE = """\
[origin]
refspec=foo:bar/x86_64/baz
"""


@pytest.fixture
def origins_dir() -> Path:
    return FIXTURES / "origins"


@pytest.fixture
def complex_origin(origins_dir) -> KeyFile:
    return KeyFile.from_text((origins_dir / "complex.origin").read_text(encoding="utf-8"))


@pytest.fixture
def base_origin() -> KeyFile:
    return KeyFile.from_text(BASE)
