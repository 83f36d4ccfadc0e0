from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from xcfoundry.fs import InMemoryFileSystem  # noqa: E402
from xcfoundry.paths import ResolutionContext  # noqa: E402

PROJECT_DIR = Path("/work/MyLib")


@pytest.fixture()
def memory_fs() -> InMemoryFileSystem:
    """Empty in-memory tree rooted at ``/work``."""

    return InMemoryFileSystem()


@pytest.fixture()
def context() -> ResolutionContext:
    return ResolutionContext(manifest_directory=PROJECT_DIR, root_directory=Path("/work"))
