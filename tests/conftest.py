"""Root test configuration: session-level cleanup and environment isolation"""

import shutil
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_DIRS = ["dist"]


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove output directories created during the test session."""
    yield
    for name in _CLEANUP_DIRS:
        p = _PROJECT_ROOT / name
        if p.exists():
            shutil.rmtree(p)


@pytest.fixture(autouse=True)
def isolate_env(monkeypatch):
    """Keep MDXDOC_* variables from the developer's shell out of the tests."""
    for name in ("PARSER_CONFIG", "OUTPUT_DIR", "JSON_INDENT", "LOG_LEVEL", "APP_NAME"):
        monkeypatch.delenv(f"MDXDOC_{name}", raising=False)
