"""Shared test fixtures for loggo.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. The test doubles themselves live in
``tests.fakes``.
"""
from __future__ import annotations

from pathlib import Path

import pytest

from tests.fakes import FakeContext, make_files


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "loggo"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def plugin_dir(tmp_path: Path) -> Path:
    """A directory laid out like an installation with one plugin."""
    make_files(tmp_path, "host", "loggo-gcp-stream", "readme.txt")
    return tmp_path


@pytest.fixture()
def fake_context(plugin_dir: Path) -> FakeContext:
    return FakeContext(plugin_dir)
