"""Test that the quickstart API works for loggo."""
from __future__ import annotations

import threading
from pathlib import Path

import pytest

from tests.fakes import make_files


def test_quickstart_import(package_name: str) -> None:
    import importlib

    module = importlib.import_module(package_name)
    assert callable(module.discover)
    assert callable(module.run_plugin)


def test_quickstart_version(expected_version: str) -> None:
    import loggo

    assert loggo.__version__ == expected_version


def test_quickstart_discover(tmp_path: Path) -> None:
    import loggo

    make_files(tmp_path, "loggo-gcp-stream", "loggo-tail", "notes.md")
    assert loggo.discover(tmp_path) == ["gcp-stream", "tail"]


def test_quickstart_run_plugin_missing_plugin(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    import loggo
    from loggo.core.settings import ENV_PLUGIN_DIR
    from loggo.dispatch import DISPATCH_FAILURE_EXIT_CODE

    monkeypatch.setenv(ENV_PLUGIN_DIR, str(tmp_path))
    result = loggo.run_plugin("gcp-stream", ["--project", "p"])
    assert result.exit_code == DISPATCH_FAILURE_EXIT_CODE
    assert isinstance(result.launch_error, FileNotFoundError)


def test_quickstart_run_plugin_survives_submodule_imports(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import loggo
    import loggo.cli.main  # noqa: F401  (binds the loggo.dispatch subpackage)
    from loggo.core.settings import ENV_PLUGIN_DIR
    from loggo.dispatch import DISPATCH_FAILURE_EXIT_CODE

    monkeypatch.setenv(ENV_PLUGIN_DIR, str(tmp_path))
    first =loggo.run_plugin("gcp-stream")
    second = loggo.run_plugin("gcp-stream")
    assert first.exit_code == second.exit_code == DISPATCH_FAILURE_EXIT_CODE
    assert callable(loggo.run_plugin)


def test_quickstart_run_plugin_cancelled_before_start(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    import loggo
    from loggo.core.errors import DispatchCancelled
    from loggo.core.settings import ENV_PLUGIN_DIR

    make_files(tmp_path, "loggo-gcp-stream")
    monkeypatch.setenv(ENV_PLUGIN_DIR, str(tmp_path))
    cancel = threading.Event()
    cancel.set()
    with pytest.raises(DispatchCancelled):
        loggo.run_plugin("gcp-stream", cancel=cancel)
