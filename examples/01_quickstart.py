#!/usr/bin/env python3
"""Example: Quickstart — loggo

Minimal working example: install a throwaway plugin into a temporary
directory, discover it, and dispatch an invocation to it.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install loggo
"""
from __future__ import annotations

import os
import tempfile
from pathlib import Path

import loggo

PLUGIN_SOURCE = """#!/bin/sh
echo "gcp-stream called with: $*"
exit 0
"""


def main() -> None:
    print(f"loggo version: {loggo.__version__}")

    with tempfile.TemporaryDirectory() as tmp:
        plugin_dir = Path(tmp)

        # Step 1: Put a plugin where loggo looks for it
        plugin = plugin_dir / "loggo-gcp-stream"
        plugin.write_text(PLUGIN_SOURCE, encoding="utf-8")
        plugin.chmod(0o755)
        (plugin_dir / "readme.txt").write_text("not a plugin\n", encoding="utf-8")

        # Step 2: Discover plugins (readme.txt is ignored)
        print(f"Discovered: {loggo.discover(plugin_dir)}")

        # Step 3: Dispatch; the plugin shares this process's stdout
        os.environ["LOGGO_PLUGIN_DIR"] = str(plugin_dir)
        result = loggo.run_plugin("gcp-stream", ["--project", "myGCPProject123", "--from", "1m"])
        print(f"Exit code: {result.exit_code}")


if __name__ == "__main__":
    main()
