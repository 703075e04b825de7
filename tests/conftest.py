"""Shared test helpers for goto_core tests."""

import os
import tempfile

import pytest

# Loggers are configured at import time; keep them out of the real ~/.goto.
os.environ["GOTO_HOME"] = tempfile.mkdtemp(prefix="goto-test-home-")
os.environ.pop("GOTO_CONFIG", None)


@pytest.fixture(autouse=True)
def goto_home(tmp_path, monkeypatch):
    """Point GOTO_HOME at a per-test directory."""
    home = tmp_path / "goto-home"
    monkeypatch.setenv("GOTO_HOME", str(home))
    monkeypatch.delenv("GOTO_CONFIG", raising=False)
    return home
