"""Integration-test fixtures for isolated CLI configuration."""

from __future__ import annotations

import os

import pytest


@pytest.fixture(autouse=True)
def _clear_mdrecords_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove `MDRECORDS_*` variables so CLI defaults do not leak from the host."""

    for name in list(os.environ):
        if name.startswith("MDRECORDS_"):
            monkeypatch.delenv(name, raising=False)
