"""Shared fixtures for the gate tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from access_gate.core.settings import GateSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the caller's environment and any .env files out of GateSettings."""
    monkeypatch.chdir(tmp_path)
    for name in GateSettings.model_fields:
        monkeypatch.delenv(name, raising=False)
