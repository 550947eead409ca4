"""Shared fixtures: isolate every test from the project config and cached services."""
import pytest
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from src.unistring.services import reset_services


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    path = tmp_path / "unistring.yaml"
    monkeypatch.setenv("UNISTRING_CONFIG", str(path))
    reset_services()
    yield path
    reset_services()
