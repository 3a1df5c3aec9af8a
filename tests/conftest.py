"""Pytest configuration and fixtures."""

from pathlib import Path

import pytest


@pytest.fixture
def write_manifest(tmp_path):
    """Write a Cargo.toml under tmp_path (optionally in a subdirectory)."""

    def _write(text: str, subdir: str = "") -> Path:
        directory = tmp_path / subdir
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "Cargo.toml"
        path.write_text(text)
        return path

    return _write


@pytest.fixture
def latest(monkeypatch):
    """Pin the resolved version used by the CLI so tests never hit the network."""
    calls = []

    def fake_resolve(channel, dist_server):
        calls.append((channel, dist_server))
        return "1.62"

    monkeypatch.setattr("cargo_set_rust_version.cli.resolve_latest_stable", fake_resolve)
    return calls
