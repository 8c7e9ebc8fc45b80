"""Pytest fixtures for kubie tests."""

import os
from pathlib import Path

import pytest


@pytest.fixture
def mock_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Provide a mock home directory and set HOME env var."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    return home


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove kubie-related environment variables."""
    for var in ("KUBECONFIG", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(var, raising=False)
    for var in list(os.environ):
        if var.upper().startswith("KUBIE_"):
            monkeypatch.delenv(var, raising=False)


@pytest.fixture
def kubeconfig_dir(tmp_path: Path) -> Path:
    """Provide a directory of kubeconfig files plus a kubie settings file.

    Contains a.yaml, b.yml, c.txt and kubie.yaml.
    """
    directory = tmp_path / "kubeconfigs"
    directory.mkdir()
    (directory / "a.yaml").write_text("apiVersion: v1")
    (directory / "b.yml").write_text("apiVersion: v1")
    (directory / "c.txt").write_text("not a kubeconfig")
    (directory / "kubie.yaml").write_text("configs: {}")
    return directory


@pytest.fixture
def xdg_config_home(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_env: None
) -> Path:
    """Provide a mock XDG_CONFIG_HOME directory.

    Depends on clean_env to ensure env is clean before setting XDG_CONFIG_HOME.
    """
    xdg = tmp_path / "xdg-config"
    xdg.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg))
    return xdg
