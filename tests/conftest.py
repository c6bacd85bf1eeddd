"""Pytest fixtures for vaultgraph tests."""

from pathlib import Path

import pytest

from vaultgraph.config import CONFIG_FILENAME, load_vault_config


@pytest.fixture
def temp_vault(tmp_path):
    """Create a temporary vault with objects/ and pages/ roots configured.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary vault root
    """
    vault_root = tmp_path / "test_vault"
    vault_root.mkdir()
    (vault_root / CONFIG_FILENAME).write_text(
        "directories:\n  object: objects/\n  page: pages/\n",
        encoding="utf-8",
    )
    return vault_root


@pytest.fixture
def vault_config(temp_vault):
    """Load VaultConfig for the temporary vault."""
    return load_vault_config(temp_vault)


@pytest.fixture
def write_note(temp_vault):
    """Write a markdown file under the temporary vault and return its path."""

    def _write(rel_path: str, content: str) -> Path:
        path = temp_vault / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    return _write
