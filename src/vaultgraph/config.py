"""Vault configuration for vaultgraph."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError

from .parser.models import ParseOptions
from .paths import normalize_dir_root

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "raven.yaml"
VAULT_ENV_VAR = "VAULTGRAPH_VAULT"


class ConfigError(Exception):
    """The vault configuration file exists but cannot be used."""


class DirectoriesConfig(BaseModel):
    """Directory organization: typed objects and untyped pages under separate roots.

    ``object``/``page`` are the current keys; ``objects``/``pages`` are the
    older plural spellings and are only used when the singular key is unset.
    """

    object: Optional[str] = Field(default=None)
    page: Optional[str] = Field(default=None)
    objects: Optional[str] = Field(default=None)
    pages: Optional[str] = Field(default=None)

    def objects_root(self) -> str:
        return normalize_dir_root(self.object or self.objects)

    def pages_root(self) -> str:
        return normalize_dir_root(self.page or self.pages)


class VaultConfig(BaseModel):
    """Configuration read from ``raven.yaml`` at the vault root."""

    vault_path: Path
    directories: Optional[DirectoriesConfig] = Field(default=None)

    model_config = {"frozen": False, "extra": "ignore"}

    def parse_options(self) -> ParseOptions:
        if self.directories is None:
            return ParseOptions()
        return ParseOptions(
            objects_root=self.directories.objects_root() or None,
            pages_root=self.directories.pages_root() or None,
        )


def _has_vault_config(path: Path) -> bool:
    return (path / CONFIG_FILENAME).is_file()


def resolve_vault_root(cli_vault_path: Optional[str] = None) -> Path:
    """Resolve the vault root directory.

    Precedence:

    1. CLI --vault option (if provided)
    2. VAULTGRAPH_VAULT environment variable
    3. Walking upward from the CWD to the first directory holding raven.yaml

    Raises:
        FileNotFoundError: If the chosen path does not exist or no vault is found
    """
    if cli_vault_path:
        vault_path = Path(cli_vault_path).expanduser().resolve()
        if not vault_path.is_dir():
            raise FileNotFoundError(f"Specified vault path does not exist: {vault_path}")
        return vault_path

    env_vault = os.environ.get(VAULT_ENV_VAR)
    if env_vault:
        vault_path = Path(env_vault).expanduser().resolve()
        if not vault_path.is_dir():
            raise FileNotFoundError(f"{VAULT_ENV_VAR} path does not exist: {vault_path}")
        return vault_path

    current_dir = Path.cwd()
    while True:
        if _has_vault_config(current_dir):
            return current_dir
        parent_dir = current_dir.parent
        if parent_dir == current_dir:
            break
        current_dir = parent_dir

    raise FileNotFoundError(
        "Vault not found. Searched for:\n"
        f"  - {CONFIG_FILENAME} upward from {Path.cwd()}\n"
        f"  - {VAULT_ENV_VAR} environment variable\n"
        "Pass --vault \"/path/to/vault\" or cd into the vault."
    )


def load_vault_config(vault_root: Path) -> VaultConfig:
    """Load ``raven.yaml`` from ``vault_root``; a missing file means defaults."""
    config_file = vault_root / CONFIG_FILENAME
    if not config_file.exists():
        logger.debug(f"No {CONFIG_FILENAME} in {vault_root}; using defaults")
        return VaultConfig(vault_path=vault_root)

    try:
        data = yaml.safe_load(config_file.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {config_file}: expected a mapping at the top level")

    values = {str(k): v for k, v in data.items()}
    values["vault_path"] = vault_root
    try:
        return VaultConfig.model_validate(values)
    except ValidationError as e:
        raise ConfigError(f"Invalid {config_file}: {e}") from e
