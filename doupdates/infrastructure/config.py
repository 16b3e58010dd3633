"""
Configuration Module

Architectural Intent:
- Run settings (paths, timeouts, logging) with environment overrides
- Loading of the user's deploy.json, including first-run bootstrap
- Both are loaded once at startup and frozen for the run

Design Decisions:
- deploy.json and flake.nix live together in ~/NixOS by default
- Environment variables DOUPDATES_<FIELD> override settings defaults;
  CLI flags override both
- deploy.json is the user's file: a broken one is a fatal ConfigError,
  never a silent fallback to defaults
"""

from __future__ import annotations
from dataclasses import dataclass, fields, replace
from pathlib import Path
import json
import logging
import os

from doupdates.domain.entities.deploy_config import DeployConfig
from doupdates.domain.errors import ConfigError, ConfigNotFoundError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "deploy.json"
FLAKE_FILENAME = "flake.nix"
LOG_FILENAME = "doupdates.log"


def default_flake_dir() -> Path:
    return Path.home() / "NixOS"


def default_log_file() -> Path:
    data_home = os.environ.get("XDG_DATA_HOME") or str(
        Path.home() / ".local" / "share"
    )
    return Path(data_home) / "doupdates" / LOG_FILENAME


@dataclass(frozen=True)
class RunSettings:
    """Settings for one run of the tool."""
    flake_dir: str = ""
    probe_timeout: float = 2.0
    staleness_hours: float = 12.0
    log_file: str = ""
    log_level: str = "INFO"
    telemetry_endpoint: str = ""
    telemetry_insecure: bool = False

    @property
    def flake_path(self) -> Path:
        return Path(self.flake_dir) / FLAKE_FILENAME

    @property
    def config_path(self) -> Path:
        return Path(self.flake_dir) / CONFIG_FILENAME


def _env_override(data: dict, prefix: str = "DOUPDATES") -> dict:
    """Override settings with environment variables.

    Environment variables follow the pattern DOUPDATES_FIELD, for example
    DOUPDATES_FLAKE_DIR=/etc/nixos or DOUPDATES_PROBE_TIMEOUT=5.
    """
    valid_fields = {f.name for f in fields(RunSettings)}
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in valid_fields:
            data[name] = value
    return data


def _coerce(data: dict) -> dict:
    """Convert string values from the environment to the field types."""
    for f in fields(RunSettings):
        if f.name not in data or not isinstance(data[f.name], str):
            continue
        value = data[f.name]
        try:
            if f.type == "float":
                data[f.name] = float(value)
            elif f.type == "bool":
                data[f.name] = value.lower() in ("true", "1", "yes")
        except ValueError:
            raise ConfigError(f"Invalid value for {f.name}: {value!r}") from None
    return data


def load_settings(
    env_prefix: str = "DOUPDATES",
    **overrides,
) -> RunSettings:
    """Load run settings.

    Priority (highest to lowest):
    1. Keyword overrides (CLI flags); None values are ignored
    2. Environment variables (DOUPDATES_FIELD)
    3. Defaults
    """
    data = _coerce(_env_override({}, env_prefix))
    data.update({k: v for k, v in overrides.items() if v is not None})

    settings = RunSettings(**data)
    if not settings.flake_dir:
        settings = replace(settings, flake_dir=str(default_flake_dir()))
    if not settings.log_file:
        settings = replace(settings, log_file=str(default_log_file()))
    return settings


def save_deploy_config(config: DeployConfig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")


def load_deploy_config(path: Path) -> DeployConfig:
    """Load deploy.json, bootstrapping a template on first run.

    Raises:
        ConfigNotFoundError: the file was missing; a default one was written.
        ConfigError: the file exists but is not a valid deploy config.
    """
    if not path.exists():
        save_deploy_config(DeployConfig.default(), path)
        raise ConfigNotFoundError(path)

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except (UnicodeDecodeError, OSError) as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        config = DeployConfig.from_dict(data)
    except ConfigError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    logger.debug("Loaded %d remotes from %s", len(config.remotes), path)
    return config

