"""
Configuration Manager for Stepwise.

Central place for system constants. Every tunable value is declared here
with its default and can be overridden from config/runtime.yaml.

Usage:
    from stepwise.config_manager import config
    suffix = config.COPY_SUFFIX
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from stepwise.exceptions import ConfigError
from stepwise.paths import CONFIG_DIR

RUNTIME_CONFIG_PATH = CONFIG_DIR / "runtime.yaml"


@dataclass
class SystemConfig:
    """
    Runtime constants.

    Defaults match the behaviour users see in the goal tracker; adjust
    through runtime.yaml rather than editing this file.
    """

    # === Tree engine ===

    # Appended to the title of the root node of a duplicated subtree.
    # Descendant titles are copied unchanged.
    COPY_SUFFIX: str = " (Copy)"

    # Identifier prefixes handed to the identity provider.
    GOAL_ID_PREFIX: str = "g"
    STEP_ID_PREFIX: str = "s"

    # === Storage ===

    # File name of the goal store inside the data directory.
    GOALS_FILENAME: str = "goals.json"

    # === Logging ===

    LOG_MAX_BYTES: int = 5 * 1024 * 1024  # 5MB
    LOG_BACKUP_COUNT: int = 3

    # Console threshold by level name; STEPWISE_LOG_LEVEL wins when set.
    CONSOLE_LOG_LEVEL: str = "WARNING"

    # === Web ===

    # Comma separated CORS origins; STEPWISE_ALLOWED_ORIGINS wins when set.
    ALLOWED_ORIGINS: str = "*"


def _load_runtime_config(path: Optional[Path] = None) -> dict:
    """Load runtime overrides, if the file exists."""
    target = path if path is not None else RUNTIME_CONFIG_PATH
    if not target.exists():
        return {}

    try:
        with open(target, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Malformed runtime config: {e}", config_path=str(target)) from e
    except OSError as e:
        raise ConfigError(f"Cannot read runtime config: {e}", config_path=str(target)) from e

    if not isinstance(data, dict):
        raise ConfigError("Runtime config must be a mapping", config_path=str(target))
    return data


def get_config(path: Optional[Path] = None) -> SystemConfig:
    """
    Build the system configuration.

    Priority: runtime.yaml > defaults. Unknown keys are ignored.
    """
    base = SystemConfig()
    overrides = _load_runtime_config(path)
    known = {f.name for f in fields(SystemConfig)}

    for key, value in overrides.items():
        if key in known:
            setattr(base, key, value)

    return base


# Global configuration instance
config = get_config()
