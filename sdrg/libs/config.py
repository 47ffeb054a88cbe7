"""
Configuration data model - class-based representation of config.yaml
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import yaml
from .logger import get_logger
logger = get_logger(__name__)

CONFIG_ENV_VAR = "SD_RG_CONFIG"
COLOR_CHOICES = ("always", "ansi", "never", "auto")


class ConfigError(Exception):
    """Raised when the configuration file cannot be read or holds invalid values."""


@dataclass(frozen=True)
class SdRgConfig:
    """sd-rg configuration"""
    rg_binary: str = "rg"
    preview_lines: int = 100
    color: str = "always"
    # Pass --no-config so RIPGREP_CONFIG_PATH cannot alter rewritten output
    ignore_rg_config: bool = True
    log_level: str = "WARNING"
    log_file: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], env: Optional[Mapping[str, str]] = None) -> "SdRgConfig":
        """Create SdRgConfig from dictionary (loaded from YAML), applying environment overrides"""
        data = dict(data or {})
        env = env if env is not None else os.environ
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")
        if env.get("SD_RG_RG_BINARY"):
            data["rg_binary"] = env["SD_RG_RG_BINARY"]
        if env.get("SD_RG_LOG_LEVEL"):
            data["log_level"] = env["SD_RG_LOG_LEVEL"]
        rg_binary = data.get("rg_binary", cls.rg_binary)
        if not isinstance(rg_binary, str) or not rg_binary:
            raise ConfigError("rg_binary must be a non-empty string")
        preview_lines = data.get("preview_lines", cls.preview_lines)
        if isinstance(preview_lines, bool) or not isinstance(preview_lines, int) or preview_lines < 1:
            raise ConfigError("preview_lines must be a positive integer")
        color = data.get("color", cls.color)
        if color not in COLOR_CHOICES:
            raise ConfigError(f"color must be one of: {', '.join(COLOR_CHOICES)}")
        ignore_rg_config = data.get("ignore_rg_config", cls.ignore_rg_config)
        if not isinstance(ignore_rg_config, bool):
            raise ConfigError("ignore_rg_config must be true or false")
        log_file = data.get("log_file")
        if log_file is not None and not isinstance(log_file, str):
            raise ConfigError("log_file must be a path string")
        return cls(
            rg_binary=rg_binary,
            preview_lines=preview_lines,
            color=color,
            ignore_rg_config=ignore_rg_config,
            log_level=str(data.get("log_level", cls.log_level)).upper(),
            log_file=log_file,
        )


def default_config_path(env: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the configuration file location ($SD_RG_CONFIG, then XDG config home)"""
    env = env if env is not None else os.environ
    if env.get(CONFIG_ENV_VAR):
        return Path(env[CONFIG_ENV_VAR]).expanduser()
    config_home = env.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(config_home) / "sd-rg" / "config.yaml"


def load_config(config_file: Optional[Path] = None, env: Optional[Mapping[str, str]] = None) -> SdRgConfig:
    """
    Load configuration from YAML file
    Args:
        config_file: Path to YAML file (default: resolved via default_config_path)
        env: Environment mapping used for overrides (default: os.environ)
    Returns:
        SdRgConfig instance; defaults when the file does not exist
    """
    if config_file is None:
        config_file = default_config_path(env)
    if not config_file.exists():
        logger.debug("Configuration file %s not found, using defaults", config_file)
        return SdRgConfig.from_dict({}, env=env)
    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as err:
        raise ConfigError(f"Error loading configuration {config_file}: {err}") from err
    if data is not None and not isinstance(data, dict):
        raise ConfigError(f"Configuration {config_file} must be a mapping")
    logger.debug("Loaded configuration from %s", config_file)
    return SdRgConfig.from_dict(data, env=env)
