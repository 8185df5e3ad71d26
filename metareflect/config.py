# ==============================================
# Configuration Management
# ==============================================
#
# PURPOSE:
#   Load runtime configuration from environment
#   variables / .env file. Provides typed config objects
#   to the runtime layer and the CLI.
#
# CLASSES:
# --------
# - RuntimeConfig (dataclass)
#     global_name: str     (default "Reflect")
#     auto_install: bool   (default False)
#
# - AppConfig (dataclass)
#     runtime: RuntimeConfig
#     log_level: str       (default "WARNING")
#
# FUNCTIONS:
# ----------
# - get_config() -> AppConfig
#     Load .env using python-dotenv, construct AppConfig.
#     Returns the same singleton on repeated calls.
#
# - reset_config() -> None
#     Forget the cached singleton (next get_config() reloads).
#
# USAGE:
# ------
#   from metareflect.config import get_config
#   config = get_config()
#   print(config.runtime.global_name)
#
# ==============================================

import os
from dataclasses import dataclass, field
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv


TRUE_VARIANTS = {"1", "true", "yes", "on"}


@dataclass
class RuntimeConfig:
    """Settings for the process-wide default engine."""
    global_name: str = "Reflect"
    auto_install: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    log_level: str = "WARNING"


# Singleton instance
_config_instance: Optional[AppConfig] = None


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in TRUE_VARIANTS


def get_config() -> AppConfig:
    """
    Load configuration from environment variables / .env file.
    Returns the same singleton instance on repeated calls.

    Returns:
        AppConfig: Application configuration
    """
    global _config_instance

    if _config_instance is not None:
        return _config_instance

    # Load .env file from project root
    env_path = Path(__file__).parent.parent / ".env"
    load_dotenv(dotenv_path=env_path)

    runtime_config = RuntimeConfig(
        global_name=os.getenv("METAREFLECT_GLOBAL_NAME", "Reflect"),
        auto_install=_env_flag("METAREFLECT_AUTO_INSTALL", False),
    )

    _config_instance = AppConfig(
        runtime=runtime_config,
        log_level=os.getenv("METAREFLECT_LOG_LEVEL", "WARNING").upper(),
    )

    return _config_instance


def reset_config() -> None:
    """Drop the cached configuration so the next get_config() reloads it."""
    global _config_instance
    _config_instance = None
