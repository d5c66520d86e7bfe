"""
Environment Configuration Management Module

This module provides centralized configuration for cfbinding through the
Environment class. Values are resolved from, in order of precedence:

- The settings file (settings.yaml)
- Environment variables, including those loaded from .env files
- Defaults registered with :func:`register_setting`
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from cfbinding.config.configuration import get_setting_defaults
from cfbinding.config.logging_config import get_logger
from cfbinding.config.settings import (
    SETTINGS_FILE,
    get_system_file_path,
    get_value,
    load_settings,
)


def load_dotenv_files(project_root: Path | None = None):
    """Load environment variables from .env files based on current environment."""
    from dotenv import load_dotenv

    project_root = project_root or Path.cwd()
    env_name = os.environ.get("ENV", "development")

    # later files override earlier ones
    env_files = [
        project_root / ".env",
        project_root / f".env.{env_name}",
        project_root / f".env.{env_name}.local",
    ]

    for env_file in env_files:
        if env_file.exists():
            load_dotenv(env_file, override=False)


class Environment(object):
    """
    Central access point for cfbinding settings.

    All accessors are classmethods; settings are loaded lazily on first use
    and cached until :meth:`reset` is called.
    """

    settings: Optional[Dict[str, Any]] = None

    @classmethod
    def load_settings(cls):
        load_dotenv_files()
        cls.settings = load_settings()

    @classmethod
    def get_settings(cls):
        if cls.settings is None:
            cls.load_settings()
        assert cls.settings is not None
        return cls.settings

    @classmethod
    def reset(cls):
        cls.settings = None

    @classmethod
    def get(cls, key: str, default: Any = None):
        return get_value(key, cls.get_settings(), get_setting_defaults(), default)

    @classmethod
    def has_settings(cls):
        return get_system_file_path(SETTINGS_FILE).exists()

    @classmethod
    def is_debug(cls):
        """
        Is debug flag on?
        """
        return cls.get("DEBUG")

    @classmethod
    def get_log_level(cls):
        """Return desired log level string.

        Priority:
        1) LOG_LEVEL from the environment
        2) If DEBUG env is truthy, return "DEBUG"
        3) CFBINDING_LOG_LEVEL env (default "INFO")
        """
        level = os.getenv("LOG_LEVEL")
        if level:
            return str(level).upper()
        debug_env = os.getenv("DEBUG")
        if debug_env and debug_env.lower() not in ("0", "false", "no", "off", ""):
            return "DEBUG"
        return os.getenv("CFBINDING_LOG_LEVEL", "INFO").upper()

    @classmethod
    def get_chisel_task_type(cls) -> str:
        return cls.get("CHISEL_TASK_TYPE", "chisel")

    @classmethod
    def get_vcap_services_key(cls) -> str:
        return cls.get("VCAP_SERVICES_KEY", "VCAP_SERVICES")

    @classmethod
    def get_local_services_key(cls) -> str:
        return cls.get("LOCAL_SERVICES_KEY", "LOCAL_SERVICES")

    @classmethod
    def get_logger(cls):
        """Return the shared cfbinding logger using centralized config."""
        return get_logger("cfbinding")
