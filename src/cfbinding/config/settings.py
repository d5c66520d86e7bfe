"""Utility functions for reading and writing configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml

from cfbinding.config.configuration import register_setting

SETTINGS_FILE = "settings.yaml"
MISSING_MESSAGE = "Missing required environment variable: {}"
NOT_GIVEN = object()

# Built-in settings are registered here so that other packages can extend the
# configuration system via :func:`register_setting`.

register_setting(
    package_name="cfbinding",
    env_var="LOG_LEVEL",
    group="Logging",
    description="Log level for cfbinding loggers (DEBUG, INFO, WARNING, ERROR)",
    enum=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
)
register_setting(
    package_name="cfbinding",
    env_var="CHISEL_TASK_TYPE",
    group="Tunnel",
    description="Task type written into dependent tasks that open a chisel tunnel to the Cloud Foundry space",
    default="chisel",
)
register_setting(
    package_name="cfbinding",
    env_var="VCAP_SERVICES_KEY",
    group="Environment",
    description=(
        "Key in the environment file holding the JSON description of cloud-bound service instances. "
        "Instances listed here are reported as bound in the cloud."
    ),
    default="VCAP_SERVICES",
)
register_setting(
    package_name="cfbinding",
    env_var="LOCAL_SERVICES_KEY",
    group="Environment",
    description=(
        "Key in the environment file holding locally provided service instances, "
        "using the same JSON layout as VCAP_SERVICES."
    ),
    default="LOCAL_SERVICES",
)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def get_system_file_path(filename: str) -> Path:
    """Return the path to the configuration file for the current OS."""
    import platform

    os_name = platform.system()
    if os_name in {"Linux", "Darwin"}:
        return Path.home() / ".config" / "cfbinding" / filename
    elif os_name == "Windows":
        appdata = os.getenv("APPDATA")
        if appdata is not None:
            return Path(appdata) / "cfbinding" / filename
        return Path("data") / filename
    return Path("data") / filename


# ---------------------------------------------------------------------------
# Settings helpers
# ---------------------------------------------------------------------------


def load_settings(settings_file: Path | None = None) -> Dict[str, Any]:
    """Load settings from the YAML settings file."""
    settings_file = settings_file or get_system_file_path(SETTINGS_FILE)

    settings: Dict[str, Any] = {}
    if settings_file.exists():
        with open(settings_file, "r") as f:
            settings = yaml.safe_load(f) or {}

    return settings


def save_settings(settings: Dict[str, Any], settings_file: Path | None = None) -> None:
    """Save settings to the YAML settings file."""
    settings_file = settings_file or get_system_file_path(SETTINGS_FILE)
    os.makedirs(os.path.dirname(settings_file), exist_ok=True)

    with open(settings_file, "w") as f:
        yaml.dump(settings, f)


def get_value(
    key: str,
    settings: Dict[str, Any],
    default_env: Dict[str, Any],
    default: Any = NOT_GIVEN,
) -> Any:
    """Retrieve a configuration value from settings or environment."""
    value = settings.get(key)
    if value is None or str(value) == "":
        value = os.environ.get(key)

    if value is None:
        value = default_env.get(key, default)

    if value is not NOT_GIVEN:
        return value
    raise Exception(MISSING_MESSAGE.format(key))
