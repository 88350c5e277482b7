"""
Configuration
-------------
Every setting can come from three places. The first one that provides a value wins:

1. Command-line flag             --jira-url https://jira.example.com
2. Environment variable          SPRINT_UPDATE_JIRA_URL=https://jira.example.com
3. TOML config file              jira-url = "https://jira.example.com"

The config file is either given with --config, or looked up as
.sprint-update.toml in the home directory and then in the user config
directory ($XDG_CONFIG_HOME, defaulting to ~/.config).
"""
from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from getpass import getpass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

PROGRAM = "sprint-update"
ENV_PREFIX = "SPRINT_UPDATE_"
CONFIG_FILENAME = f".{PROGRAM}.toml"

#setting name as used by flags and config file keys, in the order they are reported when missing
REQUIRED_SETTINGS = ("jira-url", "jira-username", "jira-password", "sprint")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


class ConfigError(Exception):
    """Raised when the configuration is missing or malformed."""


@dataclass(frozen=True)
class Config:
    """Resolved settings for one run."""

    server_url: str
    username: str
    password: str
    sprint: str
    end_of_sprint: bool = False


def env_name(setting: str) -> str:
    """Return the environment variable for a setting, e.g. jira-url -> SPRINT_UPDATE_JIRA_URL."""
    return ENV_PREFIX + setting.upper().replace("-", "_")


def default_config_paths(environ: Mapping[str, str] | None = None) -> list[Path]:
    environ = os.environ if environ is None else environ
    home = Path.home()
    config_dir = Path(environ["XDG_CONFIG_HOME"]) if environ.get("XDG_CONFIG_HOME") else home / ".config"
    return [home / CONFIG_FILENAME, config_dir / CONFIG_FILENAME]


def read_config_file(path: Path) -> dict[str, Any]:
    """Parse a TOML config file."""
    try:
        with path.open("rb") as fh:
            data = tomllib.load(fh)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    logger.info("Using config file: %s", path)
    return data


def load_config_file(path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Return the settings from the config file, or an empty dict if there is none.

    An explicit path must exist; the default locations are optional.
    """
    if path:
        return read_config_file(Path(path))
    for candidate in default_config_paths(environ):
        if candidate.is_file():
            return read_config_file(candidate)
    logger.debug("No config file found")
    return {}


def parse_bool(value: Any, *, source: str) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"Invalid boolean for {source}: {value!r}")


def _lookup(setting: str, flags: Mapping[str, Any], environ: Mapping[str, str], file_values: Mapping[str, Any]) -> tuple[Any, str] | None:
    """Return (value, source) for the first place that sets the setting."""
    flag_value = flags.get(setting)
    if flag_value is not None:
        return flag_value, f"--{setting}"
    name = env_name(setting)
    if environ.get(name):
        return environ[name], name
    if file_values.get(setting) is not None:
        return file_values[setting], f"config key '{setting}'"
    return None


def resolve_config(
    flags: Mapping[str, Any],
    *,
    environ: Mapping[str, str] | None = None,
    file_values: Mapping[str, Any] | None = None,
    interactive: bool = False,
) -> Config:
    """Merge flags, environment and config file values into a Config.

    Args:
        flags:       Values from the command line keyed by setting name; None means unset
        environ:     Environment to read SPRINT_UPDATE_* variables from. Defaults to os.environ
        file_values: Settings read from the config file
        interactive: When True, missing values are prompted for instead of raising

    Raises:
        ConfigError: If required settings are missing or a value cannot be parsed
    """
    environ = os.environ if environ is None else environ
    file_values = file_values or {}

    values: dict[str, str] = {}
    for setting in REQUIRED_SETTINGS:
        found = _lookup(setting, flags, environ, file_values)
        values[setting] = str(found[0]) if found else ""

    if interactive:
        if not values["jira-url"]:
            values["jira-url"] = input("Jira server URL (e.g. https://jira.example.com): ").strip()
        if not values["jira-username"]:
            values["jira-username"] = input("Jira username: ").strip()
        if not values["jira-password"]:
            values["jira-password"] = getpass("Jira password: ")
        if not values["sprint"]:
            values["sprint"] = input("Sprint name (e.g. SE.253): ").strip()

    #collects the missing settings and raises an error naming all of them at once
    missing = [setting for setting in REQUIRED_SETTINGS if not values[setting]]
    if missing:
        raise ConfigError(
            "Missing required settings: "
            + ", ".join(f"{s} (--{s} or {env_name(s)})" for s in missing)
        )

    end_of_sprint = False
    found = _lookup("end-of-sprint", flags, environ, file_values)
    if found:
        end_of_sprint = parse_bool(found[0], source=found[1])

    return Config(
        server_url=values["jira-url"].strip().rstrip("/"),
        username=values["jira-username"],
        password=values["jira-password"],
        sprint=values["sprint"],
        end_of_sprint=end_of_sprint,
    )
