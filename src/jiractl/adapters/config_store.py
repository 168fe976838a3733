"""YAML-backed credential store in the per-user config directory."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping
from pathlib import Path

import yaml
from pydantic import ValidationError

from jiractl.core.models import JiraConfig, PartialJiraConfig

APP_DIRNAME = "jiractl"
CONFIG_FILENAME = "config.yaml"

ENV_SERVER = "JIRACTL_SERVER"
ENV_EMAIL = "JIRACTL_EMAIL"
ENV_API_TOKEN = "JIRACTL_API_TOKEN"


class NotAuthenticatedError(RuntimeError):
    """Raised when no complete set of credentials is available."""

    def __init__(self) -> None:
        super().__init__("not authenticated; run: jiractl auth login --server URL --email EMAIL")


def config_dir(env: Mapping[str, str] | None = None, *, create: bool = True) -> Path:
    """Resolve (and by default create) the per-user config directory.

    Windows uses ``%APPDATA%``; everything else follows ``$XDG_CONFIG_HOME``
    with ``~/.config`` as the fallback.
    """
    env = os.environ if env is None else env
    if sys.platform == "win32":
        appdata = env.get("APPDATA")
        root = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    else:
        xdg = env.get("XDG_CONFIG_HOME")
        root = Path(xdg) if xdg else Path.home() / ".config"
    directory = root / APP_DIRNAME
    if create:
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
    return directory


def config_path(env: Mapping[str, str] | None = None) -> Path:
    return config_dir(env) / CONFIG_FILENAME


def load_config(path: str | Path | None = None) -> PartialJiraConfig:
    """Load the stored config; a missing file yields an empty config."""
    config_file = Path(path) if path is not None else config_path()
    if not config_file.exists():
        return PartialJiraConfig()

    try:
        raw_data = yaml.safe_load(config_file.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Failed to parse YAML config at {config_file}: {exc}") from exc
    except OSError as exc:
        raise OSError(f"Failed to read config file {config_file}: {exc}") from exc

    if raw_data is None:
        raw_data = {}
    if not isinstance(raw_data, dict):
        raise ValueError(f"Invalid config file at {config_file}: root must be a YAML mapping")

    try:
        return PartialJiraConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ValueError(
            f"Invalid config file at {config_file}:\n{_format_validation_errors(exc)}"
        ) from exc


def save_config(config: JiraConfig, path: str | Path | None = None) -> Path:
    """Write credentials to disk, readable only by the current user."""
    config_file = Path(path) if path is not None else config_path()
    config_file.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
    text = yaml.safe_dump(config.model_dump(), sort_keys=False)
    fd = os.open(config_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(text)
    os.chmod(config_file, 0o600)
    return config_file


def delete_config(path: str | Path | None = None) -> bool:
    """Remove stored credentials. Returns False when nothing was stored."""
    config_file = Path(path) if path is not None else config_path()
    try:
        config_file.unlink()
    except FileNotFoundError:
        return False
    return True


def load_auth_config(
    env: Mapping[str, str] | None = None,
    path: str | Path | None = None,
) -> JiraConfig:
    """Resolve credentials from the config file, overridden by environment.

    Raises NotAuthenticatedError unless server, email and token are all set.
    """
    env = os.environ if env is None else env
    stored = load_config(path if path is not None else config_path(env))
    values = {
        "server": env.get(ENV_SERVER) or stored.server,
        "email": env.get(ENV_EMAIL) or stored.email,
        "api_token": env.get(ENV_API_TOKEN) or stored.api_token,
    }
    if not all(value and value.strip() for value in values.values()):
        raise NotAuthenticatedError()
    try:
        return JiraConfig.model_validate(values)
    except ValidationError as exc:
        raise ValueError(f"Invalid credentials:\n{_format_validation_errors(exc)}") from exc


def _format_validation_errors(exc: ValidationError) -> str:
    details: list[str] = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())) or "<root>"
        details.append(f"{location}: {error['msg']}")
    return "\n".join(f"- {line}" for line in details)
