"""Core configuration.

Why here:
- Centralizes environment variables (pydantic-settings) without leaking into the CLI.
- Lets the command stack and the process adapter read defaults consistently.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "drupal-console-stack"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "drupal-console-stack"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "drupal-console-stack"
    return Path.home() / ".config" / "drupal-console-stack"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Writes/updates variables in the user's global .env."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# drupal-console-stack user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Central application configuration.

    Values only seed the stack: explicit setter calls and CLI flags still win.
    """

    model_config = SettingsConfigDict(
        env_prefix="DCSTACK_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first (dev), then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    executable: str = Field(
        default="drupal",
        description="Path or name of the Drupal Console executable.",
    )
    root: str | None = Field(
        default=None,
        description="Drupal root directory applied to every command.",
    )
    uri: str | None = Field(
        default=None,
        description="Site URI applied to every command (multi-site setups).",
    )
    environment: str | None = Field(
        default=None,
        description="Console environment name (e.g. 'prod', 'dev').",
    )
    command_timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Timeout per executed command line (seconds). None disables it.",
    )
    stop_on_fail: bool = Field(
        default=True,
        description="Stop a stack on the first failing command.",
    )
    assume_yes: bool = Field(
        default=True,
        description="Append --yes to every submitted command.",
    )
    printed: bool = Field(
        default=True,
        description="Print task progress on the console.",
    )
    log_level: str = Field(
        default="WARNING",
        min_length=1,
        description="Loguru level for diagnostic logs (DEBUG, INFO, WARNING...).",
    )
