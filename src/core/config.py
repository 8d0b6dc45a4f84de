"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) para los backends de
  búsqueda y el augmenter.
- Los adaptadores reciben un `PortsSettings` en vez de leer os.environ.
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
        return base / "ports-records"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "ports-records"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "ports-records"
    return Path.home() / ".config" / "ports-records"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class PortsSettings(BaseSettings):
    """Central configuration for ports/packages searches.

    Every value may be overridden with a `PORTS_`-prefixed environment
    variable, e.g. `PORTS_PORTSDIR=/home/me/ports`.
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTS_",
        extra="ignore",
        case_sensitive=False,
        # Order: project first, then the user's global config.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    portsdir: Path = Field(
        default=Path("/usr/ports"),
        description="Root of the ports tree (passed to `make -C`).",
    )
    port_dbdir: Path = Field(
        default=Path("/var/db/ports"),
        description="PORT_DBDIR, where port options files live.",
    )
    make_command: str = Field(
        default="make",
        min_length=1,
        description="make(1) executable used for `make search`.",
    )
    pkg_command: str = Field(
        default="pkg",
        min_length=1,
        description="pkg(8) executable used for `pkg query`.",
    )

    include_moved: bool = Field(
        default=False,
        description="Keep `make search` records of ports that were moved or removed.",
    )
    warn_unattainable_fields: bool = Field(
        default=False,
        description="Log a warning for requested fields no backend can produce.",
    )
