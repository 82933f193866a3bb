"""Configuración del Core.

Centraliza variables de entorno (pydantic-settings) para que la CLI y los
adaptadores (HTTP) lean la misma configuración.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "depviz"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "depviz"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "depviz"
    return Path.home() / ".config" / "depviz"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class AppSettings(BaseSettings):
    """Configuración central de la aplicación."""

    model_config = SettingsConfigDict(
        env_prefix="DEPVIZ_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero, luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    registry_url: str = Field(
        default="https://registry.npmjs.org/",
        min_length=8,
        description="Registro por defecto cuando no se pasa --repo-url.",
    )
    http_timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Timeout por request (segundos).",
    )
    user_agent: str = Field(
        default="depviz/0.1 (+https://local)",
        min_length=1,
        description="User-Agent para peticiones al registro.",
    )

    dependency_key: str = Field(
        default="devDependencies",
        min_length=1,
        description="Objeto anidado a extraer del objeto de la versión.",
    )
    transitive_dependency_key: str = Field(
        default="dependencies",
        min_length=1,
        description="Objeto leído de cada dependencia al recorrer el grafo transitivo.",
    )
    entry_split: Literal["naive", "depth"] = Field(
        default="naive",
        description="Política de corte de entradas: cada coma o solo comas de nivel cero.",
    )

    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING...).",
    )
