"""Validación de parámetros de ejecución.

Convierte lo que escribió el usuario (`--clave` -> valor) en un único
`LaunchParams` inmutable. Cualquier problema se reporta con `ParameterError`
y un mensaje listo para mostrar.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping
from urllib.parse import urlparse

from core.domain.models import LaunchParams, RunMode
from core.errors import ParameterError
from core.services.dependency_report import DEFAULT_DEPENDENCY_KEY

VALID_KEYS = (
    "--package-name",
    "--repo-url",
    "--repo-path",
    "--mode",
    "--version",
    "--ascii",
    "--max-depth",
    "--dependency-key",
)

MAX_DEPTH_LIMIT = 1000

_PACKAGE_RE = re.compile(r"^[@a-zA-Z0-9\-_/.]+$")
_VERSION_RE = re.compile(r"^[a-zA-Z0-9.\-_]+$")


def _parse_mode(raw: str | None) -> RunMode:
    value = (raw or RunMode.REAL.value).lower()
    try:
        return RunMode(value)
    except ValueError:
        raise ParameterError("--mode должен быть real или test") from None


def _parse_max_depth(raw: str | None) -> int | None:
    if raw is None:
        return None
    try:
        depth = int(raw)
    except ValueError:
        depth = 0
    if depth <= 0 or depth > MAX_DEPTH_LIMIT:
        raise ParameterError(f"--max-depth должен быть целым в диапазоне [1..{MAX_DEPTH_LIMIT}]")
    return depth


def _parse_ascii(raw: str | None) -> bool:
    if raw is None:
        return True
    value = raw.strip().lower()
    if value not in ("true", "false"):
        raise ParameterError("--ascii должен быть true или false")
    return value == "true"


def _check_repo_url(raw: str | None) -> None:
    if raw is None:
        return
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ParameterError("Неверный формат --repo-url")


def build_launch_params(
    raw: Mapping[str, str | None],
    *,
    default_dependency_key: str = DEFAULT_DEPENDENCY_KEY,
) -> LaunchParams:
    """Valida `raw` (claves con guiones, p.ej. `--package-name`).

    Los valores `None` se tratan como no suministrados.
    """

    supplied: dict[str, str] = {}
    for key, value in raw.items():
        if key not in VALID_KEYS:
            raise ParameterError(f"Неизвестный параметр: {key}")
        if value is None:
            continue
        if value == "":
            raise ParameterError(f"Отсутствует значение для параметра {key}")
        supplied[key] = value
    if not supplied:
        raise ParameterError("Отсутствуют параметры")

    mode = _parse_mode(supplied.get("--mode"))

    package_name = supplied.get("--package-name")
    version = supplied.get("--version")
    if not package_name or not version:
        raise ParameterError("Необходимо указать --package-name и --version")
    if not _PACKAGE_RE.match(package_name):
        raise ParameterError("Неверный формат --package-name")
    if not _VERSION_RE.match(version):
        raise ParameterError("Неверный формат --version")

    max_depth = _parse_max_depth(supplied.get("--max-depth"))
    ascii_tree = _parse_ascii(supplied.get("--ascii"))
    _check_repo_url(supplied.get("--repo-url"))

    repo_path: Path | None = None
    if "--repo-path" in supplied:
        repo_path = Path(supplied["--repo-path"])
    if mode is RunMode.TEST:
        if repo_path is None:
            raise ParameterError("В тестовом режиме необходимо указать --repo-path")
        if not repo_path.is_file():
            raise ParameterError(f"Файл не найден: {repo_path}")

    return LaunchParams(
        package_name=package_name,
        version=version,
        mode=mode,
        repo_url=supplied.get("--repo-url"),
        repo_path=repo_path,
        ascii=ascii_tree,
        max_depth=max_depth,
        dependency_key=supplied.get("--dependency-key", default_dependency_key),
        supplied=supplied,
    )
