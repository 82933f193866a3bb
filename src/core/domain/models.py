"""Modelos del dominio (Pydantic v2).

Describen *qué* se extrae de un documento del registro, no *cómo* se obtiene:
- `ObjectRange`: un bloque `{...}` dentro del texto crudo.
- `DependencyEntry`: un par clave/valor tal cual aparece en el texto.
- `DependencyReport`: el resultado completo de una extracción.
- `LaunchParams`: los parámetros de ejecución ya validados.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, model_validator
from pydantic.config import ConfigDict


class ObjectRange(BaseModel):
    """Span `[start, end)` de un bloque `{...}` con llaves balanceadas."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(..., ge=0, description="Offset de la llave de apertura.")
    end: int = Field(..., ge=1, description="Offset siguiente a la llave de cierre.")

    @model_validator(mode="after")
    def _check_order(self) -> "ObjectRange":
        if self.start >= self.end:
            raise ValueError("start must be lower than end")
        return self

    @property
    def body_start(self) -> int:
        return self.start + 1

    @property
    def body_end(self) -> int:
        return self.end - 1


class DependencyEntry(BaseModel):
    """Par (clave, valor) sin normalizar: comillas y espacios intactos."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Token crudo de la clave (p.ej. '\"mocha\"').")
    value: str = Field(..., description="Token crudo del valor (p.ej. '\"^5.0.0\"').")

    def as_pair(self) -> tuple[str, str]:
        return (self.key, self.value)


class ExtractionOutcome(str, Enum):
    """Resultado terminal de una extracción."""

    FOUND = "found"
    VERSION_NOT_FOUND = "version_not_found"
    DEPENDENCIES_NOT_FOUND = "dependencies_not_found"
    UNPARSEABLE = "unparseable"


class DependencyReport(BaseModel):
    """Resultado de extraer el mapa de dependencias de una versión."""

    model_config = ConfigDict(frozen=True)

    package_name: str | None = Field(
        default=None,
        description="Paquete consultado (solo informativo).",
    )
    version: str = Field(..., min_length=1, description="Versión buscada literalmente.")
    dependency_key: str = Field(
        default="devDependencies",
        min_length=1,
        description="Nombre del objeto anidado extraído.",
    )
    outcome: ExtractionOutcome = Field(..., description="Resultado de la extracción.")
    entries: list[DependencyEntry] = Field(
        default_factory=list,
        description="Pares en orden de aparición (duplicados incluidos).",
    )
    range: ObjectRange | None = Field(
        default=None,
        description="Span del objeto extraído cuando se encontró.",
    )

    @property
    def found(self) -> bool:
        return self.outcome is ExtractionOutcome.FOUND

    def pairs(self) -> list[tuple[str, str]]:
        return [entry.as_pair() for entry in self.entries]


class RunMode(str, Enum):
    """Origen del documento: registro HTTP o fichero local."""

    REAL = "real"
    TEST = "test"


DEFAULT_MAX_DEPTH = 100


class LaunchParams(BaseModel):
    """Parámetros de ejecución validados.

    Se construye una sola vez en la CLI y se pasa explícitamente; no hay
    tabla global de parámetros.
    """

    model_config = ConfigDict(frozen=True)

    package_name: str
    version: str
    mode: RunMode = RunMode.REAL
    repo_url: str | None = None
    repo_path: Path | None = None
    ascii: bool = True
    max_depth: int | None = None
    dependency_key: str = "devDependencies"
    supplied: dict[str, str] = Field(
        default_factory=dict,
        description="Parámetros tal como los escribió el usuario (para eco).",
    )

    @model_validator(mode="after")
    def _check_test_mode(self) -> "LaunchParams":
        if self.mode is RunMode.TEST and self.repo_path is None:
            raise ValueError("test mode requires repo_path")
        return self

    @property
    def show_tree(self) -> bool:
        """El grafo transitivo se muestra si se pidió --max-depth o --ascii."""

        return "--max-depth" in self.supplied or "--ascii" in self.supplied

    @property
    def tree_depth(self) -> int:
        return self.max_depth or DEFAULT_MAX_DEPTH

    def registry_base(self, default_registry: str) -> str:
        base = self.repo_url or default_registry
        if not base.endswith("/"):
            base += "/"
        return base

    def package_url(self, default_registry: str, package_name: str | None = None) -> str:
        return self.registry_base(default_registry) + (package_name or self.package_name)

    def local_document_path(self, package_name: str | None = None) -> Path:
        """Documento local de un paquete en modo test.

        La raíz es `repo_path`; los demás paquetes se buscan junto a él como
        `<nombre>.json`.
        """

        if self.repo_path is None:
            raise ValueError("repo_path is not set")
        if package_name is None or package_name == self.package_name:
            return self.repo_path
        return self.repo_path.parent / f"{package_name}.json"
