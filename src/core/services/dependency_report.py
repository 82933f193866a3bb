"""Orquestación Locator -> Extractor.

`extract_dependencies` es puro: mismo documento y misma versión dan siempre
el mismo informe. `report_lines` traduce el informe a las líneas que la CLI
imprime; los casos "sin datos" son mensajes informativos, no errores.
"""

from __future__ import annotations

from core.domain.models import DependencyReport, ExtractionOutcome
from core.extraction.extractor import (
    EntrySplitter,
    decompose,
    find_object_range,
    naive_split,
    object_body,
)
from core.extraction.locator import find_named_object_start, find_version_object_start

DEFAULT_DEPENDENCY_KEY = "devDependencies"

MSG_VERSION_NOT_FOUND = "Версия {version} не найдена."
MSG_DEPENDENCIES_NOT_FOUND = "Зависимости не найдены."
MSG_UNPARSEABLE = "Ошибка при разборе зависимостей."
ENTRY_LINE = "{key} = {value}"


def extract_dependencies(
    doc: str,
    version: str,
    *,
    dependency_key: str = DEFAULT_DEPENDENCY_KEY,
    splitter: EntrySplitter = naive_split,
    package_name: str | None = None,
) -> DependencyReport:
    """Extrae el mapa `dependency_key` del objeto de `version` en `doc`."""

    def _report(outcome: ExtractionOutcome, **extra) -> DependencyReport:
        return DependencyReport(
            package_name=package_name,
            version=version,
            dependency_key=dependency_key,
            outcome=outcome,
            **extra,
        )

    version_start = find_version_object_start(doc, version)
    if version_start is None:
        return _report(ExtractionOutcome.VERSION_NOT_FOUND)

    key_start = find_named_object_start(doc, version_start, dependency_key)
    if key_start is None:
        return _report(ExtractionOutcome.DEPENDENCIES_NOT_FOUND)

    span = find_object_range(doc, key_start)
    if span is None:
        return _report(ExtractionOutcome.UNPARSEABLE)

    entries = decompose(object_body(doc, span), splitter)
    return _report(ExtractionOutcome.FOUND, entries=entries, range=span)


def report_lines(report: DependencyReport) -> list[str]:
    """Líneas de salida para un informe (vacío si el mapa no tiene entradas)."""

    if report.outcome is ExtractionOutcome.VERSION_NOT_FOUND:
        return [MSG_VERSION_NOT_FOUND.format(version=report.version)]
    if report.outcome is ExtractionOutcome.DEPENDENCIES_NOT_FOUND:
        return [MSG_DEPENDENCIES_NOT_FOUND]
    if report.outcome is ExtractionOutcome.UNPARSEABLE:
        return [MSG_UNPARSEABLE]
    return [ENTRY_LINE.format(key=e.key, value=e.value) for e in report.entries]


def unquote_token(token: str) -> str:
    """Token crudo -> texto: sin espacios alrededor ni comillas."""

    return token.strip().strip('"')


def dependency_names(report: DependencyReport) -> list[str]:
    """Nombres de paquete de las entradas, en orden y sin repetir."""

    names: list[str] = []
    for entry in report.entries:
        name = unquote_token(entry.key)
        if name and name not in names:
            names.append(name)
    return names


def resolve_latest_version(doc: str) -> str | None:
    """Valor de `"latest"` dentro de `"dist-tags"`, o `None`."""

    key_start = find_named_object_start(doc, 0, "dist-tags")
    if key_start is None:
        return None
    span = find_object_range(doc, key_start)
    if span is None:
        return None
    for entry in decompose(object_body(doc, span)):
        if unquote_token(entry.key) == "latest":
            return unquote_token(entry.value) or None
    return None
