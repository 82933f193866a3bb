"""Grafo transitivo de dependencias.

Recorre en profundidad a partir del paquete raíz, hasta `max_depth` niveles,
y produce las líneas de salida en dos formatos:
- árbol ASCII, con marcas para ciclos, paquetes ya recorridos y fallos;
- lista plana `padre -> hijo`, indentada por nivel.

Los hijos se obtienen con un `ChildrenFetcher`: nombre -> lista de nombres, o
`None` si el paquete no se pudo obtener.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.errors import DocumentReadError, FetchError
from core.extraction.extractor import EntrySplitter, naive_split
from core.services.dependency_report import (
    dependency_names,
    extract_dependencies,
    resolve_latest_version,
)

logger = logging.getLogger(__name__)

ChildrenFetcher = Callable[[str], list[str] | None]

TRANSITIVE_DEPENDENCY_KEY = "dependencies"

MARK_CYCLE = " (циклическая зависимость)"
MARK_SEEN = " (уже обработан)"
MARK_FAILED = " (не найден/ошибка)"
MAX_DEPTH_LINE = "... (max depth reached)"
FLAT_HEADER = "Список зависимостей (parent -> child):"


class RegistryChildren:
    """`ChildrenFetcher` sobre documentos del registro, con caché por paquete.

    `load_document(nombre)` devuelve el texto crudo del paquete. Para cada
    paquete se usa su versión `latest` y el objeto `dependency_key`.
    """

    def __init__(
        self,
        load_document: Callable[[str], str],
        *,
        dependency_key: str = TRANSITIVE_DEPENDENCY_KEY,
        splitter: EntrySplitter = naive_split,
    ) -> None:
        self._load_document = load_document
        self._dependency_key = dependency_key
        self._splitter = splitter
        self._cache: dict[str, list[str] | None] = {}

    def seed(self, package_name: str, children: list[str]) -> None:
        self._cache[package_name] = list(children)

    def __call__(self, package_name: str) -> list[str] | None:
        if package_name not in self._cache:
            self._cache[package_name] = self._resolve(package_name)
        return self._cache[package_name]

    def _resolve(self, package_name: str) -> list[str] | None:
        try:
            doc = self._load_document(package_name)
        except (FetchError, DocumentReadError) as exc:
            logger.debug("cannot load %s: %s", package_name, exc)
            return None

        version = resolve_latest_version(doc)
        if version is None:
            logger.debug("no latest version for %s", package_name)
            return None

        report = extract_dependencies(
            doc,
            version,
            dependency_key=self._dependency_key,
            splitter=self._splitter,
            package_name=package_name,
        )
        return dependency_names(report)


def ascii_tree_lines(root: str, fetch_children: ChildrenFetcher, max_depth: int) -> list[str]:
    """Árbol ASCII desde `root`; los hijos a nivel `max_depth` no se expanden."""

    lines = [root]
    on_path = {root}
    visited: set[str] = set()

    def walk(children: list[str], depth: int, prefix: str) -> None:
        if depth >= max_depth:
            if children:
                lines.append(f"{prefix}└── {MAX_DEPTH_LINE}")
            return
        for index, child in enumerate(children):
            last = index == len(children) - 1
            connector = "└── " if last else "├── "
            child_prefix = prefix + ("    " if last else "│   ")

            grandchildren = fetch_children(child)
            if grandchildren is None:
                lines.append(f"{prefix}{connector}{child}{MARK_FAILED}")
                continue
            if child in on_path:
                lines.append(f"{prefix}{connector}{child}{MARK_CYCLE}")
                continue
            if child in visited:
                lines.append(f"{prefix}{connector}{child}{MARK_SEEN}")
                continue

            lines.append(f"{prefix}{connector}{child}")
            on_path.add(child)
            walk(grandchildren, depth + 1, child_prefix)
            on_path.discard(child)
            visited.add(child)

    walk(fetch_children(root) or [], 0, "")
    return lines


def flat_lines(root: str, fetch_children: ChildrenFetcher, max_depth: int) -> list[str]:
    """Aristas `padre -> hijo` en orden de recorrido, indentadas por nivel."""

    edges: list[tuple[str, str, int]] = []
    visited: set[str] = set()

    def walk(node: str, depth: int) -> None:
        visited.add(node)
        for child in fetch_children(node) or []:
            edges.append((node, child, depth + 1))
            if child not in visited and depth + 1 < max_depth:
                walk(child, depth + 1)

    walk(root, 0)
    return [FLAT_HEADER] + [f"{'  ' * (depth - 1)}{parent} -> {child}" for parent, child, depth in edges]
