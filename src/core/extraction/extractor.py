"""Aislamiento y descomposición de un objeto `{...}`.

Tres políticas pequeñas e independientes:
- `find_matching_brace`: contador de profundidad sobre caracteres crudos.
  Las llaves dentro de strings cuentan igual que las estructurales.
- `naive_split` / `depth_aware_split`: cortar el cuerpo en entradas.
- `split_pair`: cortar una entrada en clave y valor.

Ninguna normaliza: comillas y espacios se devuelven tal cual.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.domain.models import DependencyEntry, ObjectRange

logger = logging.getLogger(__name__)

EntrySplitter = Callable[[str], list[str]]

_OPENERS = "{["
_CLOSERS = "}]"


def find_matching_brace(doc: str, start: int) -> int | None:
    """Offset de la `}` que cierra la llave abierta en `start`.

    Recorre desde `start` con un contador que arranca en 0; devuelve el offset
    (inclusive) donde el contador vuelve a 0, o `None` si se acaba el texto.
    """

    level = 0
    for i in range(start, len(doc)):
        c = doc[i]
        if c == "{":
            level += 1
        elif c == "}":
            level -= 1
            if level == 0:
                return i
    return None


def find_object_range(doc: str, from_offset: int) -> ObjectRange | None:
    """Rango del primer objeto `{...}` que empieza en o después de `from_offset`."""

    start = doc.find("{", from_offset)
    if start == -1:
        logger.debug("no opening brace after offset %d", from_offset)
        return None
    close = find_matching_brace(doc, start)
    if close is None:
        logger.debug("unmatched brace at offset %d", start)
        return None
    logger.debug("object range [%d, %d)", start, close + 1)
    return ObjectRange(start=start, end=close + 1)


def naive_split(body: str) -> list[str]:
    """Corta en cada coma, incluidas las de valores anidados."""

    return body.split(",")


def depth_aware_split(body: str) -> list[str]:
    """Corta solo en comas de nivel cero (fuera de `{}`/`[]` y de strings)."""

    parts: list[str] = []
    depth = 0
    in_string = False
    escaped = False
    last = 0
    for i, c in enumerate(body):
        if in_string:
            if escaped:
                escaped = False
            elif c == "\\":
                escaped = True
            elif c == '"':
                in_string = False
            continue
        if c == '"':
            in_string = True
        elif c in _OPENERS:
            depth += 1
        elif c in _CLOSERS:
            depth -= 1
        elif c == "," and depth == 0:
            parts.append(body[last:i])
            last = i + 1
    parts.append(body[last:])
    return parts


def split_pair(entry: str) -> DependencyEntry | None:
    """Clave y valor si la entrada tiene exactamente un `:`; si no, `None`.

    Las partes vacías se conservan: `'"a":'` da la clave `'"a"'` y el valor `''`.
    """

    parts = entry.split(":")
    if len(parts) != 2:
        return None
    return DependencyEntry(key=parts[0], value=parts[1])


def decompose(body: str, splitter: EntrySplitter = naive_split) -> list[DependencyEntry]:
    """Pares del cuerpo de un objeto, en orden; las entradas malformadas se descartan."""

    entries: list[DependencyEntry] = []
    for candidate in splitter(body):
        pair = split_pair(candidate)
        if pair is None:
            if candidate.strip():
                logger.debug("discarding malformed entry %r", candidate)
            continue
        entries.append(pair)
    return entries


def object_body(doc: str, span: ObjectRange) -> str:
    """Texto estrictamente entre las dos llaves."""

    return doc[span.body_start : span.body_end]


SPLITTERS: dict[str, EntrySplitter] = {
    "naive": naive_split,
    "depth": depth_aware_split,
}
