"""Localización de objetos por búsqueda literal en el texto crudo.

Las dos operaciones devuelven un offset o `None`. No se valida la estructura
JSON: una versión que aparezca como substring de otra clave, o dentro de un
string cualquiera, produce un falso positivo. La búsqueda del objeto con
nombre no se detiene en el cierre del objeto de la versión, así que puede
encontrar la clave de una versión posterior.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def version_pattern(version: str) -> str:
    return f'"{version}":{{'


def name_pattern(name: str) -> str:
    return f'"{name}"'


def find_version_object_start(doc: str, version: str) -> int | None:
    """Offset de la primera aparición de `"<version>":{` o `None`."""

    offset = doc.find(version_pattern(version))
    if offset == -1:
        logger.debug("version %r not found", version)
        return None
    logger.debug("version %r found at offset %d", version, offset)
    return offset


def find_named_object_start(doc: str, from_offset: int, name: str) -> int | None:
    """Offset de la primera aparición de `"<name>"` en o después de `from_offset`."""

    offset = doc.find(name_pattern(name), from_offset)
    if offset == -1:
        logger.debug("key %r not found after offset %d", name, from_offset)
        return None
    logger.debug("key %r found at offset %d", name, offset)
    return offset
