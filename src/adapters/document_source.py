"""Lectura de documentos locales (modo test).

Permite probar la extracción contra un volcado del registro guardado en
disco, sin red.
"""

from __future__ import annotations

import logging
from pathlib import Path

from core.errors import DocumentReadError

logger = logging.getLogger(__name__)


def read_local_document(path: Path) -> str:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentReadError(f"Ошибка чтения файла: {exc}") from exc
    logger.debug("loaded %s (%d chars)", path, len(text))
    return text
