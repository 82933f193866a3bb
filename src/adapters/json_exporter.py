"""Exportación JSON del informe de dependencias.

Permite pasar el resultado a otras herramientas sin re-parsear la salida
de texto.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import DependencyReport


def export_report_json(*, report: DependencyReport, output_path: Path) -> Path:
    """Exporta `DependencyReport` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = report.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
