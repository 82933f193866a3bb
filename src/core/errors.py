"""Errores del proyecto.

La extracción en sí nunca lanza: los casos "sin datos" son valores de
`ExtractionOutcome`. Estas excepciones cubren los bordes (parámetros, red,
ficheros) y solo la CLI las convierte en mensajes y códigos de salida.
"""

from __future__ import annotations


class ParameterError(ValueError):
    """Parámetro de ejecución ausente, desconocido o con formato inválido."""


class FetchError(RuntimeError):
    """Fallo de transporte al descargar el documento del registro."""


class DocumentReadError(RuntimeError):
    """Fallo al leer un documento local (modo test)."""
