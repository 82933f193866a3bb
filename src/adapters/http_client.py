"""Wrapper de httpx.

Estandariza timeouts y headers para las peticiones al registro. El
transporte se puede sustituir (p.ej. `httpx.MockTransport` en tests).
"""

from __future__ import annotations

import logging

import httpx

from core.config import AppSettings
from core.errors import FetchError

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con los defaults del proyecto."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


def fetch_document(
    url: str,
    *,
    settings: AppSettings | None = None,
    transport: httpx.BaseTransport | None = None,
) -> str:
    """Descarga `url` y devuelve el cuerpo como texto.

    Cualquier estado distinto de 200 o fallo de transporte es `FetchError`.
    """

    try:
        with build_client(settings, transport=transport) as client:
            resp = client.get(url)
    except httpx.TimeoutException as exc:
        raise FetchError("Таймаут подключения") from exc
    except httpx.HTTPError as exc:
        raise FetchError(str(exc) or exc.__class__.__name__) from exc

    if resp.status_code != 200:
        raise FetchError(f"HTTP ошибка: {resp.status_code}")

    logger.debug("fetched %s (%d chars)", url, len(resp.text))
    return resp.text
