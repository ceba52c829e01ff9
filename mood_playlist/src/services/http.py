"""Llamadas HTTP a la Web API de Spotify con timeout y reintentos.

Timeouts, 429 y 5xx se reintentan con backoff; los 4xx se propagan de
inmediato. Cualquier falla final sale como ``ExternalServiceError``.
"""

from typing import Any, Dict, Optional

import requests

from ..config import Config
from ..errors import ExternalServiceError
from ..utils import TransientError, backoff_retry

API_BASE = "https://api.spotify.com/v1"


def auth_headers(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}", "Content-Type": "application/json"}


def call_spotify(
    operation: str,
    method: str,
    url: str,
    token: str,
    params: Optional[Dict[str, Any]] = None,
    json: Optional[Dict[str, Any]] = None,
    max_tries: Optional[int] = None,
) -> Dict[str, Any]:
    if not url.startswith("http"):
        url = f"{API_BASE}{url}"

    def _do():
        try:
            r = requests.request(
                method,
                url,
                headers=auth_headers(token),
                params=params,
                json=json,
                timeout=Config.HTTP_TIMEOUT,
            )
        except (requests.Timeout, requests.ConnectionError) as exc:
            raise TransientError(str(exc)) from exc
        if r.status_code == 429 or r.status_code >= 500:
            raise TransientError(f"Spotify error {r.status_code}", status_code=r.status_code)
        if r.status_code >= 400:
            # no retry on client error
            raise ExternalServiceError(operation, r.text, status_code=r.status_code)
        if not r.content:
            return {}
        try:
            return r.json() or {}
        except ValueError as exc:
            raise ExternalServiceError(operation, "respuesta no es JSON", status_code=r.status_code) from exc

    if max_tries is None:
        max_tries = 1 + max(0, Config.HTTP_MAX_RETRIES)
    try:
        return backoff_retry(_do, max_tries=max_tries)
    except TransientError as exc:
        raise ExternalServiceError(operation, str(exc), status_code=exc.status_code) from exc
    except requests.RequestException as exc:
        raise ExternalServiceError(operation, str(exc)) from exc
