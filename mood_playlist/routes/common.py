import logging
from typing import Optional

from flask import jsonify, request

from ..src.errors import ExternalServiceError, MoodPlaylistError, NoCandidatesError, PartialPlaylistError, UnknownMoodError

logger = logging.getLogger(__name__)


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization") or ""
    if not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def json_body() -> Optional[dict]:
    """Body JSON como dict; None si no es un objeto JSON."""
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    return body if isinstance(body, dict) else None


def invalid_body_response():
    return jsonify({"error": "Request body must be a JSON object", "code": "invalid_body"}), 400


def missing_token_response():
    return jsonify({"error": "Authorization header with Bearer token is required", "code": "unauthorized"}), 401


def error_response(exc: MoodPlaylistError, message: str):
    if isinstance(exc, UnknownMoodError):
        status = 422
    elif isinstance(exc, NoCandidatesError):
        status = 404
    elif isinstance(exc, ExternalServiceError):
        status = 502
    else:
        status = 500
    body = {"error": message, "code": exc.code, "detail": str(exc)}
    if isinstance(exc, PartialPlaylistError):
        body["playlist_id"] = exc.playlist_id
    logger.warning("%s: %s (%s)", message, exc, exc.code)
    return jsonify(body), status
