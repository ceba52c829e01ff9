import logging
import secrets
import time
from typing import Dict, Optional, Tuple

from flask import Blueprint, jsonify, request

from ..src.errors import ExternalServiceError
from ..src.providers.spotify import SpotifyProvider
from ..src.services.spotify_auth import SpotifyOAuth
from ..src.services.spotify_service import SpotifyService
from .common import bearer_token, error_response, invalid_body_response, json_body, missing_token_response


bp = Blueprint("spotify", __name__)
logger = logging.getLogger(__name__)

PKCE_STORE: Dict[str, Tuple[str, float, Optional[str]]] = {}  # state -> (verifier, expires_at, redirect_uri)
PKCE_TTL_SECONDS = 600  # 10 minutos


def _oauth() -> SpotifyOAuth:
    return SpotifyOAuth()


def _remember_state(state: str, verifier: str, redirect_uri: Optional[str] = None) -> None:
    now = time.time()
    # Limpieza simple
    expired = [k for k, (_, exp, _) in PKCE_STORE.items() if exp < now]
    for key in expired:
        PKCE_STORE.pop(key, None)
    PKCE_STORE[state] = (verifier, now + PKCE_TTL_SECONDS, redirect_uri)


def _pop_state_data(state: str) -> Optional[Tuple[str, Optional[str]]]:
    item = PKCE_STORE.pop(state, None)
    if not item:
        return None
    verifier, expires_at, redirect_uri = item
    if time.time() > expires_at:
        return None
    return (verifier, redirect_uri)


@bp.get("/auth")
def spotify_authorization():
    """Devuelve la URL de autorización de Spotify usando PKCE."""
    try:
        oauth = _oauth()
        state = secrets.token_urlsafe(16)
        redirect_uri = request.args.get("redirect_uri")
        authorize_url, verifier = oauth.authorize_url(state, redirect_uri=redirect_uri)
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400
    _remember_state(state, verifier, redirect_uri)
    logger.info("OAuth init state=%s redirect_uri=%s", state, redirect_uri or oauth.redirect_uri)
    return jsonify({"authorize_url": authorize_url, "state": state}), 200


@bp.post("/callback")
def spotify_callback():
    """Intercambia el código de Spotify por tokens (PKCE) y devuelve el perfil del usuario.

    Body: { code: str, state: str }
    """
    body = json_body()
    if body is None:
        return invalid_body_response()
    code = body.get("code")
    state = body.get("state")
    if not code or not state:
        return jsonify({"error": "code y state requeridos"}), 400

    state_data = _pop_state_data(state)
    if not state_data:
        return jsonify({"error": "state inválido o expirado", "code": "invalid_state"}), 400
    verifier, redirect_uri = state_data

    try:
        tokens = _oauth().exchange_code(code, verifier, redirect_uri=redirect_uri)
        user = SpotifyProvider().current_user(tokens["access_token"])
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400
    except ExternalServiceError as exc:
        return error_response(exc, "Failed to authenticate with Spotify")
    return jsonify({"tokens": tokens, "user": user}), 200


@bp.post("/refresh")
def spotify_refresh():
    """Refresh Spotify access token using refresh token."""
    body = json_body()
    if body is None:
        return invalid_body_response()
    refresh_token = body.get("refresh_token")
    if not refresh_token:
        return jsonify({"error": "refresh_token requerido"}), 400
    try:
        payload = _oauth().refresh(refresh_token)
    except ValueError as ve:
        return jsonify({"error": str(ve)}), 400
    except ExternalServiceError as exc:
        return error_response(exc, "No se pudo refrescar el token")

    return jsonify({
        "provider": "spotify",
        "token_type": payload.get("token_type"),
        "scope": payload.get("scope"),
        "access_token": payload.get("access_token"),
        "refresh_token": payload.get("refresh_token"),  # Spotify may issue a new one
        "expires_in": payload.get("expires_in"),
    }), 200


@bp.get("/user")
def spotify_user():
    token = bearer_token()
    if not token:
        return missing_token_response()
    try:
        return jsonify(SpotifyProvider().current_user(token)), 200
    except ExternalServiceError as exc:
        return error_response(exc, "Failed to get user profile")


@bp.get("/genres")
def spotify_genres():
    token = bearer_token()
    if not token:
        return missing_token_response()
    return jsonify({"items": SpotifyService().available_genres(token)}), 200
