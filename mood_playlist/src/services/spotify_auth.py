"""Autenticación de Spotify (Authorization Code + PKCE) orientada a objetos.

Uso:
    oauth = SpotifyOAuth()
    url, verifier = oauth.authorize_url(state)
    tokens = oauth.exchange_code(code, verifier)
"""

from __future__ import annotations

import base64
import hashlib
import secrets
from typing import Any, Dict, Optional, Tuple
from urllib.parse import urlencode

import requests

from ..config import Config
from ..errors import ExternalServiceError


def generate_code_verifier() -> str:
    return secrets.token_urlsafe(64)[:128]


def code_challenge(verifier: str) -> str:
    digest = hashlib.sha256(verifier.encode("utf-8")).digest()
    return base64.urlsafe_b64encode(digest).rstrip(b"=").decode("utf-8")


class SpotifyOAuth:
    AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
    TOKEN_URL = "https://accounts.spotify.com/api/token"

    def __init__(
        self,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        redirect_uri: Optional[str] = None,
        scopes: Optional[str] = None,
    ):
        self.client_id = client_id or Config.SPOTIFY_CLIENT_ID
        self.client_secret = client_secret or Config.SPOTIFY_CLIENT_SECRET
        self.redirect_uri = redirect_uri or Config.SPOTIFY_AUTH_REDIRECT_URI
        self.scopes = scopes or Config.SPOTIFY_AUTH_SCOPES
        if not self.client_id:
            raise ValueError("Falta SPOTIFY_CLIENT_ID")

    def authorize_url(self, state: str, redirect_uri: Optional[str] = None) -> Tuple[str, str]:
        """Devuelve (authorize_url, code_verifier) para iniciar el flujo."""
        redirect_uri = redirect_uri or self.redirect_uri
        if not redirect_uri:
            raise ValueError("redirect_uri requerido")
        verifier = generate_code_verifier()
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": self.scopes,
            "state": state,
            "code_challenge": code_challenge(verifier),
            "code_challenge_method": "S256",
        }
        return f"{self.AUTHORIZE_URL}?{urlencode(params)}", verifier

    def exchange_code(self, code: str, verifier: str, redirect_uri: Optional[str] = None) -> Dict[str, Any]:
        redirect_uri = redirect_uri or self.redirect_uri
        if not redirect_uri:
            raise ValueError("redirect_uri requerido")
        return self._token_request("exchange_code", {
            "grant_type": "authorization_code",
            "code": code,
            "redirect_uri": redirect_uri,
            "client_id": self.client_id,
            "code_verifier": verifier,
        })

    def refresh(self, refresh_token: str) -> Dict[str, Any]:
        return self._token_request("refresh_token", {
            "grant_type": "refresh_token",
            "refresh_token": refresh_token,
            "client_id": self.client_id,
        })

    def _token_request(self, operation: str, data: Dict[str, str]) -> Dict[str, Any]:
        auth = (self.client_id, self.client_secret) if self.client_secret else None
        try:
            resp = requests.post(self.TOKEN_URL, data=data, auth=auth, timeout=Config.HTTP_TIMEOUT)
        except requests.RequestException as exc:
            raise ExternalServiceError(operation, str(exc)) from exc
        if resp.status_code >= 400:
            raise ExternalServiceError(operation, resp.text, status_code=resp.status_code)
        payload = resp.json() or {}
        if not payload.get("access_token"):
            raise ExternalServiceError(operation, "Spotify no devolvió access_token", status_code=resp.status_code)
        return payload
