"""Servicio OOP para consumir el catálogo de Spotify con el token del usuario.

Géneros semilla, recomendaciones, audio-features y búsqueda.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from ..config import Config
from ..errors import ExternalServiceError
from .base import ServiceProvider
from .http import call_spotify

logger = logging.getLogger(__name__)

MAX_SEED_GENRES = 5
AUDIO_FEATURES_BATCH = 100


class SpotifyService(ServiceProvider):
    name = "spotify"

    def __init__(self, market: str | None = None):
        self.market = (market or Config.SPOTIFY_MARKET).upper()

    def available_genres(self, access_token: str) -> List[str]:
        try:
            data = call_spotify("available_genres", "GET", "/recommendations/available-genre-seeds", access_token)
        except ExternalServiceError as exc:
            logger.warning("No se pudieron obtener los géneros disponibles: %s", exc)
            return []
        return list(data.get("genres") or [])

    def recommendations(
        self,
        access_token: str,
        seed_genres: List[str],
        target_features: Mapping[str, float],
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {
            "seed_genres": ",".join(seed_genres[:MAX_SEED_GENRES]),
            "limit": limit,
            "market": self.market,
        }
        for feature in ("energy", "valence", "danceability", "tempo"):
            value = target_features.get(feature)
            if value is not None:
                params[f"target_{feature}"] = round(value, 3)
        data = call_spotify("recommendations", "GET", "/recommendations", access_token, params=params)
        return [t for t in (data.get("tracks") or []) if t]

    def audio_features(self, access_token: str, track_ids: List[str]) -> List[Optional[Dict[str, Any]]]:
        if not track_ids:
            return []
        out: List[Optional[Dict[str, Any]]] = []
        for i in range(0, len(track_ids), AUDIO_FEATURES_BATCH):
            chunk = track_ids[i:i + AUDIO_FEATURES_BATCH]
            data = call_spotify("audio_features", "GET", "/audio-features", access_token, params={"ids": ",".join(chunk)})
            features = list(data.get("audio_features") or [])
            # mantener alineación aunque el proveedor devuelva menos entradas
            features += [None] * (len(chunk) - len(features))
            out.extend(features[:len(chunk)])
        return out

    def search_tracks(self, access_token: str, query: str, limit: int = 50) -> List[Dict[str, Any]]:
        if not query:
            return []
        data = call_spotify(
            "search_tracks",
            "GET",
            "/search",
            access_token,
            params={"q": query, "type": "track", "limit": max(1, min(limit, 50)), "market": self.market},
        )
        return [t for t in ((data.get("tracks") or {}).get("items") or []) if t]
