from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional


class ServiceProvider(ABC):
    """Clase base para servicios de catálogo de música (solo lectura).

    Todas las operaciones reciben el token del usuario; ninguna guarda estado
    entre requests.
    """

    name: str = "provider"

    @abstractmethod
    def available_genres(self, access_token: str) -> List[str]:
        """Géneros semilla disponibles. Nunca falla: devuelve [] si el proveedor falla."""
        raise NotImplementedError

    @abstractmethod
    def recommendations(
        self,
        access_token: str,
        seed_genres: List[str],
        target_features: Mapping[str, float],
        limit: int = 20,
    ) -> List[Dict[str, Any]]:
        raise NotImplementedError

    @abstractmethod
    def audio_features(self, access_token: str, track_ids: List[str]) -> List[Optional[Dict[str, Any]]]:
        """Audio-features alineados por posición con ``track_ids`` (None si falta)."""
        raise NotImplementedError

    @abstractmethod
    def search_tracks(self, access_token: str, query: str, limit: int = 50) -> List[Dict[str, Any]]:
        raise NotImplementedError
