"""Generación de playlists a partir de un análisis de ánimo.

Flujo: perfil de la emoción -> géneros disponibles -> features objetivo ->
recomendaciones -> puntaje y selección -> creación de la playlist.
Todas las llamadas externas son secuenciales; el único estado compartido es
la tabla de perfiles, de solo lectura.
"""

import logging
import random
from datetime import date
from typing import Callable, List, Mapping, Optional, Sequence

from ..config import Config
from ..emotions import MOOD_PROFILES
from ..errors import ExternalServiceError, NoCandidatesError, PartialPlaylistError, UnknownMoodError
from ..models import GeneratedPlaylist, MoodAnalysis, MoodMusicProfile, TargetFeatures, Track
from ..naming import generate_description, generate_name
from ..providers.base import ProviderClient
from ..scoring import compute_targets, rank_tracks
from .base import ServiceProvider

logger = logging.getLogger(__name__)

MAX_GENRES = 3
MAX_SEARCH_QUERIES = 5
SEARCH_LIMIT_PER_QUERY = 10
MAX_SEARCH_RESULTS = 30


class PlaylistService:
    def __init__(
        self,
        catalog: ServiceProvider,
        provider: ProviderClient,
        rng: Optional[random.Random] = None,
        profiles: Mapping[str, MoodMusicProfile] = MOOD_PROFILES,
        playlist_length: Optional[int] = None,
        candidate_pool: Optional[int] = None,
        default_genre: Optional[str] = None,
        today: Callable[[], date] = date.today,
    ):
        self.catalog = catalog
        self.provider = provider
        self.rng = rng or random.Random()
        self.profiles = profiles
        self.playlist_length = playlist_length or Config.PLAYLIST_LENGTH
        self.candidate_pool = candidate_pool or Config.CANDIDATE_POOL
        self.default_genre = default_genre or Config.DEFAULT_GENRE
        self.today = today

    def profile_for(self, emotion: str) -> MoodMusicProfile:
        profile = self.profiles.get(emotion) if isinstance(emotion, str) else None
        if profile is None:
            raise UnknownMoodError(emotion)
        return profile

    def select_genres(self, profile: MoodMusicProfile, available: Sequence[str]) -> List[str]:
        available_set = set(available)
        genres = [g for g in profile.genres if g in available_set][:MAX_GENRES]
        if not genres:
            # la taxonomía del proveedor cambió o no respondió: seguimos con un género seguro
            logger.info("Sin géneros del perfil disponibles; usando '%s'", self.default_genre)
            return [self.default_genre]
        return genres

    def select_tracks(
        self,
        candidates: List[Track],
        target_features: TargetFeatures,
        target_count: int,
        access_token: str,
    ) -> List[Track]:
        """Top ``target_count`` por puntaje, devueltas en orden aleatorio.

        El ranking decide qué pistas entran; el orden final se mezcla.
        """
        if not candidates:
            raise NoCandidatesError()

        features = self.catalog.audio_features(access_token, [t.get("id") for t in candidates])
        ranked = rank_tracks(candidates, features, target_features)
        selected = [st.track for st in ranked[:target_count]]
        logger.debug(
            "Seleccionadas %d de %d pistas (mejor=%.3f, peor=%.3f)",
            len(selected),
            len(ranked),
            ranked[0].score,
            ranked[min(target_count, len(ranked)) - 1].score,
        )
        self.rng.shuffle(selected)
        return selected

    def generate_playlist(self, analysis: MoodAnalysis, access_token: str, user_id: str) -> GeneratedPlaylist:
        profile = self.profile_for(analysis.primary_emotion)

        available = self.catalog.available_genres(access_token)
        genres = self.select_genres(profile, available)

        targets = compute_targets(profile, analysis.confidence, self.rng)
        logger.info("Mood=%s géneros=%s objetivos=%s", analysis.primary_emotion, genres, targets)

        candidates = self.catalog.recommendations(access_token, genres, targets, self.candidate_pool)
        tracks = self.select_tracks(candidates, targets, self.playlist_length, access_token)

        name = generate_name(analysis, self.rng, self.today())
        description = generate_description(analysis)

        created = self.provider.create_playlist(access_token, user_id, name, description, public=False)
        playlist_id = created["id"]
        uris = [self.provider.track_uri(t["id"]) for t in tracks]
        try:
            self.provider.add_tracks(access_token, playlist_id, uris)
        except ExternalServiceError as exc:
            # sin rollback: la playlist vacía queda en la cuenta del usuario
            logger.error("Playlist %s creada pero no se pudieron agregar pistas: %s", playlist_id, exc)
            raise PartialPlaylistError(playlist_id, exc) from exc

        external_url = (created.get("external_urls") or {}).get("spotify") or self.provider.make_deeplink(playlist_id)
        return GeneratedPlaylist(
            id=playlist_id,
            name=created.get("name") or name,
            description=created.get("description") or description,
            tracks=tracks,
            external_url=external_url,
        )

    def search_by_mood_keywords(self, analysis: MoodAnalysis, access_token: str) -> List[Track]:
        """Vista previa por búsqueda de texto (keywords y géneros del perfil).

        Una emoción desconocida devuelve lista vacía; una consulta fallida se
        registra y se omite.
        """
        profile = self.profiles.get(analysis.primary_emotion)
        if profile is None:
            return []

        queries = [*profile.keywords, *profile.genres, analysis.primary_emotion][:MAX_SEARCH_QUERIES]
        seen = set()
        unique: List[Track] = []
        for query in queries:
            try:
                found = self.catalog.search_tracks(access_token, f"genre:{query} OR {query}", SEARCH_LIMIT_PER_QUERY)
            except ExternalServiceError as exc:
                logger.warning("Búsqueda falló para '%s': %s", query, exc)
                continue
            for track in found:
                track_id = track.get("id")
                if track_id in seen:
                    continue
                seen.add(track_id)
                unique.append(track)
        return unique[:MAX_SEARCH_RESULTS]
