"""Mapa centralizado de emociones -> perfil musical.

Cada perfil define géneros (en orden de preferencia), rangos objetivo de
audio-features y keywords para la búsqueda por texto. La tabla es de solo
lectura y se construye una vez al importar el módulo.
"""

from types import MappingProxyType
from typing import Mapping

from .errors import UnknownMoodError
from .models import MoodMusicProfile


def _profile(genres, energy, valence, danceability, tempo, keywords) -> MoodMusicProfile:
    return MoodMusicProfile(
        genres=tuple(genres),
        audio_features=MappingProxyType({
            "energy": energy,
            "valence": valence,
            "danceability": danceability,
            "tempo": tempo,
        }),
        keywords=tuple(keywords),
    )


MOOD_PROFILES: Mapping[str, MoodMusicProfile] = MappingProxyType({
    "happy": _profile(
        ["pop", "dance", "funk", "disco", "reggae"],
        energy=(0.6, 1.0), valence=(0.6, 1.0), danceability=(0.5, 1.0), tempo=(100, 180),
        keywords=["upbeat", "positive", "celebration", "sunshine", "party"],
    ),
    "sad": _profile(
        ["indie", "alternative", "folk", "blues", "singer-songwriter"],
        energy=(0.0, 0.5), valence=(0.0, 0.4), danceability=(0.0, 0.5), tempo=(60, 100),
        keywords=["melancholy", "heartbreak", "rain", "alone", "emotional"],
    ),
    "energetic": _profile(
        ["rock", "electronic", "hip-hop", "punk", "metal"],
        energy=(0.7, 1.0), valence=(0.4, 1.0), danceability=(0.6, 1.0), tempo=(120, 200),
        keywords=["workout", "adrenaline", "power", "intense", "drive"],
    ),
    "calm": _profile(
        ["ambient", "classical", "new-age", "lo-fi", "acoustic"],
        energy=(0.0, 0.4), valence=(0.3, 0.7), danceability=(0.0, 0.4), tempo=(60, 100),
        keywords=["peaceful", "meditation", "sleep", "nature", "zen"],
    ),
    "anxious": _profile(
        ["indie-rock", "alternative", "electronic", "experimental"],
        energy=(0.3, 0.7), valence=(0.2, 0.6), danceability=(0.3, 0.7), tempo=(80, 140),
        keywords=["restless", "uncertainty", "tension", "introspective"],
    ),
    "nostalgic": _profile(
        ["oldies", "classic-rock", "soul", "jazz", "country"],
        energy=(0.2, 0.7), valence=(0.3, 0.8), danceability=(0.3, 0.7), tempo=(70, 130),
        keywords=["memories", "vintage", "throwback", "classic", "timeless"],
    ),
})


def get_profile(emotion: str) -> MoodMusicProfile:
    try:
        return MOOD_PROFILES[emotion]
    except (KeyError, TypeError):
        raise UnknownMoodError(emotion) from None
