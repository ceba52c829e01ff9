"""Errores tipados del generador de playlists.

Cada error lleva un ``code`` estable que las rutas devuelven al cliente en
lugar de depender del texto del mensaje.
"""

from typing import Optional


class MoodPlaylistError(Exception):
    code = "mood_playlist_error"


class UnknownMoodError(MoodPlaylistError):
    code = "unknown_mood"

    def __init__(self, emotion: str):
        super().__init__(f"Unknown mood: {emotion}")
        self.emotion = emotion


class NoCandidatesError(MoodPlaylistError):
    code = "no_candidates"

    def __init__(self, message: str = "No tracks found for the given mood"):
        super().__init__(message)


class ExternalServiceError(MoodPlaylistError):
    code = "external_service"

    def __init__(self, operation: str, message: str, status_code: Optional[int] = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.status_code = status_code


class PartialPlaylistError(ExternalServiceError):
    """La playlist se creó pero no se pudieron agregar las pistas (sin rollback)."""

    code = "partial_playlist"

    def __init__(self, playlist_id: str, cause: ExternalServiceError):
        super().__init__(cause.operation, str(cause), status_code=cause.status_code)
        self.playlist_id = playlist_id
