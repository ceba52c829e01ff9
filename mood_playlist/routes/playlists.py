from flask import Blueprint, jsonify

from ..src.errors import MoodPlaylistError
from ..src.models import MoodAnalysis
from ..src.providers.spotify import SpotifyProvider
from ..src.services.playlist_service import PlaylistService
from ..src.services.spotify_service import SpotifyService
from .common import bearer_token, error_response, invalid_body_response, json_body, missing_token_response


bp = Blueprint("playlists", __name__)

PREVIEW_LIMIT = 15


def _playlist_service() -> PlaylistService:
    return PlaylistService(SpotifyService(), SpotifyProvider())


@bp.post("/generate")
def generate_playlist():
    """Genera la playlist para el análisis de ánimo y la crea en la cuenta del usuario.

    Body: { moodAnalysis: {...}, userId: str }
    """
    token = bearer_token()
    if not token:
        return missing_token_response()
    p = json_body()
    if p is None:
        return invalid_body_response()
    user_id = p.get("userId")
    if not p.get("moodAnalysis"):
        return jsonify({"error": "Mood analysis data is required"}), 400
    if not user_id:
        return jsonify({"error": "User ID is required"}), 400
    try:
        analysis = MoodAnalysis.from_dict(p.get("moodAnalysis"))
    except ValueError as ve:
        return jsonify({"error": f"Invalid mood analysis data structure: {ve}"}), 400

    try:
        playlist = _playlist_service().generate_playlist(analysis, token, user_id)
    except MoodPlaylistError as exc:
        return error_response(exc, "Failed to generate playlist")
    return jsonify(playlist.to_dict()), 201


@bp.post("/preview")
def preview_playlist():
    """Sugerencias por búsqueda de texto, sin crear la playlist.

    Body: { moodAnalysis: {...} }
    """
    token = bearer_token()
    if not token:
        return missing_token_response()
    p = json_body()
    if p is None:
        return invalid_body_response()
    if not p.get("moodAnalysis"):
        return jsonify({"error": "Mood analysis data is required"}), 400
    try:
        analysis = MoodAnalysis.from_dict(p.get("moodAnalysis"))
    except ValueError as ve:
        return jsonify({"error": f"Invalid mood analysis data structure: {ve}"}), 400

    try:
        tracks = _playlist_service().search_by_mood_keywords(analysis, token)
    except MoodPlaylistError as exc:
        return error_response(exc, "Failed to generate playlist preview")
    return jsonify({
        "tracks": tracks[:PREVIEW_LIMIT],
        "mood": analysis.primary_emotion,
        "confidence": analysis.confidence,
    }), 200
