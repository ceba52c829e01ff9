from flask import Blueprint, jsonify

from ..src.config import Config
from ..src.emotions import MOOD_PROFILES, get_profile
from ..src.errors import UnknownMoodError
from ..src.services.mood_service import MoodService
from .common import invalid_body_response, json_body


bp = Blueprint("mood", __name__)


def _mood_service() -> MoodService:
    return MoodService()


@bp.post("/analyze")
def analyze_mood():
    """Clasifica el texto libre del usuario.

    Body: { text: str }
    Respuesta: { primaryEmotion, emotions, confidence, rawText }
    """
    p = json_body()
    if p is None:
        return invalid_body_response()
    text = p.get("text")
    if not text or not isinstance(text, str):
        return jsonify({"error": "Text input is required and must be a string"}), 400
    text = text.strip()
    if not text:
        return jsonify({"error": "Text input cannot be empty"}), 400
    if len(text) > Config.MAX_MOOD_TEXT_LENGTH:
        return jsonify({"error": f"Text input must be less than {Config.MAX_MOOD_TEXT_LENGTH} characters"}), 400

    analysis = _mood_service().analyze(text)
    return jsonify(analysis.to_dict()), 200


@bp.get("/emotions")
def list_emotions():
    return jsonify({"items": {name: profile.to_dict() for name, profile in MOOD_PROFILES.items()}}), 200


@bp.get("/emotions/<emotion>")
def emotion_profile(emotion: str):
    try:
        profile = get_profile(emotion.lower())
    except UnknownMoodError as exc:
        return jsonify({"error": "emoción no soportada", "code": exc.code}), 404
    return jsonify({"emotion": emotion.lower(), "profile": profile.to_dict()}), 200
