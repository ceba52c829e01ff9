from datetime import datetime, timezone

from flask import Blueprint, jsonify
from ..src.config import Config
from ..src.models import EMOTIONS


bp = Blueprint("health", __name__)


@bp.get("/health")
def health():
    return jsonify({
        "status": "ok",
        "service": "mood_playlist",
        "debug": Config.DEBUG,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "supportedMoods": list(EMOTIONS),
    }), 200
