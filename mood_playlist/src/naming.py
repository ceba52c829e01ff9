"""Nombre y descripción de la playlist a partir del análisis de ánimo."""

import random
from datetime import date
from typing import Dict, List, Optional

from .models import MoodAnalysis
from .utils import truncate

PLAYLIST_NAMES: Dict[str, List[str]] = {
    "happy": ["Sunshine Vibes", "Feel Good Hits", "Happy Hour", "Positivity Playlist", "Joyful Jams"],
    "sad": ["Melancholy Moments", "Rainy Day Blues", "Heartbreak Hotel", "Emotional Journey", "Tears & Tunes"],
    "energetic": ["Power Hour", "Adrenaline Rush", "High Energy Hits", "Pump It Up", "Electric Vibes"],
    "calm": ["Peaceful Moments", "Zen Zone", "Tranquil Tunes", "Meditation Music", "Serenity Sounds"],
    "anxious": ["Restless Mind", "Anxious Energy", "Introspective Indie", "Uncertain Times", "Tension & Release"],
    "nostalgic": ["Memory Lane", "Throwback Therapy", "Vintage Vibes", "Golden Oldies", "Nostalgic Notes"],
}
DEFAULT_NAMES = ["Mixed Mood Music"]

MOOD_DESCRIPTIONS: Dict[str, str] = {
    "happy": "Uplifting tracks to keep your spirits high and energy positive.",
    "sad": "Contemplative songs that understand and embrace your current emotional state.",
    "energetic": "High-energy tracks to fuel your motivation and drive.",
    "calm": "Soothing melodies to help you relax and find inner peace.",
    "anxious": "Music that acknowledges restlessness while providing comfort.",
    "nostalgic": "Songs that capture the bittersweet beauty of memories and past times.",
}
DEFAULT_DESCRIPTION = "Curated tracks to match your current mood."

QUOTE_LIMIT = 100


def format_date(day: date) -> str:
    return f"{day.month}/{day.day}/{day.year}"


def generate_name(analysis: MoodAnalysis, rng: Optional[random.Random] = None, today: Optional[date] = None) -> str:
    rng = rng or random.Random()
    names = PLAYLIST_NAMES.get(analysis.primary_emotion, DEFAULT_NAMES)
    return f"{rng.choice(names)} - {format_date(today or date.today())}"


def generate_description(analysis: MoodAnalysis) -> str:
    quote = truncate(analysis.raw_text, QUOTE_LIMIT)
    mood_desc = MOOD_DESCRIPTIONS.get(analysis.primary_emotion, DEFAULT_DESCRIPTION)
    # redondeo half-up (round() de Python redondea 12.5 a 12)
    confidence = int(analysis.confidence * 100 + 0.5)
    return f'Generated based on your mood: "{quote}"\n\n{mood_desc}\n\nConfidence: {confidence}%'
