"""Modelos de datos del generador: análisis de ánimo, perfiles y playlists."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

EMOTIONS: Tuple[str, ...] = ("happy", "sad", "energetic", "calm", "anxious", "nostalgic")

# Pista tal cual la devuelve el catálogo (id, name, artists, album, ...)
Track = Dict[str, Any]
FeatureRange = Tuple[float, float]
TargetFeatures = Dict[str, float]


def _unit_score(value: Any, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{label} debe ser numérico")
    if not math.isfinite(value) or value < 0 or value > 1:
        raise ValueError(f"{label} fuera de rango [0, 1]")
    return float(value)


@dataclass(frozen=True)
class MoodMusicProfile:
    genres: Tuple[str, ...]
    audio_features: Mapping[str, FeatureRange]
    keywords: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "genres": list(self.genres),
            "audioFeatures": {k: {"min": lo, "max": hi} for k, (lo, hi) in self.audio_features.items()},
            "keywords": list(self.keywords),
        }


@dataclass
class MoodAnalysis:
    primary_emotion: str
    emotions: Dict[str, float]
    confidence: float
    raw_text: str

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], strict: bool = False) -> "MoodAnalysis":
        """Construye desde el JSON camelCase del frontend.

        ``strict`` exige que ``primaryEmotion`` sea una de las seis categorías
        y que estén los seis puntajes (lo usa el clasificador). Sin ``strict``
        se acepta cualquier emoción: el generador decide qué hacer con ella.
        """
        if not isinstance(data, dict):
            raise ValueError("moodAnalysis requerido")
        primary = data.get("primaryEmotion")
        emotions = data.get("emotions")
        raw_text = data.get("rawText")
        if not primary or not isinstance(primary, str):
            raise ValueError("primaryEmotion requerido")
        if not isinstance(emotions, dict):
            raise ValueError("emotions requerido")
        if not isinstance(raw_text, str) or not raw_text:
            raise ValueError("rawText requerido")
        if strict and primary not in EMOTIONS:
            raise ValueError("Invalid primaryEmotion")

        scores: Dict[str, float] = {}
        for emotion in EMOTIONS:
            if emotion not in emotions:
                if strict:
                    raise ValueError(f"Invalid emotion score for {emotion}")
                continue
            scores[emotion] = _unit_score(emotions[emotion], f"emotions.{emotion}")

        confidence = _unit_score(data.get("confidence"), "confidence")
        return cls(primary_emotion=primary, emotions=scores, confidence=confidence, raw_text=raw_text)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primaryEmotion": self.primary_emotion,
            "emotions": dict(self.emotions),
            "confidence": self.confidence,
            "rawText": self.raw_text,
        }


@dataclass
class ScoredTrack:
    track: Track
    score: float


@dataclass
class GeneratedPlaylist:
    id: str
    name: str
    description: str
    tracks: List[Track] = field(default_factory=list)
    external_url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "tracks": self.tracks,
            "external_urls": {"spotify": self.external_url},
        }
