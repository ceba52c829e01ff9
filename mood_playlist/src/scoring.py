"""Cálculo de audio-features objetivo y puntaje de similitud por pista."""

import random
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .models import FeatureRange, MoodMusicProfile, ScoredTrack, TargetFeatures, Track

FEATURE_WEIGHTS: Dict[str, float] = {
    "energy": 0.3,
    "valence": 0.3,
    "danceability": 0.2,
    "tempo": 0.2,
}

# Piso de exigencia: aun con baja confianza el objetivo no es el rango completo
MIN_STRICTNESS = 0.3


def target_value(value_range: FeatureRange, strictness: float, rng: random.Random) -> float:
    low, high = value_range
    midpoint = (low + high) / 2
    variance = (high - low) * (1 - strictness) * 0.5
    if variance <= 0:
        return midpoint
    return max(low, min(high, midpoint + rng.uniform(-variance, variance)))


def compute_targets(profile: MoodMusicProfile, confidence: float, rng: Optional[random.Random] = None) -> TargetFeatures:
    """Valores objetivo por feature; con confianza 1.0 son exactamente los puntos medios."""
    rng = rng or random.Random()
    strictness = max(MIN_STRICTNESS, confidence)
    return {
        name: target_value(value_range, strictness, rng)
        for name, value_range in profile.audio_features.items()
    }


def _feature_score(name: str, actual: float, target: float) -> Optional[float]:
    diff = abs(actual - target)
    if name == "tempo":
        # BPM: error relativo, no absoluto
        if target <= 0:
            return None
        return max(0.0, 1 - diff / target)
    return max(0.0, 1 - diff)


def score_track(actual: Optional[Mapping[str, Any]], target: Mapping[str, Any]) -> float:
    if not actual:
        return 0.0
    total_score = 0.0
    total_weight = 0.0
    for name, weight in FEATURE_WEIGHTS.items():
        a = actual.get(name)
        t = target.get(name)
        if a is None or t is None:
            continue
        s = _feature_score(name, float(a), float(t))
        if s is None:
            continue
        total_score += s * weight
        total_weight += weight
    return total_score / total_weight if total_weight > 0 else 0.0


def rank_tracks(
    tracks: Sequence[Track],
    features: Sequence[Optional[Mapping[str, Any]]],
    target: TargetFeatures,
) -> List[ScoredTrack]:
    """Puntúa y ordena de mayor a menor; los empates conservan el orden de llegada.

    ``features`` está alineado por posición con ``tracks``; una pista sin
    features (o sin entrada) puntúa 0 y queda al final, pero no se descarta.
    """
    scored = []
    for i, track in enumerate(tracks):
        feats = features[i] if i < len(features) else None
        scored.append(ScoredTrack(track=track, score=score_track(feats, target)))
    return sorted(scored, key=lambda st: st.score, reverse=True)
