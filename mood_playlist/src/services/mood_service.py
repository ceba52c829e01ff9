"""Clasificación de emociones de un texto libre.

Camino principal: modelo de lenguaje de OpenAI con respuesta JSON. Camino de
respaldo (``keyword_analysis``): conteo de palabras clave, usado cuando no hay
API key o cuando la respuesta del modelo falla o no valida.
"""

import json
import logging
from typing import Any, Dict, Optional

from openai import OpenAI

from ..config import Config
from ..models import EMOTIONS, MoodAnalysis

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are an expert emotion analysis AI. Respond only with valid JSON objects for mood analysis."

USER_PROMPT = """
Analyze the emotional content of the following text and return a JSON response with mood analysis.

Text: "{text}"

Please respond with ONLY a valid JSON object in this exact format:
{{
  "primaryEmotion": "one of: happy, sad, energetic, calm, anxious, nostalgic",
  "emotions": {{
    "happy": 0.0-1.0,
    "sad": 0.0-1.0,
    "energetic": 0.0-1.0,
    "calm": 0.0-1.0,
    "anxious": 0.0-1.0,
    "nostalgic": 0.0-1.0
  }},
  "confidence": 0.0-1.0
}}

Rules:
- All emotion scores should sum to approximately 1.0
- primaryEmotion should be the highest scoring emotion
- confidence represents how clear the emotional signal is (0.1-1.0)
- Consider context, word choice, and overall sentiment
"""

FALLBACK_KEYWORDS: Dict[str, list] = {
    "happy": ["happy", "joy", "excited", "great", "awesome", "love", "wonderful"],
    "sad": ["sad", "down", "depressed", "upset", "hurt", "cry", "lonely"],
    "energetic": ["energetic", "pump", "dance", "party", "active", "workout"],
    "calm": ["calm", "peaceful", "relax", "quiet", "meditate", "serene"],
    "anxious": ["anxious", "worried", "stress", "nervous", "panic", "fear"],
    "nostalgic": ["remember", "past", "nostalgic", "memories", "old", "miss"],
}


def keyword_analysis(text: str) -> MoodAnalysis:
    lower = text.lower()
    scores = {
        emotion: sum(1 for kw in words if kw in lower) / len(words)
        for emotion, words in FALLBACK_KEYWORDS.items()
    }
    total = sum(scores.values())
    if total > 0:
        scores = {k: v / total for k, v in scores.items()}
    else:
        scores["calm"] = 1.0

    primary = EMOTIONS[0]
    for emotion in EMOTIONS:
        if scores[emotion] >= scores[primary]:
            primary = emotion

    return MoodAnalysis(
        primary_emotion=primary,
        emotions=scores,
        confidence=min(total, 0.8) if total > 0 else 0.3,
        raw_text=text,
    )


class MoodService:
    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        self.model = model or Config.OPENAI_MODEL
        if client is None and Config.OPENAI_API_KEY:
            client = OpenAI(api_key=Config.OPENAI_API_KEY, timeout=Config.HTTP_TIMEOUT)
        self.client = client

    def analyze(self, text: str) -> MoodAnalysis:
        if self.client is None:
            logger.info("OPENAI_API_KEY no configurada; usando análisis por keywords")
            return keyword_analysis(text)
        try:
            return self._llm_analysis(text)
        except Exception as exc:
            logger.warning("Análisis con LLM falló (%s); usando análisis por keywords", exc)
            return keyword_analysis(text)

    def _llm_analysis(self, text: str) -> MoodAnalysis:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": USER_PROMPT.format(text=text)},
            ],
            response_format={"type": "json_object"},
            temperature=0.3,
            max_tokens=300,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise ValueError("No response from OpenAI")
        data = json.loads(content)
        data["rawText"] = text
        return MoodAnalysis.from_dict(data, strict=True)
