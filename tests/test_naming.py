import random
from datetime import date

from mood_playlist.src.models import MoodAnalysis
from mood_playlist.src.naming import DEFAULT_DESCRIPTION, PLAYLIST_NAMES, generate_description, generate_name


def _analysis(emotion="sad", text="rainy afternoon", confidence=0.42):
    return MoodAnalysis(primary_emotion=emotion, emotions={}, confidence=confidence, raw_text=text)


def test_name_uses_template_and_date():
    name = generate_name(_analysis(), random.Random(0), date(2025, 12, 1))
    template, day = name.split(" - ")
    assert template in PLAYLIST_NAMES["sad"]
    assert day == "12/1/2025"


def test_every_emotion_has_five_templates():
    assert all(len(names) == 5 for names in PLAYLIST_NAMES.values())


def test_unknown_emotion_gets_generic_name_and_description():
    analysis = _analysis(emotion="furious")
    assert generate_name(analysis, random.Random(0), date(2025, 1, 2)) == "Mixed Mood Music - 1/2/2025"
    assert DEFAULT_DESCRIPTION in generate_description(analysis)


def test_description_layout():
    assert generate_description(_analysis()) == (
        'Generated based on your mood: "rainy afternoon"\n\n'
        "Contemplative songs that understand and embrace your current emotional state.\n\n"
        "Confidence: 42%"
    )


def test_long_text_is_truncated_with_ellipsis():
    text = "x" * 150
    description = generate_description(_analysis(text=text))
    assert f'"{"x" * 100}..."' in description


def test_text_of_exactly_one_hundred_chars_is_not_truncated():
    text = "y" * 100
    assert f'"{text}"' in generate_description(_analysis(text=text))


def test_confidence_rounds_half_up():
    assert generate_description(_analysis(confidence=0.125)).endswith("Confidence: 13%")
