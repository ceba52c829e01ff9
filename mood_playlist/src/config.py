import os
from dotenv import load_dotenv


class Config:
    load_dotenv()

    DEBUG = os.getenv("DEBUG", "true").lower() == "true"
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")
    MAX_CONTENT_LENGTH = int(os.getenv("MAX_CONTENT_LENGTH", str(10 * 1024 * 1024)))

    # Spotify (tokens de usuario llegan por header; esto es solo para OAuth)
    SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
    SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
    SPOTIFY_MARKET = os.getenv("SPOTIFY_MARKET", "US")
    SPOTIFY_AUTH_REDIRECT_URI = os.getenv("SPOTIFY_AUTH_REDIRECT_URI")
    SPOTIFY_AUTH_SCOPES = os.getenv(
        "SPOTIFY_AUTH_SCOPES",
        "user-read-private user-read-email playlist-modify-public playlist-modify-private",
    )

    # Clasificador de emociones (OpenAI); sin key se usa el fallback por keywords
    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-3.5-turbo")
    MAX_MOOD_TEXT_LENGTH = int(os.getenv("MAX_MOOD_TEXT_LENGTH", "500"))

    # Llamadas HTTP salientes
    HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "20"))
    HTTP_MAX_RETRIES = int(os.getenv("HTTP_MAX_RETRIES", "3"))  # reintentos extra tras el primer intento

    # Generación de playlists
    PLAYLIST_LENGTH = int(os.getenv("PLAYLIST_LENGTH", "15"))
    CANDIDATE_POOL = int(os.getenv("CANDIDATE_POOL", "30"))
    DEFAULT_GENRE = os.getenv("DEFAULT_GENRE", "pop")
