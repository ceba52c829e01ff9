import pytest

from mood_playlist import create_app
from mood_playlist.src.config import Config
from mood_playlist.src.errors import ExternalServiceError
from mood_playlist.src.models import MoodAnalysis
from mood_playlist.src.providers.base import ProviderClient
from mood_playlist.src.services.base import ServiceProvider


def make_track(i, **extra):
    track = {
        "id": f"t{i}",
        "name": f"Track {i}",
        "artists": [{"id": f"a{i}", "name": f"Artist {i}"}],
        "album": {"id": f"al{i}", "name": f"Album {i}", "images": []},
        "duration_ms": 180000,
        "preview_url": None,
        "external_urls": {"spotify": f"https://open.spotify.com/track/t{i}"},
    }
    track.update(extra)
    return track


class FakeCatalog(ServiceProvider):
    name = "fake"

    def __init__(self, genres=None, tracks=None, features=None, search_results=None, failing_queries=()):
        self.genres = genres or []
        self.tracks = tracks or []
        self.features = features or {}
        self.search_results = search_results or {}
        self.failing_queries = set(failing_queries)
        self.calls = []

    def available_genres(self, access_token):
        self.calls.append(("available_genres",))
        return list(self.genres)

    def recommendations(self, access_token, seed_genres, target_features, limit=20):
        self.calls.append(("recommendations", list(seed_genres), dict(target_features), limit))
        return list(self.tracks)

    def audio_features(self, access_token, track_ids):
        self.calls.append(("audio_features", list(track_ids)))
        return [self.features.get(tid) for tid in track_ids]

    def search_tracks(self, access_token, query, limit=50):
        self.calls.append(("search_tracks", query, limit))
        if query in self.failing_queries:
            raise ExternalServiceError("search_tracks", "boom", status_code=503)
        return list(self.search_results.get(query, []))[:limit]


class FakeProvider(ProviderClient):
    name = "fake"

    def __init__(self, fail_add=False):
        self.fail_add = fail_add
        self.calls = []

    def current_user(self, access_token):
        self.calls.append(("current_user",))
        return {"id": "user-1", "display_name": "User"}

    def create_playlist(self, access_token, user_id, title, description, public=False):
        self.calls.append(("create_playlist", user_id, title, description, public))
        return {
            "id": "pl-1",
            "name": title,
            "description": description,
            "external_urls": {"spotify": "https://open.spotify.com/playlist/pl-1"},
        }

    def add_tracks(self, access_token, playlist_id, uris):
        self.calls.append(("add_tracks", playlist_id, list(uris)))
        if self.fail_add:
            raise ExternalServiceError("add_tracks", "Spotify error 500", status_code=500)

    def make_deeplink(self, playlist_id):
        return f"https://open.spotify.com/playlist/{playlist_id}"

    def track_uri(self, track_id):
        return f"spotify:track:{track_id}"


@pytest.fixture
def happy_analysis():
    return MoodAnalysis(
        primary_emotion="happy",
        emotions={"happy": 0.7, "sad": 0.0, "energetic": 0.2, "calm": 0.05, "anxious": 0.0, "nostalgic": 0.05},
        confidence=0.9,
        raw_text="I feel amazing today!",
    )


class TestingConfig(Config):
    TESTING = True
    DEBUG = False


@pytest.fixture
def app():
    return create_app(TestingConfig)


@pytest.fixture
def client(app):
    return app.test_client()
