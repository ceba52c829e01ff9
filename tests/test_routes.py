import json
import random
from datetime import date
from unittest.mock import Mock

import pytest

from conftest import FakeCatalog, FakeProvider, make_track
from mood_playlist.routes import mood as mood_routes
from mood_playlist.routes import playlists as playlist_routes
from mood_playlist.routes import spotify as spotify_routes
from mood_playlist.src.config import Config
from mood_playlist.src.errors import ExternalServiceError
from mood_playlist.src.services.mood_service import MoodService
from mood_playlist.src.services.playlist_service import PlaylistService

AUTH = {"Authorization": "Bearer user-token"}

MOOD = {
    "primaryEmotion": "happy",
    "emotions": {"happy": 0.8, "sad": 0.0, "energetic": 0.1, "calm": 0.1, "anxious": 0.0, "nostalgic": 0.0},
    "confidence": 0.9,
    "rawText": "I feel amazing today!",
}


@pytest.fixture
def catalog():
    tracks = [make_track(i) for i in range(20)]
    features = {t["id"]: {"energy": 0.8, "valence": 0.8, "danceability": 0.7, "tempo": 130} for t in tracks}
    search = {
        "genre:upbeat OR upbeat": [make_track(i) for i in range(10)],
        "genre:positive OR positive": [make_track(i) for i in range(10, 20)],
    }
    return FakeCatalog(genres=["pop", "dance"], tracks=tracks, features=features, search_results=search)


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture(autouse=True)
def fake_services(monkeypatch, catalog, provider):
    monkeypatch.setattr(Config, "OPENAI_API_KEY", None)
    service = PlaylistService(catalog, provider, rng=random.Random(1), today=lambda: date(2024, 5, 4))
    monkeypatch.setattr(playlist_routes, "_playlist_service", lambda: service)
    monkeypatch.setattr(mood_routes, "_mood_service", lambda: MoodService(client=None))
    return service


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["status"] == "ok"
    assert data["supportedMoods"] == ["happy", "sad", "energetic", "calm", "anxious", "nostalgic"]


def test_unknown_route_returns_json_404(client):
    resp = client.get("/nope")
    assert resp.status_code == 404
    assert resp.get_json()["error"] == "Route not found"


class TestMoodRoutes:
    def test_analyze_uses_classifier(self, client):
        resp = client.post("/mood/analyze", json={"text": "  so peaceful and quiet  "})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["primaryEmotion"] == "calm"
        assert data["rawText"] == "so peaceful and quiet"

    @pytest.mark.parametrize("body", [{}, {"text": 5}, {"text": "   "}, {"text": "x" * 501}])
    def test_analyze_validates_text(self, client, body):
        assert client.post("/mood/analyze", json=body).status_code == 400

    def test_analyze_rejects_non_object_body(self, client):
        resp = client.post("/mood/analyze", json=["so peaceful"])
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_body"

    def test_emotion_profiles(self, client):
        data = client.get("/mood/emotions").get_json()
        assert set(data["items"]) == {"happy", "sad", "energetic", "calm", "anxious", "nostalgic"}
        happy = client.get("/mood/emotions/HAPPY").get_json()
        assert happy["profile"]["audioFeatures"]["tempo"] == {"min": 100, "max": 180}
        assert client.get("/mood/emotions/furious").status_code == 404


class TestPlaylistRoutes:
    def test_generate_requires_bearer_token(self, client, catalog):
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "u"})
        assert resp.status_code == 401
        assert catalog.calls == []

    def test_generate_creates_playlist(self, client, provider):
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "user-1"}, headers=AUTH)
        assert resp.status_code == 201
        data = resp.get_json()
        assert data["id"] == "pl-1"
        assert len(data["tracks"]) == 15
        assert data["name"].endswith(" - 5/4/2024")
        assert data["external_urls"]["spotify"] == "https://open.spotify.com/playlist/pl-1"
        assert provider.calls[0][1] == "user-1"

    @pytest.mark.parametrize("body", [
        {"userId": "u"},
        {"moodAnalysis": MOOD},
        {"moodAnalysis": dict(MOOD, rawText=""), "userId": "u"},
        {"moodAnalysis": dict(MOOD, confidence=3), "userId": "u"},
    ])
    def test_generate_validates_body(self, client, body):
        assert client.post("/playlist/generate", json=body, headers=AUTH).status_code == 400

    def test_non_finite_confidence_is_rejected_before_external_calls(self, client, catalog, provider):
        body = json.dumps({"moodAnalysis": MOOD, "userId": "u"}).replace("0.9", "NaN")
        resp = client.post("/playlist/generate", data=body, content_type="application/json", headers=AUTH)
        assert resp.status_code == 400
        assert catalog.calls == [] and provider.calls == []

    def test_pipeline_value_error_is_not_a_body_error(self, client, fake_services, monkeypatch):
        monkeypatch.setattr(fake_services, "generate_playlist", Mock(side_effect=ValueError("boom")))
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "u"}, headers=AUTH)
        assert resp.status_code == 500

    @pytest.mark.parametrize("path", ["/playlist/generate", "/playlist/preview"])
    def test_non_object_body_is_rejected(self, client, path):
        resp = client.post(path, json=[1], headers=AUTH)
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_body"

    def test_unknown_mood_is_unprocessable(self, client, catalog, provider):
        body = {"moodAnalysis": dict(MOOD, primaryEmotion="furious"), "userId": "u"}
        resp = client.post("/playlist/generate", json=body, headers=AUTH)
        assert resp.status_code == 422
        assert resp.get_json()["code"] == "unknown_mood"
        assert catalog.calls == [] and provider.calls == []

    def test_no_candidates_maps_to_404(self, client, catalog):
        catalog.tracks = []
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "u"}, headers=AUTH)
        assert resp.status_code == 404
        assert resp.get_json()["code"] == "no_candidates"

    def test_partial_playlist_reports_playlist_id(self, client, provider):
        provider.fail_add = True
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "u"}, headers=AUTH)
        assert resp.status_code == 502
        data = resp.get_json()
        assert data["code"] == "partial_playlist"
        assert data["playlist_id"] == "pl-1"

    def test_external_failure_maps_to_502(self, client, catalog):
        catalog.recommendations = Mock(side_effect=ExternalServiceError("recommendations", "Spotify error 503", 503))
        resp = client.post("/playlist/generate", json={"moodAnalysis": MOOD, "userId": "u"}, headers=AUTH)
        assert resp.status_code == 502
        assert resp.get_json()["code"] == "external_service"

    def test_preview_returns_first_fifteen(self, client):
        resp = client.post("/playlist/preview", json={"moodAnalysis": MOOD}, headers=AUTH)
        assert resp.status_code == 200
        data = resp.get_json()
        assert len(data["tracks"]) == 15
        assert data["mood"] == "happy"
        assert data["confidence"] == 0.9


class TestSpotifyRoutes:
    @pytest.fixture(autouse=True)
    def oauth(self, monkeypatch):
        oauth = Mock()
        oauth.redirect_uri = "http://localhost/cb"
        oauth.authorize_url.return_value = ("https://accounts.spotify.com/authorize?x=1", "verifier-1")
        oauth.exchange_code.return_value = {"access_token": "at", "refresh_token": "rt", "expires_in": 3600}
        oauth.refresh.return_value = {"access_token": "at2", "token_type": "Bearer", "expires_in": 3600}
        monkeypatch.setattr(spotify_routes, "_oauth", lambda: oauth)
        monkeypatch.setattr(spotify_routes, "SpotifyProvider", lambda: FakeProvider())
        spotify_routes.PKCE_STORE.clear()
        return oauth

    def test_auth_then_callback(self, client, oauth):
        resp = client.get("/spotify/auth")
        assert resp.status_code == 200
        state = resp.get_json()["state"]
        assert resp.get_json()["authorize_url"].startswith("https://accounts.spotify.com/authorize")

        resp = client.post("/spotify/callback", json={"code": "c0de", "state": state})
        assert resp.status_code == 200
        data = resp.get_json()
        assert data["tokens"]["access_token"] == "at"
        assert data["user"]["id"] == "user-1"
        oauth.exchange_code.assert_called_once_with("c0de", "verifier-1", redirect_uri=None)

        # el state se consume una sola vez
        assert client.post("/spotify/callback", json={"code": "c0de", "state": state}).status_code == 400

    def test_callback_rejects_unknown_state(self, client):
        resp = client.post("/spotify/callback", json={"code": "c", "state": "forged"})
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_state"

    def test_refresh(self, client, oauth):
        assert client.post("/spotify/refresh", json={}).status_code == 400
        resp = client.post("/spotify/refresh", json={"refresh_token": "rt"})
        assert resp.status_code == 200
        assert resp.get_json()["access_token"] == "at2"

    @pytest.mark.parametrize("path", ["/spotify/callback", "/spotify/refresh"])
    def test_non_object_body_is_rejected(self, client, path):
        assert client.post(path, json=["rt"]).status_code == 400

    def test_refresh_upstream_failure(self, client, oauth):
        oauth.refresh.side_effect = ExternalServiceError("refresh_token", "invalid_grant", 400)
        resp = client.post("/spotify/refresh", json={"refresh_token": "rt"})
        assert resp.status_code == 502

    def test_user_and_genres_require_token(self, client):
        assert client.get("/spotify/user").status_code == 401
        assert client.get("/spotify/genres").status_code == 401
        assert client.get("/spotify/user", headers=AUTH).get_json()["id"] == "user-1"
