from typing import List, Dict, Any

from ..errors import ExternalServiceError
from ..services.http import call_spotify
from .base import ProviderClient

ADD_TRACKS_BATCH = 100


class SpotifyProvider(ProviderClient):
    name = "spotify"

    def current_user(self, access_token: str) -> Dict[str, Any]:
        data = call_spotify("current_user", "GET", "/me", access_token)
        if not data.get("id"):
            raise ExternalServiceError("current_user", "No se pudo determinar el user_id de Spotify")
        return data

    def create_playlist(self, access_token: str, user_id: str, title: str, description: str, public: bool = False) -> Dict[str, Any]:
        data = call_spotify(
            "create_playlist",
            "POST",
            f"/users/{user_id}/playlists",
            access_token,
            json={"name": title, "description": description, "public": public},
        )
        if not data.get("id"):
            raise ExternalServiceError("create_playlist", "No se pudo obtener ID de playlist del proveedor")
        return data

    def add_tracks(self, access_token: str, playlist_id: str, uris: List[str]) -> None:
        for i in range(0, len(uris), ADD_TRACKS_BATCH):
            call_spotify(
                "add_tracks",
                "POST",
                f"/playlists/{playlist_id}/tracks",
                access_token,
                json={"uris": uris[i:i + ADD_TRACKS_BATCH]},
            )

    def make_deeplink(self, playlist_id: str) -> str:
        return f"https://open.spotify.com/playlist/{playlist_id}"

    def track_uri(self, track_id: str) -> str:
        return f"spotify:track:{track_id}"
