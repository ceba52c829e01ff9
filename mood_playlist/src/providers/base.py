from typing import List, Dict, Any


class ProviderClient:
    name = "base"

    def current_user(self, access_token: str) -> Dict[str, Any]:
        raise NotImplementedError

    def create_playlist(self, access_token: str, user_id: str, title: str, description: str, public: bool = False) -> Dict[str, Any]:
        raise NotImplementedError

    def add_tracks(self, access_token: str, playlist_id: str, uris: List[str]) -> None:
        raise NotImplementedError

    def make_deeplink(self, playlist_id: str) -> str:
        raise NotImplementedError

    def track_uri(self, track_id: str) -> str:
        raise NotImplementedError
