"""
CompetitionSuite catalog API client.

One client is created per run; it exchanges the client credentials for a bearer
token once and uses it for every catalog read in that run.
"""

import requests

from rosters import config


class CatalogError(RuntimeError):
    """Raised when the catalog API cannot be reached or returns an error."""


class CatalogClient:
    def __init__(self, settings, token=None):
        self.settings = settings
        self.base_url = settings.api_base_url.rstrip("/")
        self._token = token

    @classmethod
    def connect(cls, settings):
        """Create a client and fetch its access token."""
        client = cls(settings)
        client.authenticate()
        return client

    def authenticate(self):
        """Get an access token using the Client Credentials flow."""
        try:
            resp = requests.post(
                self.settings.token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self.settings.client_id,
                    "client_secret": self.settings.client_secret,
                },
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=config.API_TIMEOUT,
            )
            resp.raise_for_status()
            token = resp.json().get("access_token")
        except (requests.RequestException, ValueError) as e:
            raise CatalogError(f"Token request failed: {e}") from e

        if not token:
            raise CatalogError("Token response did not include an access_token")
        self._token = token
        return token

    @property
    def headers(self):
        if not self._token:
            raise CatalogError("Client is not authenticated")
        return {"Authorization": f"Bearer {self._token}"}

    def _get(self, path, params=None):
        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            resp = requests.get(url, headers=self.headers, params=params, timeout=config.API_TIMEOUT)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            raise CatalogError(f"GET {path} failed ({e.response.status_code})") from e
        except (requests.RequestException, ValueError) as e:
            raise CatalogError(f"GET {path} failed: {e}") from e

    def _get_list(self, path, params=None):
        payload = self._get(path, params=params)
        data = payload.get("data") if isinstance(payload, dict) else None
        return data if isinstance(data, list) else []

    def list_seasons(self):
        """Return all seasons, most recent first (season names sort chronologically)."""
        seasons = self._get_list("seasons")
        return sorted(seasons, key=lambda s: s.get("name") or "", reverse=True)

    def get_most_recent_season(self):
        seasons = self.list_seasons()
        if not seasons:
            raise CatalogError("No seasons returned by the catalog API")
        return seasons[0]

    def get_season(self, season_id):
        return self._get(f"seasons/{season_id}")

    def list_events(self, season_id):
        return self._get_list("events", params={"seasonId": season_id})

    def get_event(self, event_id):
        return self._get(f"events/{event_id}")

    def list_groups(self, season_id):
        return self._get_list("groups", params={"seasonId": season_id})
