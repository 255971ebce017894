import requests
from typing import Optional

from clients.errors import FeedError
from clients.models import EventPage

DEFAULT_VOYAGER_API_URL = "https://sepolia-api.voyager.online/beta/events"
PAGE_SIZE = 10


class VoyagerClient:
    """Reads the Voyager events feed one page at a time."""

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_VOYAGER_API_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "accept": "application/json",
            "x-api-key": api_key,
        })

    def fetch_page(self, contract: str, page: int) -> EventPage:
        """Fetch one page (1-indexed) of events emitted by the contract."""
        if page < 1:
            raise ValueError(f"Page numbers start at 1, got {page}")

        params = {
            "ps": PAGE_SIZE,
            "p": page,
            "contract": contract,
        }
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.RequestException as e:
            raise FeedError(f"Failed to fetch page {page} from Voyager: {e}") from e
        except ValueError as e:
            raise FeedError(f"Voyager returned invalid JSON for page {page}: {e}") from e

        return EventPage.from_api(body)
