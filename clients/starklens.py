import requests
from typing import List, Optional

from clients.errors import ForwardError
from clients.models import Event

DEFAULT_STARKLENS_API_URL = "https://starklens.vercel.app/api/indexer"


class StarklensClient:
    def __init__(
        self,
        base_url: str = DEFAULT_STARKLENS_API_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def send(self, events: List[Event]):
        """Post a batch of events to the Starklens indexer in a single request."""
        if not events:
            raise ValueError("No events provided to send")

        payload = {"items": [event.to_dict() for event in events]}
        try:
            response = self.session.post(self.base_url, json=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ForwardError(f"Failed to send {len(events)} events to Starklens: {e}") from e

        print(f"Successfully sent {len(events)} events to Starklens API")
