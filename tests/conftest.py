import pytest
from unittest.mock import Mock

import requests

from clients.models import Event
from storage.event_store import EventStore


def make_event(n: int, **extra) -> Event:
    """Event number n sits in block 100 + n, so higher n means more recent."""
    return Event(
        event_id=f"0x{n:04x}_0",
        block_number=100 + n,
        transaction_hash=f"0xtx{n}",
        name="Swap",
        timestamp=1_700_000_000 + n,
        extra=extra,
    )


def make_response(status_code: int = 200, body=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.json.return_value = body
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture()
def event_store(tmp_path):
    store = EventStore.open(str(tmp_path / "events.db"))
    yield store
    store.close()


@pytest.fixture()
def session():
    fake = Mock(spec=requests.Session)
    fake.headers = {}
    return fake
