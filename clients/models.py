from dataclasses import dataclass, field
from typing import Any, Dict, List

from clients.errors import FeedError

# Wire name -> attribute name for the fixed part of a Voyager event
CORE_FIELDS = {
    "eventId": "event_id",
    "blockNumber": "block_number",
    "transactionHash": "transaction_hash",
    "name": "name",
    "timestamp": "timestamp",
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class Event:
    """One contract event as reported by Voyager.

    Any field beyond the core five is kept in ``extra``, in the order it was
    received, and written back out next to the core fields.
    """
    event_id: str
    block_number: int
    transaction_hash: str
    name: str
    timestamp: int
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, item: Any) -> "Event":
        """Build an Event from a feed item, rejecting malformed ones"""
        if not isinstance(item, dict):
            raise FeedError(f"Event item must be an object, got {type(item).__name__}")

        missing = [key for key in CORE_FIELDS if key not in item]
        if missing:
            raise FeedError(f"Event item is missing fields: {', '.join(missing)}")

        for key in ("eventId", "transactionHash", "name"):
            if not isinstance(item[key], str):
                raise FeedError(f"Event field '{key}' must be a string, got {item[key]!r}")
        for key in ("blockNumber", "timestamp"):
            if not _is_int(item[key]):
                raise FeedError(f"Event field '{key}' must be an integer, got {item[key]!r}")
        if item["blockNumber"] < 0:
            raise FeedError(f"Event field 'blockNumber' must not be negative, got {item['blockNumber']}")

        extra = {key: value for key, value in item.items() if key not in CORE_FIELDS}
        return cls(
            event_id=item["eventId"],
            block_number=item["blockNumber"],
            transaction_hash=item["transactionHash"],
            name=item["name"],
            timestamp=item["timestamp"],
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Wire representation: core fields first, then the extra fields"""
        data = {wire: getattr(self, attr) for wire, attr in CORE_FIELDS.items()}
        data.update(self.extra)
        return data


@dataclass
class EventPage:
    """A single page of the Voyager event feed."""
    items: List[Event]
    last_page: int

    @classmethod
    def from_api(cls, body: Any) -> "EventPage":
        if not isinstance(body, dict):
            raise FeedError(f"Feed response must be an object, got {type(body).__name__}")

        items = body.get("items")
        if not isinstance(items, list):
            raise FeedError("Feed response has no 'items' list")

        last_page = body.get("lastPage")
        if not _is_int(last_page):
            raise FeedError(f"Feed response 'lastPage' must be an integer, got {last_page!r}")

        return cls(items=[Event.from_api(item) for item in items], last_page=last_page)
