import pytest
import requests

from clients.errors import FeedError
from clients.voyager import DEFAULT_VOYAGER_API_URL, PAGE_SIZE, VoyagerClient
from conftest import make_event, make_response


def test_session_carries_auth_headers(session):
    VoyagerClient(api_key="secret", session=session)
    assert session.headers["x-api-key"] == "secret"
    assert session.headers["accept"] == "application/json"


def test_fetch_page_sends_query(session):
    body = {"items": [make_event(2).to_dict(), make_event(1).to_dict()], "lastPage": 4}
    session.get.return_value = make_response(body=body)
    client = VoyagerClient(api_key="secret", session=session, timeout=7)

    page = client.fetch_page("0xabc", 2)

    session.get.assert_called_once_with(
        DEFAULT_VOYAGER_API_URL,
        params={"ps": PAGE_SIZE, "p": 2, "contract": "0xabc"},
        timeout=7,
    )
    assert PAGE_SIZE == 10
    assert page.last_page == 4
    assert page.items == [make_event(2), make_event(1)]


def test_fetch_page_rejects_page_zero(session):
    client = VoyagerClient(api_key="secret", session=session)
    with pytest.raises(ValueError):
        client.fetch_page("0xabc", 0)
    session.get.assert_not_called()


def test_http_error_raises_feed_error(session):
    session.get.return_value = make_response(status_code=503)
    client = VoyagerClient(api_key="secret", session=session)

    with pytest.raises(FeedError) as exc_info:
        client.fetch_page("0xabc", 1)
    assert isinstance(exc_info.value.__cause__, requests.HTTPError)


def test_network_error_raises_feed_error(session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    client = VoyagerClient(api_key="secret", session=session)

    with pytest.raises(FeedError, match="page 1"):
        client.fetch_page("0xabc", 1)


def test_invalid_json_raises_feed_error(session):
    response = make_response()
    response.json.side_effect = ValueError("Expecting value")
    session.get.return_value = response
    client = VoyagerClient(api_key="secret", session=session)

    with pytest.raises(FeedError, match="invalid JSON"):
        client.fetch_page("0xabc", 1)


def test_malformed_payload_raises_feed_error(session):
    session.get.return_value = make_response(body={"items": [{"eventId": "0x1"}], "lastPage": 1})
    client = VoyagerClient(api_key="secret", session=session)

    with pytest.raises(FeedError):
        client.fetch_page("0xabc", 1)
