from unittest.mock import MagicMock, patch

import pytest
import requests

from fetcher import MAX_REDIRECTS, FetchError, TooManyRedirectsError, fetch, read_url


def _resp(status: int = 200, text: str = "", location: str | None = None) -> MagicMock:
    """Return a mock requests.Response."""
    mock = MagicMock()
    mock.status_code = status
    mock.ok = status < 400
    mock.text = text
    mock.headers = {"Location": location} if location else {}
    return mock


def test_read_url_returns_body_without_redirects() -> None:
    with patch("fetcher.requests.get", return_value=_resp(text="hello")) as mock_get:
        assert read_url("https://example.org/a") == "hello"

    assert mock_get.call_count == 1
    assert mock_get.call_args.kwargs["allow_redirects"] is False


def test_read_url_follows_max_redirects() -> None:
    """A chain of exactly MAX_REDIRECTS redirects still resolves."""
    chain = [
        _resp(302, location=f"https://mirror{i}.example.org/p") for i in range(MAX_REDIRECTS)
    ] + [_resp(text="final body")]

    with patch("fetcher.requests.get", side_effect=chain) as mock_get:
        assert read_url("https://example.org/start") == "final body"

    assert mock_get.call_count == MAX_REDIRECTS + 1
    assert mock_get.call_args.args[0] == f"https://mirror{MAX_REDIRECTS - 1}.example.org/p"


def test_read_url_fails_past_redirect_bound() -> None:
    chain = [_resp(302, location="https://example.org/loop")] * (MAX_REDIRECTS + 1)

    with patch("fetcher.requests.get", side_effect=chain), pytest.raises(TooManyRedirectsError):
        read_url("https://example.org/loop")


@pytest.mark.parametrize("status", [301, 303, 307, 308])
def test_other_redirect_statuses_are_followed(status: int) -> None:
    chain = [_resp(status, location="https://other.example.org/x"), _resp(text="ok")]

    with patch("fetcher.requests.get", side_effect=chain):
        assert read_url("https://example.org/x") == "ok"


def test_relative_location_resolved_against_current_url() -> None:
    chain = [_resp(302, location="/papers/42"), _resp(text="ok")]

    with patch("fetcher.requests.get", side_effect=chain) as mock_get:
        read_url("https://example.org/list/index.html")

    assert mock_get.call_args_list[1].args[0] == "https://example.org/papers/42"


def test_redirect_without_location_raises() -> None:
    with patch("fetcher.requests.get", return_value=_resp(302)), pytest.raises(FetchError):
        read_url("https://example.org/broken")


def test_terminal_error_status_body_is_returned() -> None:
    """Non-redirect statuses are terminal; the caller decides what they mean."""
    with patch("fetcher.requests.get", return_value=_resp(404, text="Not found")):
        response = fetch("https://example.org/missing")

    assert response.status_code == 404
    assert response.text == "Not found"


def test_headers_and_timeout_are_sent_on_every_hop() -> None:
    chain = [_resp(302, location="https://b.example.org/"), _resp(text="ok")]
    headers = {"Accept": "text/bibliography; style=mla"}

    with patch("fetcher.requests.get", side_effect=chain) as mock_get:
        read_url("https://a.example.org/", headers=headers, timeout=5)

    for call in mock_get.call_args_list:
        assert call.kwargs["headers"] == headers
        assert call.kwargs["timeout"] == 5


def test_connection_error_propagates() -> None:
    with patch("fetcher.requests.get", side_effect=requests.ConnectionError("down")), \
         pytest.raises(requests.ConnectionError):
        read_url("https://example.org/")
