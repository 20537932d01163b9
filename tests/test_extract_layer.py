"""
Test Extract Layer - Single GET with timeouts, errors logged not raised

The HTTP session is mocked; no test touches the network.
"""

from unittest.mock import MagicMock, Mock, PropertyMock

import pytest
import requests

from quakereport.coreutils.errors import MalformedInput, NetworkFailure, UnexpectedStatus
from quakereport.coreutils.request import (
    CONNECT_TIMEOUT_MS,
    READ_TIMEOUT_MS,
    get_text,
    new_session,
    timeouts_in_seconds,
    validate_url,
)
from quakereport.extract.usgs_api import (
    DEFAULT_REQUEST_URL,
    USGSAPIClient,
    build_query_url,
)

URL = "https://earthquake.usgs.gov/fdsnws/event/1/query?format=geojson&limit=1"


def _response(status_code: int = 200, content: bytes = b"") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.content = content
    response.__enter__.return_value = response
    response.__exit__.return_value = False
    return response


def _session(response=None, side_effect=None) -> Mock:
    session = Mock(spec=requests.Session)
    session.get.return_value = response
    session.get.side_effect = side_effect
    return session


def test_default_request_url():
    assert DEFAULT_REQUEST_URL == (
        "https://earthquake.usgs.gov/fdsnws/event/1/query"
        "?format=geojson&orderby=time&minmag=6&limit=10"
    )


def test_build_query_url_options():
    url = build_query_url(min_magnitude=4.5, limit=25, order_by="magnitude")

    assert url.endswith("?format=geojson&orderby=magnitude&minmag=4.5&limit=25")


def test_fetch_returns_body_on_200():
    response = _response(200, '{"features": []}'.encode("utf-8"))
    client = USGSAPIClient(session=_session(response))

    assert client.fetch(URL) == '{"features": []}'


def test_fetch_decodes_utf8():
    body = '{"place": "45 km NNE of Ōfunato, Japan"}'
    client = USGSAPIClient(session=_session(_response(200, body.encode("utf-8"))))

    assert client.fetch(URL) == body


def test_fetch_uses_connect_and_read_timeouts():
    session = _session(_response(200, b"{}"))
    client = USGSAPIClient(session=session)

    client.fetch(URL)

    session.get.assert_called_once()
    _, kwargs = session.get.call_args
    assert kwargs["timeout"] == (15.0, 10.0)
    assert kwargs["stream"] is True
    assert timeouts_in_seconds(CONNECT_TIMEOUT_MS, READ_TIMEOUT_MS) == (15.0, 10.0)


def test_non_200_returns_empty_text_and_logs(caplog):
    """A 404 yields empty text and an UnexpectedStatus(404) log line"""
    response = _response(404, b"Not Found")
    client = USGSAPIClient(session=_session(response))

    result = client.fetch_result(URL)

    assert result.text == ""
    assert isinstance(result.error, UnexpectedStatus)
    assert result.error.status_code == 404
    assert "UnexpectedStatus(404)" in caplog.text
    assert client.fetch(URL) == ""


def test_response_is_released_on_every_path():
    ok = _response(200, b"{}")
    USGSAPIClient(session=_session(ok)).fetch(URL)
    ok.__exit__.assert_called_once()

    failed = _response(500, b"")
    USGSAPIClient(session=_session(failed)).fetch(URL)
    failed.__exit__.assert_called_once()


@pytest.mark.parametrize(
    "url",
    [
        "earthquake.usgs.gov/fdsnws/event/1/query",
        "",
        "ftp://earthquake.usgs.gov/query",
        "https://",
    ],
)
def test_malformed_url_makes_no_request(url, caplog):
    session = _session(_response(200, b"{}"))
    client = USGSAPIClient(session=session)

    result = client.fetch_result(url)

    assert result.text == ""
    assert isinstance(result.error, MalformedInput)
    session.get.assert_not_called()


def test_validate_url_raises():
    with pytest.raises(MalformedInput):
        validate_url("no scheme here")

    assert validate_url(URL) == URL


@pytest.mark.parametrize(
    "error",
    [
        requests.exceptions.ConnectionError("connection refused"),
        requests.exceptions.ConnectTimeout("connect timed out"),
        requests.exceptions.ReadTimeout("read timed out"),
        requests.exceptions.ChunkedEncodingError("stream broke"),
    ],
)
def test_network_errors_become_network_failure(error, caplog):
    client = USGSAPIClient(session=_session(side_effect=error))

    result = client.fetch_result(URL)

    assert result.text == ""
    assert isinstance(result.error, NetworkFailure)
    assert result.error.cause is error
    assert "Error fetching earthquake data" in caplog.text


def test_get_text_raises_typed_errors():
    with pytest.raises(UnexpectedStatus):
        get_text(_session(_response(503)), URL)


def test_undecodable_bytes_become_replacement_characters():
    body = b'{"place": "10km SW of Test\xffville"}'

    text = get_text(_session(_response(200, body)), URL)

    assert text == '{"place": "10km SW of Test\ufffdville"}'


def test_response_is_released_when_body_read_fails():
    response = _response(200)
    type(response).content = PropertyMock(
        side_effect=requests.exceptions.ChunkedEncodingError("connection broken mid-body")
    )
    client = USGSAPIClient(session=_session(response))

    result = client.fetch_result(URL)

    assert result.text == ""
    assert isinstance(result.error, NetworkFailure)
    response.__exit__.assert_called_once()


def test_new_session_headers():
    session = new_session()
    try:
        assert session.headers["User-Agent"].startswith("quakereport/")
        assert session.headers["Accept"] == "application/json"
        assert session.get_adapter("https://earthquake.usgs.gov").max_retries.total == 0
    finally:
        session.close()


def test_client_closes_its_session():
    session = _session()
    with USGSAPIClient(session=session):
        pass

    session.close.assert_called_once()
