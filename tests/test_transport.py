import logging

import pytest
import requests
import responses

from pinterest_client import ClientConfig, TransportError, read_csrf_token
from pinterest_client.cookies import CookieStore
from pinterest_client.envelope import ResourceRequest
from pinterest_client.transport import Transport

URL = "https://www.pinterest.com/resource/PinResource/delete/"


def post(body="x=1"):
    return ResourceRequest("POST", URL, {"X-Test": "1"}, body)


def test_send_returns_body_and_sends_stored_cookies(mocked, config, cookie_file):
    mocked.add(responses.POST, URL, body=b'{"ok": 1}')
    transport = Transport(config)

    raw = transport.send(post(), CookieStore.open(cookie_file))

    assert raw == b'{"ok": 1}'
    request = mocked.calls[0].request
    assert request.body == "x=1"
    assert "csrftoken=token123" in request.headers["Cookie"]


def test_received_cookies_are_persisted(mocked, config, tmp_path):
    path = str(tmp_path / "cookies.txt")
    mocked.add(responses.POST, URL, body="{}", headers={"Set-Cookie": "csrftoken=fresh; Path=/"})

    Transport(config).send(post(), CookieStore.open(path))

    assert read_csrf_token(path) == "fresh"


def test_non_200_still_returns_body(mocked, config, tmp_path):
    mocked.add(responses.POST, URL, body="denied", status=403)
    assert Transport(config).send(post(), CookieStore.open(str(tmp_path / "c.txt"))) == b"denied"


def test_connection_failure_raises_transport_error(mocked, config, tmp_path):
    mocked.add(responses.POST, URL, body=requests.exceptions.ConnectionError("refused"))
    with pytest.raises(TransportError):
        Transport(config).send(post(), CookieStore.open(str(tmp_path / "c.txt")))


def test_disabled_tls_verification_is_loud(caplog):
    with caplog.at_level(logging.WARNING, logger="pinterest_client.transport"):
        Transport(ClientConfig(verify_tls=False))
    assert "DISABLED" in caplog.text


def test_tls_verification_on_by_default(caplog):
    with caplog.at_level(logging.WARNING, logger="pinterest_client.transport"):
        Transport(ClientConfig())
    assert caplog.text == ""
