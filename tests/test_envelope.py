import json
from urllib.parse import parse_qs, urlsplit

import pytest

from pinterest_client import envelope


@pytest.mark.parametrize("encoded, fixed", [
    ("%28a%29", "(a)"),
    ("%7Euser", "~user"),
    ("App%28%29%3EPin%28id%3D%29", "App()%3EPin(id%3D)"),
])
def test_fix_encoding(encoded, fixed):
    assert envelope.fix_encoding(encoded) == fixed


def test_fix_encoding_is_idempotent():
    once = envelope.fix_encoding("%28x%29%7E%2528%20")
    assert once == "(x)~%2528%20"
    assert envelope.fix_encoding(once) == once


def test_encode_data_always_has_objects():
    assert envelope.encode_data() == '{"options":{},"context":{}}'
    assert json.loads(envelope.encode_data({"id": "1"})) == {"options": {"id": "1"}, "context": {}}


def test_build_query_encodes_every_value():
    query = envelope.build_query({"source_url": "/pin/1/", "description": "a b~(c)"})
    assert query == "source_url=%2Fpin%2F1%2F&description=a+b~(c)"


def test_login_request(config):
    request = envelope.login_request(config, "me@example.com", "s3cret")

    assert request.method == "POST"
    assert request.url == "https://www.pinterest.com/resource/UserSessionResource/create/"
    assert request.headers['X-CSRFToken'] == "1234"
    assert request.headers['Cookie'] == "csrftoken=1234;"
    assert request.headers['Referer'] == "https://www.pinterest.com/login/"

    fields = parse_qs(request.body)
    assert fields["source_url"] == ["/login/"]
    assert json.loads(fields["data"][0]) == {
        "options": {"username_or_email": "me@example.com", "password": "s3cret"},
        "context": {},
    }
    # module path parentheses go out literally
    assert "module_path=App()%3ELoginPage()" in request.body


def test_boards_request_is_a_get(config):
    request = envelope.boards_request(config)

    assert request.method == "GET"
    assert request.body is None
    assert 'X-CSRFToken' not in request.headers

    url = urlsplit(request.url)
    assert url.path == "/resource/BoardPickerBoardsResource/get/"
    fields = parse_qs(url.query, keep_blank_values=True)
    assert fields["pinFave"] == ["1"]
    assert fields["description"] == [""]
    assert json.loads(fields["data"][0])["options"] == {"filter": "all", "field_set_key": "board_picker"}


def test_fixed_headers(config):
    headers = envelope.build_headers(config, referer="https://www.pinterest.com/", csrf_token="abc")

    assert headers['Content-Type'] == 'application/x-www-form-urlencoded; charset=UTF-8'
    assert headers['X-NEW-APP'] == '1'
    assert headers['X-APP-VERSION'] == config.app_version
    assert headers['X-CSRFToken'] == 'abc'
    assert 'Cookie' not in headers


def test_pin_request_double_encodes_description(config):
    request = envelope.pin_request(
        config, "tok",
        board_id="board123",
        pin_url="http://example.com/x",
        description="two words",
        image_url="http://img/1.jpg",
    )

    fields = parse_qs(request.body)
    assert fields["source_url"] == ["/pin/create/bookmarklet/?url=http%3A%2F%2Fexample.com%2Fx"]
    assert fields["description"] == ["two+words"]
    options = json.loads(fields["data"][0])["options"]
    assert options == {
        "board_id": "board123",
        "description": "two words",
        "link": "http://example.com/x",
        "image_url": "http://img/1.jpg",
        "method": "bookmarklet",
        "is_video": None,
    }
    assert fields["module_path"][0].startswith("App")
    assert "PinBookmarklet" in fields["module_path"][0]


def test_repin_request(config):
    pin_url = "https://www.pinterest.com/pin/12345/"
    request = envelope.repin_request(
        config, "tok", board_id="b1", pin_id="12345",
        pin_url=pin_url, link="http://source/", description="hi",
    )

    assert request.url.endswith("/resource/RepinResource/create/")
    assert request.headers['Referer'] == pin_url
    fields = parse_qs(request.body)
    assert fields["source_url"] == ["/pin/12345/"]
    assert json.loads(fields["data"][0])["options"]["pin_id"] == "12345"


def test_delete_request(config):
    request = envelope.delete_pin_request(config, "tok", "999")

    assert request.url.endswith("/resource/PinResource/delete/")
    assert request.headers['Referer'] == "https://www.pinterest.com/pin/999/"
    assert json.loads(parse_qs(request.body)["data"][0]) == {"options": {"id": "999"}, "context": {}}


def test_builder_follows_config_base_url():
    from pinterest_client import ClientConfig

    config = ClientConfig(base_url="http://stub.local:8080")
    assert envelope.delete_pin_request(config, None, "1").url == "http://stub.local:8080/resource/PinResource/delete/"
