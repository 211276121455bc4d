import json

import pytest
import responses

from pinterest_client import ClientConfig, PinterestClient

BASE = "https://www.pinterest.com"
BOARDS_URL = f"{BASE}/resource/BoardPickerBoardsResource/get/"

# Far-future expiry so the jar keeps sending the cookies
COOKIE_FILE = (
    "# Netscape HTTP Cookie File\n"
    "\n"
    ".pinterest.com\tTRUE\t/\tFALSE\t4102444800\t_pinterest_sess\tsess123\n"
    ".pinterest.com\tTRUE\t/\tFALSE\t4102444800\tcsrftoken\ttoken123\n"
)


def boards_body(*pairs):
    boards = [{"name": name, "id": board_id} for name, board_id in pairs]
    return json.dumps({"resource_response": {"data": {"all_boards": boards}}})


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


@pytest.fixture
def config():
    return ClientConfig()


@pytest.fixture
def cookie_file(tmp_path):
    path = tmp_path / "cookies.txt"
    path.write_text(COOKIE_FILE)
    return str(path)


@pytest.fixture
def client(mocked, cookie_file, config):
    """A client resumed from an existing cookie store, boards already fetched"""
    mocked.add(responses.GET, BOARDS_URL, body=boards_body(("Recipes", "111"), ("Travel", "222")))
    c = PinterestClient(cookie_file, config=config)
    mocked.calls.reset()
    yield c
    c.close()


@pytest.fixture
def anonymous(mocked, tmp_path, config):
    """A client with no session; its cookie file does not exist yet"""
    c = PinterestClient(str(tmp_path / "new-cookies.txt"), config=config)
    yield c
    c.close()
