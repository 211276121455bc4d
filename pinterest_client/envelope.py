"""
Resource request builder
Assembles the form-encoded envelope and headers the pinterest.com front end
sends to /resource/<Name>Resource/<verb>/. Nothing here performs I/O.
"""

import json
from dataclasses import dataclass
from urllib.parse import quote_plus

from .cookies import CSRF_COOKIE_NAME

# The front end sends this before it knows the real token; the server
# accepts it on the login call only
PLACEHOLDER_CSRF_TOKEN = "1234"

BOOKMARKLET_SOURCE = "/pin/create/bookmarklet/?url="

LOGIN_MODULE_PATH = "App()>LoginPage()>Login()>Button(class_name=primary, text=Log In, type=submit, size=large)"
# Sent as the bare path; some bookmarklet builds put a literal "module_path=" in front of it
PIN_MODULE_PATH = (
    "App()>PinBookmarklet()>PinCreate()>PinForm(description=, default_board_id=null, "
    "show_cancel_button=true, cancel_text=Close, link=, show_uploader=false, image_url=, "
    "is_video=null, heading=Pick a board, pin_it_script_button=true)"
)
REPIN_MODULE_PATH = (
    "App()>Closeup(resource=PinResource(link_selection=true, fetch_visual_search_objects=true, id=))"
    ">PinActionBar(resource=PinResource(link_selection=true, fetch_visual_search_objects=true, id=))"
    ">ShowModalButton(module=PinCreate)#Modal(module=PinCreate(resource=PinResource(id=)))"
)
DELETE_MODULE_PATH = "Modal()>ConfirmDialog(template=delete_pin, ga_category=pin_delete)"


@dataclass(frozen=True)
class ResourceRequest:
    method: str
    url: str
    headers: dict
    body: str = None


def fix_encoding(text):
    """Put back the characters the front end's encoder leaves literal"""
    return text.replace("%28", "(").replace("%29", ")").replace("%7E", "~")


def encode(value):
    return quote_plus(str(value), safe="")


def encode_data(options=None, context=None):
    """
    Serialise the `data` field.

    Both `options` and `context` are always present and always JSON objects;
    the server rejects an empty context sent as an array.
    """
    payload = {
        "options": dict(options or {}),
        "context": dict(context or {}),
    }
    return json.dumps(payload, separators=(",", ":"))


def build_query(fields):
    """URL-encode every field value and join them as key=value pairs"""
    pairs = [f"{key}={encode(value)}" for key, value in fields.items()]
    return fix_encoding("&".join(pairs))


def bookmarklet_source(pin_url):
    return BOOKMARKLET_SOURCE + encode(pin_url)


def build_headers(config, referer, csrf_token=None, placeholder_cookie=False):
    """
    Build the fixed header set for a resource call.

    Args:
        config (ClientConfig): supplies the user agent, accept and app version values
        referer (str): page the front end would be on when making this call
        csrf_token (str, optional): sent as X-CSRFToken when given
        placeholder_cookie (bool): also send the placeholder token as a cookie (login only)
    """
    headers = {
        'User-Agent': config.user_agent,
        'Referer': referer,
        'Accept': config.accept,
        'Accept-Language': config.accept_language,
        'DNT': '1',
        'Content-Type': 'application/x-www-form-urlencoded; charset=UTF-8',
        'X-Pinterest-AppState': 'active',
        'X-NEW-APP': '1',
        'X-APP-VERSION': config.app_version,
        'X-Requested-With': 'XMLHttpRequest',
    }

    if csrf_token:
        headers['X-CSRFToken'] = csrf_token

    if placeholder_cookie:
        headers['Cookie'] = f"{CSRF_COOKIE_NAME}={PLACEHOLDER_CSRF_TOKEN};"

    return headers


def _get(url, fields, headers):
    return ResourceRequest("GET", f"{url}?{build_query(fields)}", headers)


def _post(url, fields, headers):
    return ResourceRequest("POST", url, headers, build_query(fields))


def login_request(config, username, password):
    fields = {
        "source_url": "/login/",
        "data": encode_data({"username_or_email": username, "password": password}),
        "module_path": LOGIN_MODULE_PATH,
    }
    headers = build_headers(
        config,
        referer=config.page_url("/login/"),
        csrf_token=PLACEHOLDER_CSRF_TOKEN,
        placeholder_cookie=True,
    )
    return _post(config.resource_url("UserSessionResource", "create"), fields, headers)


def boards_request(config):
    fields = {
        "source_url": BOOKMARKLET_SOURCE,
        "pinFave": "1",
        "description": "",
        "data": encode_data({"filter": "all", "field_set_key": "board_picker"}),
    }
    headers = build_headers(config, referer=config.page_url(BOOKMARKLET_SOURCE + "&pinFave=1&description="))
    return _get(config.resource_url("BoardPickerBoardsResource", "get"), fields, headers)


def account_name_request(config):
    # The home page itself; the username lives in its resource_data_cache
    return ResourceRequest("GET", config.page_url(), build_headers(config, referer=""))


def image_preview_request(config, csrf_token, pin_url, description, content_type, base64_payload):
    # description is encoded twice on purpose, as the bookmarklet does
    fields = {
        "source_url": bookmarklet_source(pin_url),
        "pinFave": "1",
        "description": encode(description),
        "data": encode_data({"content_type": content_type, "base64_payload": base64_payload}),
    }
    referer = config.page_url(
        f"{bookmarklet_source(pin_url)}&pinFave=1&description={encode(pin_url)}"
    )
    headers = build_headers(config, referer=referer, csrf_token=csrf_token)
    return _post(config.resource_url("ImagePreviewResource", "create"), fields, headers)


def pin_request(config, csrf_token, board_id, pin_url, description, image_url):
    options = {
        "board_id": board_id,
        "description": description,
        "link": pin_url,
        "image_url": image_url,
        "method": "bookmarklet",
        "is_video": None,
    }
    fields = {
        "source_url": bookmarklet_source(pin_url),
        "pinFave": "1",
        "description": encode(description),
        "data": encode_data(options),
        "module_path": encode(PIN_MODULE_PATH),
    }
    headers = build_headers(
        config,
        referer=config.page_url(BOOKMARKLET_SOURCE + "&pinFave=1&description="),
        csrf_token=csrf_token,
    )
    return _post(config.resource_url("PinResource", "create"), fields, headers)


def repin_request(config, csrf_token, board_id, pin_id, pin_url, link, description):
    options = {
        "board_id": board_id,
        "description": description,
        "link": link,
        "is_video": None,
        "pin_id": pin_id,
    }
    fields = {
        "source_url": f"/pin/{pin_id}/",
        "data": encode_data(options),
        "module_path": encode(REPIN_MODULE_PATH),
    }
    headers = build_headers(config, referer=pin_url, csrf_token=csrf_token)
    return _post(config.resource_url("RepinResource", "create"), fields, headers)


def delete_pin_request(config, csrf_token, pin_id):
    fields = {
        "source_url": f"/pin/{pin_id}/",
        "data": encode_data({"id": pin_id}),
        "module_path": encode(DELETE_MODULE_PATH),
    }
    headers = build_headers(config, referer=config.page_url(f"/pin/{pin_id}/"), csrf_token=csrf_token)
    return _post(config.resource_url("PinResource", "delete"), fields, headers)
