"""
Public pin page scraper
Reads metadata from https://www.pinterest.com/pin/<id>/ pages without a session
"""

import html
import logging
import re

import requests

from .config import ClientConfig
from .errors import ErrorCode, Failure, Success

logger = logging.getLogger(__name__)

PIN_URL_PATTERN = re.compile(r"https?://(?:www\.|)pinterest\.com/pin/(\d+)")


def _meta_pattern(field):
    # Not anchored to tag boundaries: on a malformed page this can match
    # across unrelated markup. Kept lenient since the live page format varies.
    field = re.escape(field)
    return re.compile(f'meta property="{field}" name="{field}" content="(.*?)" data-app')


META_FIELDS = {
    "preview_image": _meta_pattern("og:image"),
    "description": _meta_pattern("og:description"),
    "image_url": _meta_pattern("twitter:image:src"),
    "pinner": _meta_pattern("pinterestapp:pinner"),
    "source_link": _meta_pattern("og:see_also"),
}


def is_repin_url(url):
    """Does the URL point at an existing pin's detail page?"""
    return bool(url) and PIN_URL_PATTERN.search(url) is not None


def extract_pin_id(url):
    match = PIN_URL_PATTERN.search(url or "")
    return match.group(1) if match else None


def strip_slashes(text):
    """Undo backslash escaping: \\x becomes x, \\\\ becomes \\"""
    return re.sub(r"\\(.?)", r"\1", text)


def fetch_pin_page(pin_url, config=None):
    """
    Fetch a public pin page

    Returns:
        str: the page body, or None if it could not be fetched
    """
    config = config or ClientConfig()
    headers = {
        'User-Agent': config.user_agent,
        'Accept': config.page_accept,
        'Accept-Language': config.accept_language,
    }

    try:
        response = requests.get(
            pin_url.strip(),
            headers=headers,
            cookies=None,  # public page, never the logged-in session
            timeout=config.timeout,
            verify=config.verify_tls,
        )
    except requests.exceptions.RequestException as e:
        logger.warning("Pin page fetch error for %s: %s", pin_url, e)
        return None

    if response.status_code != 200:
        logger.warning("Pin page %s returned status %s", pin_url, response.status_code)
        return None

    if not response.text:
        return None

    return response.text


def _extract(page, field):
    match = META_FIELDS[field].search(page)
    return match.group(1) if match else None


def extract_preview_image(page):
    return _extract(page, "preview_image")


def extract_description(page):
    description = _extract(page, "description")
    if description is None:
        return None
    # Named and numeric (&#8217;) entities both decode to UTF-8 text
    return html.unescape(description)


def extract_image_url(page):
    return _extract(page, "image_url")


def extract_pinner(page, base_url="https://www.pinterest.com"):
    pinner = _extract(page, "pinner")
    if pinner is None:
        return None
    return pinner.replace(base_url.rstrip("/") + "/", "").rstrip("/")


def extract_source_link(page):
    return _extract(page, "source_link")


def _scrape(pin_url, extractor, config):
    if not is_repin_url(pin_url):
        return Failure(ErrorCode.BAD_REPIN_URL)

    page = fetch_pin_page(pin_url, config)
    if page is None:
        return Failure(ErrorCode.REPIN_URL_NOT_FOUND)

    return Success(extractor(page))


def get_pin_preview_url(pin_url, config=None):
    """Get a pin's preview image (og:image); Success(None) if the page has none"""
    return _scrape(pin_url, extract_preview_image, config)


def get_pin_description(pin_url, config=None):
    """Get a pin's description with HTML entities decoded"""
    return _scrape(pin_url, extract_description, config)


def get_pin_image_url(pin_url, config=None):
    """Get a pin's full image URL (twitter:image:src)"""
    return _scrape(pin_url, extract_image_url, config)


def get_pin_pinner(pin_url, config=None):
    """Get the handle of the account that pinned it"""
    base_url = (config or ClientConfig()).base_url
    return _scrape(pin_url, lambda page: extract_pinner(page, base_url), config)
