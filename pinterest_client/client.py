"""
Pinterest client
Logs in through the site's resource protocol and creates, repins and deletes pins
"""

import base64
import io
import logging

from PIL import Image, UnidentifiedImageError

from . import envelope, scraper
from .config import ClientConfig
from .cookies import CookieStore
from .errors import ErrorCode, Failure, Success, TransportError
from .interpreter import Operation, interpret
from .transport import Transport

logger = logging.getLogger(__name__)


def detect_content_type(image_bytes):
    """MIME type of an image, sniffed from its bytes; None if Pillow can't read it"""
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            image_format = img.format
    except (UnidentifiedImageError, OSError):
        return None
    return Image.MIME.get(image_format)


class PinterestClient:
    """
    One logged-in (or not yet logged-in) Pinterest account.

    All state that must survive between calls lives in the cookie store file;
    give each client its own file and use it from one thread at a time.

    Pin draft fields (pin_url, pin_description, pin_image_preview) are set by
    the caller before generate_image_preview() and pin().
    """

    def __init__(self, cookie_path=None, config=None, transport=None):
        """
        Create a client

        Args:
            cookie_path (str, optional): cookie store to use; if the file already
                exists the client assumes it holds a live session. Without a
                path a temporary store is created.
            config (ClientConfig, optional): header bundle and transport options
            transport (Transport, optional): replaces the default requests transport
        """
        self.config = config or ClientConfig()
        self.transport = transport or Transport(self.config)
        self.store = CookieStore.open(cookie_path)

        self.csrf_token = None
        self._logged_in = False

        self.pin_url = ""
        self.pin_description = ""
        self.pin_image_preview = ""

        self.boards = {}
        self.last_pin_id = 0

        if self.store.loaded:
            # Existing store: assume the session in it is still good
            self.csrf_token = self.store.csrf_token()
            self._logged_in = True
            logger.info("Resuming session from %s", self.store.path)

            result = self.get_boards()
            if not result.ok:
                logger.warning("Board refresh failed while resuming session: %s", result.code.name)

    @property
    def is_logged_in(self):
        return self._logged_in

    @property
    def cookie_path(self):
        return self.store.path

    def close(self):
        if self.transport is not None:
            self.transport.close()
            self.transport = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    def _call(self, request, operation):
        """Send a built request and interpret the reply"""
        if self.transport is None:
            return Failure(ErrorCode.NO_TRANSPORT)

        try:
            raw = self.transport.send(request, self.store)
        except TransportError as e:
            logger.warning("%s: %s", operation.value, e)
            raw = b""

        return interpret(raw, operation)

    def login(self, username, password):
        """
        Log into Pinterest using the cookie store tied to this client

        Returns:
            Success(None), or Failure(INVALID_LOGIN) if the reply was not JSON.
            Any failure leaves the client logged out.
        """
        result = self._call(envelope.login_request(self.config, username, password), Operation.LOGIN)

        if not result.ok:
            self._logged_in = False
            return result

        self.csrf_token = self.store.csrf_token()
        self._logged_in = True
        logger.info("Logged in as %s", username)

        boards = self.get_boards()
        if not boards.ok:
            logger.warning("Board refresh after login failed: %s", boards.code.name)

        return Success(None)

    def get_boards(self):
        """
        Fetch the account's boards and replace self.boards with them

        Returns:
            Success(dict of board name to board id) or a Failure
        """
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        result = self._call(envelope.boards_request(self.config), Operation.BOARDS)
        if result.ok:
            self.boards = dict(result.value)
            logger.info("Fetched %d boards", len(self.boards))
        return result

    def get_account_name(self):
        """Get the logged-in account's username"""
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        return self._call(envelope.account_name_request(self.config), Operation.ACCOUNT_NAME)

    def generate_image_preview(self, image_bytes):
        """
        Upload an image and have Pinterest host a preview of it

        Needs pin_url and pin_description to be set. On success the hosted URL
        is returned and also stored in pin_image_preview.

        Args:
            image_bytes (bytes): raw image file contents

        Returns:
            Success(preview URL) or a Failure
        """
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        if not self.pin_url:
            return Failure(ErrorCode.MISSING_PIN_URL)

        if not self.pin_description:
            return Failure(ErrorCode.MISSING_PIN_DESCRIPTION)

        if not image_bytes:
            return Failure(ErrorCode.IMAGE_DOESNT_EXIST)

        content_type = detect_content_type(image_bytes)
        if content_type is None:
            logger.warning("Image preview: could not identify image data")
            return Failure(ErrorCode.IMAGE_DOESNT_EXIST)

        request = envelope.image_preview_request(
            self.config,
            self.csrf_token,
            pin_url=self.pin_url,
            description=self.pin_description,
            content_type=content_type,
            base64_payload=base64.b64encode(image_bytes).decode('ascii'),
        )
        result = self._call(request, Operation.IMAGE_PREVIEW)
        if result.ok:
            self.pin_image_preview = result.value
        return result

    def pin(self, board_id):
        """
        Submit the pin to a board

        A pin_url pointing at an existing pin's page is a repin and is handed
        to repin(); otherwise pin_image_preview and pin_description must be set.

        Returns:
            Success(new pin id) or a Failure
        """
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        if not self.pin_url:
            return Failure(ErrorCode.MISSING_PIN_URL)

        if scraper.is_repin_url(self.pin_url):
            return self.repin(board_id)

        if not self.pin_image_preview:
            return Failure(ErrorCode.MISSING_PIN_IMAGE_PREVIEW)

        if not self.pin_description:
            return Failure(ErrorCode.MISSING_PIN_DESCRIPTION)

        request = envelope.pin_request(
            self.config,
            self.csrf_token,
            board_id=board_id,
            pin_url=self.pin_url,
            description=self.pin_description,
            image_url=self.pin_image_preview,
        )
        return self._record_pin(self._call(request, Operation.PIN))

    def repin(self, board_id):
        """
        Repin the existing pin at pin_url onto a board

        The original link, and the description unless pin_description is set,
        are read from the public pin page.

        Returns:
            Success(new pin id) or a Failure
        """
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        pin_id = scraper.extract_pin_id(self.pin_url)
        if pin_id is None:
            return Failure(ErrorCode.BAD_REPIN_URL)

        page = scraper.fetch_pin_page(self.pin_url, self.config)
        if page is None:
            return Failure(ErrorCode.REPIN_URL_NOT_FOUND)

        link = scraper.extract_source_link(page) or ""
        if self.pin_description:
            description = self.pin_description
        else:
            description = scraper.extract_description(page) or ""

        request = envelope.repin_request(
            self.config,
            self.csrf_token,
            board_id=board_id,
            pin_id=pin_id,
            pin_url=self.pin_url,
            link=scraper.strip_slashes(link),
            description=scraper.strip_slashes(description),
        )
        return self._record_pin(self._call(request, Operation.REPIN))

    def _record_pin(self, result):
        if result.ok:
            self.last_pin_id = result.value
            logger.info("Created pin %s", result.value)
        else:
            self.last_pin_id = 0
        return result

    def delete_pin(self, pin_id):
        """Delete a pin; any JSON reply counts as success"""
        if not self._logged_in:
            return Failure(ErrorCode.NOT_LOGGED_IN)

        return self._call(envelope.delete_pin_request(self.config, self.csrf_token, pin_id), Operation.DELETE)
