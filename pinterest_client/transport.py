"""
HTTP transport for resource calls
Sends ResourceRequests through requests, with the cookie store as the session jar
"""

import logging

import requests
import urllib3

from .errors import TransportError

logger = logging.getLogger(__name__)


class Transport:
    def __init__(self, config):
        """
        Initialize the transport

        Args:
            config (ClientConfig): timeout and TLS verification settings
        """
        self.config = config
        self.session = requests.Session()

        if not config.verify_tls:
            logger.warning(
                "TLS certificate verification is DISABLED for %s; "
                "responses can be forged by anyone on the network path",
                config.base_url,
            )
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

    def send(self, request, store):
        """
        Perform one HTTP call and return the raw response body

        Cookies are read from and written to ``store``, which is saved to disk
        after the call whether or not it succeeded.

        Raises:
            TransportError: if the request could not be completed
        """
        self.session.cookies = store.jar
        logger.debug("%s %s", request.method, request.url.split('?', 1)[0])

        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=request.headers,
                data=request.body,
                timeout=self.config.timeout,
                verify=self.config.verify_tls,
            )
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{request.method} {request.url.split('?', 1)[0]} failed: {e}") from e
        finally:
            store.save()

        if response.status_code != 200:
            logger.warning("%s returned status %s", request.url.split('?', 1)[0], response.status_code)

        return response.content

    def close(self):
        self.session.close()
