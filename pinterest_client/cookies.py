"""
Persistent cookie store
Netscape-format cookie file shared by every call a client makes
"""

import logging
import os
import tempfile
from http.cookiejar import Cookie, LoadError, MozillaCookieJar

logger = logging.getLogger(__name__)

CSRF_COOKIE_NAME = "csrftoken"


def _cookie_lines(path):
    """
    Yield the seven fields of every cookie line in the file: domain,
    subdomain flag, path, secure flag, expiry, name, value.
    """
    with open(path, 'r', encoding='utf-8', errors='replace') as f:
        for line in f:
            line = line.strip()

            # Skip blank and comment lines
            if not line or line.startswith('#'):
                continue

            fields = line.split('\t')
            if len(fields) < 7:
                continue

            yield fields[:7]


def read_csrf_token(path):
    """
    Get the CSRF token from the given cookie file.

    Returns the value of the first csrftoken entry, or None if the file or
    the entry is missing.
    """
    if not path or not os.path.exists(path):
        return None

    for fields in _cookie_lines(path):
        if fields[5] == CSRF_COOKIE_NAME:
            return fields[6]

    return None


def _to_cookie(fields):
    domain, subdomains, path, secure, expires, name, value = fields
    # curl writes 0 for session cookies
    expires = int(expires) if expires.isdigit() and int(expires) > 0 else None
    return Cookie(
        version=0, name=name, value=value,
        port=None, port_specified=False,
        domain=domain, domain_specified=subdomains.upper() == "TRUE",
        domain_initial_dot=domain.startswith('.'),
        path=path, path_specified=True,
        secure=secure.upper() == "TRUE",
        expires=expires, discard=expires is None,
        comment=None, comment_url=None, rest={},
    )


def _load_headerless(jar, path):
    """Fill the jar from a cookie file written without the Netscape header line"""
    count = 0
    for fields in _cookie_lines(path):
        jar.set_cookie(_to_cookie(fields))
        count += 1
    return count


class CookieStore:
    """
    A MozillaCookieJar bound to a file on disk.

    The jar is handed to requests as the session cookie jar, so cookies the
    server sets land here and are written back by save().
    """

    def __init__(self, path, jar, loaded):
        self.path = path
        self.jar = jar
        self.loaded = loaded

    @classmethod
    def open(cls, path=None):
        """
        Open the cookie store at path, or create a temporary one.

        Returns:
            CookieStore: ``loaded`` tells whether an existing file could be
            read as a cookie jar
        """
        if not path:
            fd, path = tempfile.mkstemp(prefix="cookies")
            os.close(fd)
            logger.debug("Created temporary cookie store %s", path)
            return cls(path, MozillaCookieJar(path), loaded=False)

        jar = MozillaCookieJar(path)
        if not os.path.exists(path):
            return cls(path, jar, loaded=False)

        try:
            jar.load(ignore_discard=True, ignore_expires=True)
        except LoadError:
            # Plain seven-field lines with no header, as curl and hand-written stores have
            jar = MozillaCookieJar(path)
            if not _load_headerless(jar, path):
                logger.warning("Cookie store %s has no cookie lines", path)
                return cls(path, MozillaCookieJar(path), loaded=False)
        except OSError as e:
            logger.warning("Cookie store %s is unreadable: %s", path, e)
            return cls(path, MozillaCookieJar(path), loaded=False)

        return cls(path, jar, loaded=True)

    def csrf_token(self):
        return read_csrf_token(self.path)

    def save(self):
        try:
            self.jar.save(ignore_discard=True, ignore_expires=True)
        except OSError as e:
            logger.warning("Could not write cookie store %s: %s", self.path, e)
