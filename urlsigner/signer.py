"""URL Signing Utility.

This module signs request URLs with a shared secret using HMAC-SHA1, the
scheme used by mapping APIs that accept a `signature` query parameter. The
signature covers the URL path and raw query; the secret itself never leaves
the caller.
"""

import base64
import binascii
import hashlib
import hmac
import logging
import re
import string
import urllib.parse
from dataclasses import dataclass
from typing import Self

from .exceptions import KeyDecodingError, URLParsingError

logger = logging.getLogger(__name__)

__all__ = [
    "SignableUrl",
    "UrlSigner",
    "decode_key",
    "sign_payload",
    "sign_url",
]

SIGNATURE_PARAM = "signature"

_URLSAFE_CHARS = frozenset(string.ascii_letters + string.digits + "-_=")
_HOST_CHARS = frozenset(string.ascii_letters + string.digits + "-._~!$&'()*+,;=:[]%")
_INVALID_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_key(key: str) -> bytes:
    """Decode a base64url encoded signing key.

    Args:
        key: The key using the URL-safe alphabet with standard padding.

    Returns:
        The raw key bytes.

    Raises:
        KeyDecodingError: If the key is empty, uses characters outside the
            URL-safe alphabet, or is not correctly padded.
    """
    # An empty secret is rejected like a missing one, not decoded to zero bytes
    if not key:
        raise KeyDecodingError("Key cannot be empty")
    for index, char in enumerate(key):
        if char not in _URLSAFE_CHARS:
            raise KeyDecodingError(
                f"Failed parsing key: invalid base64url character {char!r} at position {index}"
            )
    try:
        return base64.b64decode(key.encode("ascii"), altchars=b"-_", validate=True)
    except binascii.Error as err:
        raise KeyDecodingError(f"Failed parsing key: {err}") from err


def sign_payload(payload: bytes, key: bytes) -> str:
    """Return the base64url encoded HMAC-SHA1 of the payload."""
    digest = hmac.new(key, payload, hashlib.sha1).digest()
    return base64.urlsafe_b64encode(digest).decode("ascii")


@dataclass(frozen=True)
class SignableUrl:
    """A URL split into the parts that take part in signing."""

    scheme: str
    host: str
    path: str
    raw_query: str

    @classmethod
    def parse(cls, url: str) -> Self:
        """Parse a URL, keeping the path and query exactly as written.

        Percent escapes in the host and path must be `%` followed by two hex
        digits, and the host may only hold URL host characters.
        """
        if not url:
            raise URLParsingError("Failed parsing url: url cannot be empty")
        if any(ord(char) < 0x20 or ord(char) == 0x7F for char in url):
            raise URLParsingError(
                "Failed parsing url: invalid control character in url"
            )
        try:
            parts = urllib.parse.urlsplit(url)
            # Accessing the port validates it
            parts.port
        except ValueError as err:
            raise URLParsingError(f"Failed parsing url: {err}") from err

        # Userinfo is not part of the host
        host = parts.netloc.rpartition("@")[2]
        for char in host:
            if char not in _HOST_CHARS and ord(char) < 0x80:
                raise URLParsingError(
                    f"Failed parsing url: invalid character {char!r} in host name"
                )
        for name, value in (("host", host), ("path", parts.path)):
            if match := _INVALID_ESCAPE.search(value):
                raise URLParsingError(
                    f"Failed parsing url: invalid escape {value[match.start():match.start() + 3]!r} in {name}"
                )
        return cls(
            scheme=parts.scheme,
            host=host,
            path=parts.path,
            raw_query=parts.query,
        )

    def payload(self) -> str:
        """Return the canonical string covered by the signature.

        The `?` separator is always present, even when the query is empty.
        """
        return f"{self.path}?{self.raw_query}"

    def sign(self, key: bytes) -> str:
        """Generate the signature for this URL."""
        return sign_payload(self.payload().encode("utf-8"), key)

    def assemble(self, signature: str) -> str:
        """Return the URL with the signature parameter appended."""
        return (
            f"{self.scheme}://{self.host}{self.payload()}"
            f"&{SIGNATURE_PARAM}={signature}"
        )


class UrlSigner:
    """Helper for signing URLs with a shared secret."""

    def __init__(self, key: str) -> None:
        """Initialize with a signing key.

        Args:
            key: The base64url encoded secret used for HMAC generation.

        Raises:
            KeyDecodingError: If the key is not valid base64url.
        """
        self._key = decode_key(key)

    def sign(self, url: str) -> str:
        """Sign a URL and return it with the signature appended.

        Args:
            url: The URL to sign.

        Returns:
            The signed URL.

        Raises:
            URLParsingError: If the URL cannot be parsed.
        """
        signable = SignableUrl.parse(url)
        logger.debug("Signing url for host %s path %s", signable.host, signable.path)
        return signable.assemble(signable.sign(self._key))


def sign_url(url: str, key: str) -> str:
    """Sign a request URL with a URL signing secret.

    The key is decoded before the URL is parsed, so a bad key is reported
    first when both inputs are invalid.
    """
    return UrlSigner(key).sign(url)
