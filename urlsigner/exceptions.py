"""Exceptions raised by the URL signer."""


class UrlSignerException(Exception):
    """Base exception for URL signing errors."""


class KeyDecodingError(UrlSignerException):
    """The signing key is not valid base64url."""


class URLParsingError(UrlSignerException):
    """The URL to sign could not be parsed."""


class ConfigError(UrlSignerException):
    """The signer configuration could not be loaded."""
