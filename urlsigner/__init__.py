"""Sign request URLs with a shared HMAC-SHA1 secret."""

from .config import SignerConfig
from .exceptions import (
    ConfigError,
    KeyDecodingError,
    URLParsingError,
    UrlSignerException,
)
from .signer import SignableUrl, UrlSigner, decode_key, sign_payload, sign_url

__all__ = [
    "ConfigError",
    "KeyDecodingError",
    "SignableUrl",
    "SignerConfig",
    "URLParsingError",
    "UrlSigner",
    "UrlSignerException",
    "decode_key",
    "sign_payload",
    "sign_url",
]
