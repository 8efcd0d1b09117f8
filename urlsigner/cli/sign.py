"""Sign CLI command."""

import logging
import sys

from urlsigner.config import SignerConfig
from urlsigner.exceptions import UrlSignerException
from urlsigner.signer import UrlSigner

_LOGGER = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Setup logging configuration."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    if verbose:
        logging.getLogger("urlsigner").setLevel(logging.DEBUG)


def sign(url: str, key: str | None = None, config_dir: str | None = None) -> str:
    """Sign a URL with the given key, falling back to the configured key."""
    if key:
        signer = UrlSigner(key)
    else:
        _LOGGER.debug("No key given, loading key from configuration")
        signer = SignerConfig.load(config_dir).signer()
    return signer.sign(url)


def subcommand_sign(args) -> None:
    """Handler for sign subcommand."""
    setup_logging(args.verbose)
    try:
        signed_url = sign(args.url, args.key, args.config_dir)
    except UrlSignerException as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
    print(signed_url)


def add_parser(subparsers):
    parser_sign = subparsers.add_parser(
        "sign", help="append an HMAC-SHA1 signature to a URL"
    )
    parser_sign.add_argument("url", type=str, help="URL to sign")
    parser_sign.add_argument(
        "--key",
        type=str,
        default=None,
        help="base64url signing key (default: URLSIGNER_KEY or config.yaml)",
    )
    parser_sign.add_argument(
        "--config-dir",
        type=str,
        default=None,
        help="directory containing config.yaml (default: URLSIGNER_CONFIG_DIR or ./config)",
    )
    parser_sign.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging"
    )
    parser_sign.set_defaults(func=subcommand_sign)
