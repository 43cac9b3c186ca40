"""
Cache-busting helpers: inject a per-request token into the query string so
CDN/proxy caches always forward the request to the origin.
"""
import random
import urllib.parse
from typing import Callable

from core import constants
from core.exceptions import FetchFailedException

TokenGenerator = Callable[[], str]


def random_token() -> str:
    return str(random.randrange(constants.CACHE_BUST_TOKEN_MAX))


def with_cache_buster(
    address: str, token: str, param: str = constants.DEFAULT_CACHE_BUST_PARAM
) -> str:
    """
    Returns `address` with `param=token` appended to its query string.
    The existing query text is kept byte for byte, except for an earlier
    `param` pair which is replaced. The fragment is kept.

    Raises:
        FetchFailedException: address cannot be parsed as a URL
    """
    try:
        parsed = urllib.parse.urlsplit(address)
    except ValueError as e:
        raise FetchFailedException(f"Invalid address: {e}", {"url": address}) from e

    name = urllib.parse.quote(param, safe="")
    pairs = [p for p in parsed.query.split("&") if p and p.split("=", 1)[0] != name]
    pairs.append(f"{name}={urllib.parse.quote(token, safe='')}")
    return urllib.parse.urlunsplit(parsed._replace(query="&".join(pairs)))
