"""Per-URL predicates applied to the links of a results page.

Each check is a for-all property: a results page satisfies it only when every
extracted link does.  An empty link list satisfies every check, so callers
that need a non-empty page must assert that separately.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable
from urllib.parse import urlsplit

from serp_suite.models import LinkCheck

_OPERATOR_RE = re.compile(r"(?<!\S)(site|filetype|inurl):(\S+)", re.IGNORECASE)


def url_host(url: str) -> str:
    parsed = urlsplit(url)
    try:
        port = parsed.port
    except ValueError:
        # Unparseable port; compare the raw host[:port] text instead.
        return parsed.netloc.rpartition("@")[2].lower()
    host = parsed.hostname or ""
    if port is not None:
        host = f"{host}:{port}"
    return host


def url_extension(url: str) -> str | None:
    """Everything after the last ``.`` in the URL, or None if it has none."""
    _, dot, ext = url.rpartition(".")
    if not dot:
        return None
    return ext


def has_host(url: str, host: str) -> bool:
    return url_host(url) == host


def has_extension(url: str, ext: str) -> bool:
    return url_extension(url) == ext


def contains_token(url: str, token: str) -> bool:
    # Matches anywhere in the URL, host and query string included.
    return token.lower() in url.lower()


def failing(urls: Iterable[str], predicate: Callable[[str], bool]) -> list[str]:
    return [url for url in urls if not predicate(url)]


_CHECKS: dict[str, Callable[[str, str], bool]] = {
    "site": has_host,
    "filetype": has_extension,
    "inurl": contains_token,
}


def checks_for_query(query: str) -> list[LinkCheck]:
    return [
        LinkCheck(operator=op.lower(), argument=arg)
        for op, arg in _OPERATOR_RE.findall(query)
    ]


def run_checks(query: str, urls: list[str]) -> list[LinkCheck]:
    checks = checks_for_query(query)
    for check in checks:
        predicate = _CHECKS[check.operator]
        check.failures = failing(urls, lambda url: predicate(url, check.argument))
    return checks
