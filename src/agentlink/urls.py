"""Small URL helpers shared by the marketplace codec, detector and agent codecs."""

from __future__ import annotations

from typing import Iterable
from urllib.parse import parse_qsl, unquote, urlencode, urlsplit


def hostname(url: str) -> str:
    """Return the lower-cased hostname of *url*, or ``""`` when it has none."""
    try:
        return (urlsplit(url).hostname or "").lower()
    except ValueError:
        return ""


def host_matches(host: str, domains: Iterable[str]) -> bool:
    """True when *host* is one of *domains* or a subdomain of one."""
    return any(host == d or host.endswith("." + d) for d in domains)


def strip_host_prefix(host: str) -> str:
    """Drop a single leading ``www.`` or ``m.`` label."""
    for prefix in ("www.", "m."):
        if host.startswith(prefix):
            return host[len(prefix):]
    return host


def query_params(url: str) -> dict[str, str]:
    """Decoded query parameters of *url*; the first value wins on repeats."""
    return _first_values(urlsplit(url).query)


def fragment_params(url: str) -> dict[str, str]:
    """Decoded parameters of a hash-routed URL (``/#/route?a=1&b=2``)."""
    fragment = urlsplit(url).fragment
    if "?" not in fragment:
        return {}
    return _first_values(fragment.split("?", 1)[1])


def fragment_route(url: str) -> str:
    """The route part of a hash-routed URL (``/home/productDetail``)."""
    return urlsplit(url).fragment.split("?", 1)[0]


def raw_query_value(url: str, name: str) -> str | None:
    """The still-encoded value of query parameter *name*.

    ``parse_qsl`` turns ``+`` into a space, which corrupts base64 tokens, so
    opaque values are read without any decoding.
    """
    for part in urlsplit(url).query.split("&"):
        key, sep, value = part.partition("=")
        if sep and unquote(key) == name:
            return value
    return None


def build_url(base: str, params: Iterable[tuple[str, str]] = ()) -> str:
    """Append *params* to *base*, omitting the ``?`` when there are none."""
    query = urlencode(list(params))
    return f"{base}?{query}" if query else base


def unwrap_url(value: str, rounds: int = 1) -> str:
    """Percent-decode *value* up to *rounds* more times until it is a URL."""
    for _ in range(rounds):
        if is_http_url(value):
            break
        value = unquote(value)
    return value


def is_http_url(value: str) -> bool:
    """True for an absolute http(s) URL with a host."""
    try:
        parts = urlsplit(value)
    except ValueError:
        return False
    return parts.scheme in ("http", "https") and bool(parts.hostname)


def _first_values(query: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key, value)
    return params
