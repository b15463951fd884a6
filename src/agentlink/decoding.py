"""Agent link decoding — an ordered list of strategies.

For a detected agent with a bespoke decoder the list is
``[bespoke, generic]``; otherwise it is ``[generic]``.  Strategies run in
order and the first success wins.  ``UndecodableLinkShape`` stops the run
immediately; every other ``LinkError`` moves on to the next strategy.
"""

from __future__ import annotations

import logging
from typing import Callable

from agentlink.codecs.base import CodecConfig
from agentlink.detector import require_agent
from agentlink.errors import AgentNotDetected, DecodeFailed, LinkError, RawLinkNotFound, UndecodableLinkShape
from agentlink.models import Agent
from agentlink.registry import get_codec
from agentlink.urls import is_http_url, query_params, unwrap_url

logger = logging.getLogger(__name__)

GENERIC_PARAM = "url"

Strategy = tuple[str, Callable[[str], str]]


def decode_generic(url: str) -> str:
    """Read the conventional ``url`` query parameter as the raw link."""
    value = query_params(url).get(GENERIC_PARAM)
    if not value:
        raise DecodeFailed(f"{GENERIC_PARAM!r} query param not found", url)
    raw = unwrap_url(value)
    if not is_http_url(raw):
        raise DecodeFailed(f"{GENERIC_PARAM!r} query param is not a URL", url)
    return raw


def decode_strategies(agent: Agent | None, config: CodecConfig | None = None) -> list[Strategy]:
    """Return the strategies to try for *agent*, most specific first."""
    strategies: list[Strategy] = []
    if agent is not None:
        codec = get_codec(agent)(config)
        if codec.has_decoder:
            strategies.append((codec.name, codec.decode))
    strategies.append(("generic", decode_generic))
    return strategies


def decode_to_raw(url: str, config: CodecConfig | None = None) -> str:
    """Decode an agent link into the raw marketplace link it points at."""
    failures: list[str] = []
    try:
        agent: Agent | None = require_agent(url)
    except AgentNotDetected as exc:
        logger.debug("%s, trying generic decoding only", exc)
        failures.append(exc.reason)
        agent = None

    for label, strategy in decode_strategies(agent, config):
        try:
            raw = strategy(url)
        except UndecodableLinkShape:
            raise
        except LinkError as exc:
            logger.debug("Strategy %r failed for %s: %s", label, url, exc.reason)
            failures.append(f"{label}: {exc.reason}")
            continue
        logger.debug("Strategy %r decoded %s to %s", label, url, raw)
        return raw

    raise RawLinkNotFound(
        f"Error extracting inner link, fallback unsuccessful ({'; '.join(failures)})",
        url,
    )
