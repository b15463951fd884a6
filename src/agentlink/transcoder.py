"""Transcoding facade — the public entry points.

    to_raw(link)                       any link → raw marketplace link
    parse_listing(link)                any link → ListingRef
    to_agent(source, target, ...)      link / ListingRef / (marketplace, id) → agent link

Each has a ``safe_*`` twin that returns a ``SafeResult`` instead of raising.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, TypeVar

from pydantic import ValidationError

from agentlink.cipher import Decryptor
from agentlink.codecs.base import CodecConfig
from agentlink.decoding import decode_to_raw
from agentlink.detector import detect_marketplace
from agentlink.errors import (
    IdNotFound,
    LinkError,
    MarketplaceNotDetected,
    UnknownAgent,
    UnsupportedLinkKind,
)
from agentlink.marketplaces import parse_raw_link
from agentlink.models import Agent, ListingKind, ListingRef, Marketplace, SafeResult
from agentlink.registry import get_codec

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _codec_config(decrypt: Decryptor | None) -> CodecConfig:
    return CodecConfig(decrypt=decrypt) if decrypt is not None else CodecConfig()


def to_raw(link: str, *, decrypt: Decryptor | None = None) -> str:
    """Return the raw marketplace link behind *link*.

    Raw links come back unchanged; agent links (or unknown links carrying a
    ``url`` parameter) are decoded.
    """
    if detect_marketplace(link) is not None:
        return link
    return decode_to_raw(link, _codec_config(decrypt))


def parse_listing(link: str, *, decrypt: Decryptor | None = None) -> ListingRef:
    """Resolve any supported link to its canonical ``ListingRef``."""
    return parse_raw_link(to_raw(link, decrypt=decrypt))


def _as_ref(
    source: str | ListingRef | tuple,
    kind: ListingKind | str | None,
    decrypt: Decryptor | None,
) -> ListingRef:
    if isinstance(source, ListingRef):
        ref = source
    elif isinstance(source, tuple):
        marketplace, id = source
        try:
            marketplace = Marketplace(marketplace)
        except ValueError:
            raise MarketplaceNotDetected(f"Unknown marketplace {marketplace!r}") from None
        try:
            ref = ListingRef(marketplace=marketplace, id=id)
        except ValidationError:
            raise IdNotFound(f"Invalid {marketplace.value} listing id {id!r}") from None
    else:
        ref = parse_listing(source, decrypt=decrypt)
    if kind is not None:
        try:
            kind = ListingKind(kind)
        except ValueError:
            raise UnsupportedLinkKind(f"Unknown listing kind {kind!r}") from None
        if kind is not ref.kind:
            ref = ref.model_copy(update={"kind": kind})
    return ref


def to_agent(
    source: str | ListingRef | tuple,
    target: Agent | str,
    referral: str | None = None,
    tracking_tag: str | None = None,
    *,
    referrals: Mapping[Agent, str] | None = None,
    kind: ListingKind | str | None = None,
    decrypt: Decryptor | None = None,
) -> str:
    """Build *target*'s link for *source*.

    Parameters
    ----------
    source:
        A raw or agent link, a ``ListingRef``, or a ``(marketplace, id)`` pair.
    referral:
        Affiliate code for *target*.  When omitted, ``referrals[target]`` is
        used if present.
    kind:
        Overrides the listing kind, e.g. ``"store"`` for a ``(marketplace, id)``
        pair that names a shop.
    """
    try:
        agent = Agent(target)
    except ValueError:
        raise UnknownAgent(f"Unknown agent {target!r}") from None
    ref = _as_ref(source, kind, decrypt)
    if not referral and referrals:
        referral = referrals.get(agent)
    codec = get_codec(agent)()
    link = codec.encode(ref, referral=referral, tracking_tag=tracking_tag)
    logger.debug("Encoded %s:%s (%s) for %s", ref.marketplace.value, ref.id, ref.kind.value, agent.value)
    return link


def safe_call(func: Callable[..., T], *args, **kwargs) -> SafeResult[T]:
    """Run *func*, turning a ``LinkError`` into a failed ``SafeResult``.

    The error message is kept verbatim.
    """
    try:
        return SafeResult(success=True, data=func(*args, **kwargs))
    except LinkError as exc:
        return SafeResult(success=False, error=str(exc))


def safe_to_raw(link: str, **kwargs) -> SafeResult[str]:
    return safe_call(to_raw, link, **kwargs)


def safe_parse_listing(link: str, **kwargs) -> SafeResult[ListingRef]:
    return safe_call(parse_listing, link, **kwargs)


def safe_to_agent(source, target: Agent | str, *args, **kwargs) -> SafeResult[str]:
    return safe_call(to_agent, source, target, *args, **kwargs)
