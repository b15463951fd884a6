"""Base agent codec interface.

Every agent implements this contract.  The transcoder only ever talks to
BaseAgentCodec; it never knows the concrete type.
"""

from __future__ import annotations

import abc
from typing import Callable

from pydantic import BaseModel

from agentlink.cipher import decrypt_unavailable
from agentlink.errors import DecodeFailed, UnsupportedLinkKind, UnsupportedMarketplaceForAgent
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, ListingRef, Marketplace
from agentlink.urls import build_url, fragment_params, is_http_url, query_params, unwrap_url

Params = list[tuple[str, str]]


class CodecConfig(BaseModel):
    """Per-call collaborators handed to a codec."""

    decrypt: Callable[[str], str] = decrypt_unavailable


class BaseAgentCodec(abc.ABC):
    """Encode a ``ListingRef`` into an agent link, and optionally back.

    Class attributes describe the agent and double as the agent registry:

        hosts           domains the detector matches (subdomains included).
        referral_param  query parameter carrying the affiliate code, if any.
        tracking_param  internal tracking parameter, if any.
        marketplaces    marketplaces the agent can express.
        store_pages     whether ``ListingKind.STORE`` refs can be encoded.

    Lifecycle (called by the transcoder in this order):
        1. __init__(config)  — receive per-call collaborators.
        2. encode(ref, ...)  — or decode(url), never both on one instance.
    """

    agent: Agent
    hosts: tuple[str, ...] = ()
    referral_param: str | None = None
    tracking_param: str | None = None
    default_tracking_tag: str = "1"
    marketplaces: frozenset[Marketplace] = frozenset(Marketplace)
    store_pages: bool = False

    def __init__(self, config: CodecConfig | None = None) -> None:
        self._config = config or CodecConfig()

    @property
    def name(self) -> str:
        """Agent name used in logs and error messages."""
        return self.agent.value

    @property
    def has_decoder(self) -> bool:
        """True when the codec overrides ``decode`` with a bespoke rule."""
        return type(self).decode is not BaseAgentCodec.decode

    def supports(self, marketplace: Marketplace, kind: ListingKind = ListingKind.ITEM) -> bool:
        if marketplace not in self.marketplaces:
            return False
        return kind is ListingKind.ITEM or self.store_pages

    # -- encoding ------------------------------------------------------------

    def encode(
        self,
        ref: ListingRef,
        referral: str | None = None,
        tracking_tag: str | None = None,
    ) -> str:
        """Build this agent's link for *ref*.

        Raises ``UnsupportedMarketplaceForAgent`` or ``UnsupportedLinkKind``
        before anything is built when the agent cannot express *ref*.
        """
        if ref.marketplace not in self.marketplaces:
            raise UnsupportedMarketplaceForAgent(
                f"The agent {self.name} does not support {ref.marketplace.value}",
                build_raw_link(ref.marketplace, ref.id, ref.kind),
            )
        if ref.kind is ListingKind.STORE:
            if not self.store_pages:
                raise UnsupportedLinkKind(
                    f"The agent {self.name} does not support store pages",
                    build_raw_link(ref.marketplace, ref.id, ref.kind),
                )
            return self.encode_store(ref.marketplace, ref.id, referral, tracking_tag)
        return self.encode_item(ref.marketplace, ref.id, referral, tracking_tag)

    @abc.abstractmethod
    def encode_item(
        self,
        marketplace: Marketplace,
        id: str,
        referral: str | None,
        tracking_tag: str | None,
    ) -> str:
        """Return the agent link for a product page.  Mandatory."""
        ...

    def encode_store(
        self,
        marketplace: Marketplace,
        id: str,
        referral: str | None,
        tracking_tag: str | None,
    ) -> str:
        """Return the agent link for a shop page.

        Only called when ``store_pages`` is set; override together with it.
        """
        raise UnsupportedLinkKind(
            f"The agent {self.name} has no store page link shape",
            build_raw_link(marketplace, id, ListingKind.STORE),
        )

    # -- decoding ------------------------------------------------------------

    def decode(self, url: str) -> str:
        """Return the raw marketplace link embedded in *url*.

        The default means "no bespoke decoder"; the generic fallback handles
        the link instead.
        """
        raise DecodeFailed(f"The agent {self.name} has no bespoke decoder", url)

    # -- helpers -------------------------------------------------------------

    def _referral(self, referral: str | None) -> Params:
        if referral and self.referral_param:
            return [(self.referral_param, referral)]
        return []

    def _tracking(self, tracking_tag: str | None) -> Params:
        if self.tracking_param:
            return [(self.tracking_param, tracking_tag or self.default_tracking_tag)]
        return []

    def _require(self, params: dict[str, str], url: str, *names: str) -> list[str]:
        """Return the values of *names*, raising ``DecodeFailed`` if one is blank."""
        missing = [n for n in names if not params.get(n)]
        if missing:
            raise DecodeFailed(
                f"{self.name} link is missing {', '.join(repr(n) for n in missing)}",
                url,
            )
        return [params[n] for n in names]

    def _lookup(self, table: dict[str, Marketplace], code: str, url: str) -> Marketplace:
        try:
            return table[code]
        except KeyError:
            raise DecodeFailed(
                f"{self.name} link has unknown marketplace code {code!r}", url
            ) from None


class EmbeddedUrlCodec(BaseAgentCodec):
    """Agents that carry the raw link verbatim in one query parameter.

    Subclasses set ``base_url``, ``url_param`` and any fixed ``leading_params``
    that precede the embedded link.  Decoding is opt-in: a subclass without a
    ``decode`` override is left to the generic ``url`` fallback.
    """

    base_url: str
    url_param: str = "url"
    leading_params: tuple[tuple[str, str], ...] = ()
    # Extra percent-decoding passes applied when the value is not yet a URL.
    decode_rounds: int = 1

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        params: Params = [
            *self._tracking(tracking_tag),
            *self.leading_params,
            (self.url_param, self._embed(build_raw_link(marketplace, id))),
            *self._referral(referral),
        ]
        return build_url(self.base_url, params)

    def _decode_embedded(self, url: str) -> str:
        """Shared body for subclasses that opt into a bespoke ``decode``."""
        value = self._embedded_value(url)
        if not value:
            raise DecodeFailed(f"{self.name} link has no {self.url_param!r} parameter", url)
        return self._as_raw(unwrap_url(value, self.decode_rounds), url)

    def _embed(self, raw: str) -> str:
        return raw

    def _embedded_value(self, url: str) -> str | None:
        return query_params(url).get(self.url_param) or fragment_params(url).get(self.url_param)

    def _as_raw(self, value: str, url: str) -> str:
        if not is_http_url(value):
            raise DecodeFailed(f"{self.name} embedded value is not a URL", url)
        return value
