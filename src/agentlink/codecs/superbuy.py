"""Superbuy platform codecs — Superbuy, Wegobuy and AllChinaBuy.

All three run the same shop software:

    https://www.superbuy.com/en/page/buy?from=search-input&url=<raw link>&partnercode=<ref>

The mobile site moves the parameters behind a hash route and does not encode
the embedded link:

    https://m.superbuy.com/home/#/goodsDetail?from=search-input&url=https://detail.tmall.com/item.htm?id=1

AllChinaBuy also has shop pages:

    https://www.allchinabuy.com/en/page/shop/shop/?shopid=<id>&platform=WD
"""

from __future__ import annotations

from urllib.parse import urlsplit

from agentlink.codecs.base import EmbeddedUrlCodec
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, Marketplace
from agentlink.registry import register_agent
from agentlink.urls import build_url, query_params

_PLATFORM_CODES: dict[Marketplace, str] = {
    Marketplace.TAOBAO: "TB",
    Marketplace.TMALL: "TB",
    Marketplace.WEIDIAN: "WD",
    Marketplace.ALI_1688: "ALIBABA",
}
_PLATFORM_MARKETPLACES: dict[str, Marketplace] = {
    "TB": Marketplace.TAOBAO,
    "WD": Marketplace.WEIDIAN,
    "ALIBABA": Marketplace.ALI_1688,
}


class _BuyPageCodec(EmbeddedUrlCodec):
    referral_param = "partnercode"
    leading_params = (("from", "search-input"),)

    def decode(self, url: str) -> str:
        return self._decode_embedded(url)


@register_agent(Agent.SUPERBUY)
class SuperbuyCodec(_BuyPageCodec):
    hosts = ("superbuy.com",)
    base_url = "https://www.superbuy.com/en/page/buy"


@register_agent(Agent.WEGOBUY)
class WegobuyCodec(_BuyPageCodec):
    hosts = ("wegobuy.com",)
    base_url = "https://www.wegobuy.com/en/page/buy"


@register_agent(Agent.ALLCHINABUY)
class AllChinaBuyCodec(_BuyPageCodec):
    hosts = ("allchinabuy.com",)
    base_url = "https://www.allchinabuy.com/en/page/buy"
    store_pages = True

    def encode_store(self, marketplace, id, referral, tracking_tag) -> str:
        params = [
            ("shopid", id),
            ("platform", _PLATFORM_CODES[marketplace]),
            *self._referral(referral),
        ]
        return build_url("https://www.allchinabuy.com/en/page/shop/shop/", params)

    def decode(self, url: str) -> str:
        if "/page/shop/shop" in urlsplit(url).path:
            id, code = self._require(query_params(url), url, "shopid", "platform")
            marketplace = self._lookup(_PLATFORM_MARKETPLACES, code.upper(), url)
            return build_raw_link(marketplace, id, ListingKind.STORE)
        return self._decode_embedded(url)
