"""CNFans platform codecs — CNFans, Mulebuy, JoyaBuy and Orientdig.

    https://cnfans.com/product/?shop_type=weidian&id=6481396504&ref=<ref>
    https://cnfans.com/shops/?shop_type=weidian&shop_id=1625671124

Only CNFans itself exposes shop pages.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from agentlink.codecs.base import BaseAgentCodec
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, Marketplace
from agentlink.registry import register_agent
from agentlink.urls import build_url, query_params

SHOP_TYPES: dict[Marketplace, str] = {
    Marketplace.TAOBAO: "taobao",
    Marketplace.TMALL: "taobao",
    Marketplace.WEIDIAN: "weidian",
    Marketplace.ALI_1688: "ali_1688",
}
SHOP_TYPE_MARKETPLACES: dict[str, Marketplace] = {
    "taobao": Marketplace.TAOBAO,
    "weidian": Marketplace.WEIDIAN,
    "ali_1688": Marketplace.ALI_1688,
}


class _ShopTypeCodec(BaseAgentCodec):
    referral_param = "ref"
    domain: str

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        params = [
            ("shop_type", SHOP_TYPES[marketplace]),
            ("id", id),
            *self._referral(referral),
        ]
        return build_url(f"https://{self.domain}/product/", params)

    def encode_store(self, marketplace, id, referral, tracking_tag) -> str:
        params = [
            ("shop_type", SHOP_TYPES[marketplace]),
            ("shop_id", id),
            *self._referral(referral),
        ]
        return build_url(f"https://{self.domain}/shops/", params)

    def decode(self, url: str) -> str:
        params = query_params(url)
        if urlsplit(url).path.startswith("/shops"):
            shop_type, id = self._require(params, url, "shop_type", "shop_id")
            kind = ListingKind.STORE
        else:
            shop_type, id = self._require(params, url, "shop_type", "id")
            kind = ListingKind.ITEM
        marketplace = self._lookup(SHOP_TYPE_MARKETPLACES, shop_type, url)
        return build_raw_link(marketplace, id, kind)


@register_agent(Agent.CNFANS)
class CnFansCodec(_ShopTypeCodec):
    hosts = ("cnfans.com",)
    domain = "cnfans.com"
    store_pages = True


@register_agent(Agent.MULEBUY)
class MulebuyCodec(_ShopTypeCodec):
    hosts = ("mulebuy.com",)
    domain = "mulebuy.com"


@register_agent(Agent.JOYABUY)
class JoyabuyCodec(_ShopTypeCodec):
    hosts = ("joyabuy.com",)
    domain = "joyabuy.com"


@register_agent(Agent.ORIENTDIG)
class OrientdigCodec(_ShopTypeCodec):
    hosts = ("orientdig.com",)
    domain = "orientdig.com"
