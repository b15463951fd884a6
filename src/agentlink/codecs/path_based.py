"""Agents that put the listing id in the URL path.

    https://www.cssbuy.com/item-micro-4480454092.html
    https://www.hoobuy.com/product/1/692787834585
    https://www.basetao.com/best-taobao-agent-service/products/agent/taobao/655259799823.html
    https://www.oopbuy.com/product/weidian/7231813764

None of them can express Tmall, so Tmall listings come back as Taobao ones.
Cssbuy also has shop pages, keyed by query parameters instead:

    https://cssbuy.com/productlist?t=micro&shop=1625671124&shop1=676198570
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from agentlink.codecs.base import BaseAgentCodec
from agentlink.errors import DecodeFailed
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, Marketplace
from agentlink.registry import register_agent
from agentlink.urls import build_url, query_params

_CSSBUY_SHOP_CODES: dict[Marketplace, str] = {
    Marketplace.TAOBAO: "taobao",
    Marketplace.TMALL: "taobao",
    Marketplace.WEIDIAN: "micro",
    Marketplace.ALI_1688: "1688",
}
_CSSBUY_SHOP_MARKETPLACES: dict[str, Marketplace] = {
    "taobao": Marketplace.TAOBAO,
    "micro": Marketplace.WEIDIAN,
    "1688": Marketplace.ALI_1688,
}
# cssbuy shop links always carry this fixed secondary shop value
_CSSBUY_SHOP1 = "676198570"

_HOOBUY_CODES: dict[Marketplace, str] = {
    Marketplace.ALI_1688: "0",
    Marketplace.TAOBAO: "1",
    Marketplace.TMALL: "1",
    Marketplace.WEIDIAN: "2",
}
_OOPBUY_CODES: dict[Marketplace, str] = {
    Marketplace.TAOBAO: "1",
    Marketplace.TMALL: "1",
    Marketplace.ALI_1688: "0",
    Marketplace.WEIDIAN: "weidian",
}


def _taobao_for_tmall(marketplace: Marketplace) -> Marketplace:
    return Marketplace.TAOBAO if marketplace is Marketplace.TMALL else marketplace


class _PathCodec(BaseAgentCodec):
    """Decode by matching ``path_pattern`` against the URL path.

    The pattern's first group is the marketplace code, the second the id.
    """

    path_pattern: re.Pattern[str]
    codes: dict[str, Marketplace]

    def decode(self, url: str) -> str:
        match = self.path_pattern.search(urlsplit(url).path)
        if match is None:
            raise DecodeFailed(f"{self.name} link path does not contain a listing", url)
        code, id = match.groups()
        return build_raw_link(self._lookup(self.codes, code or "", url), id)


@register_agent(Agent.CSSBUY)
class CssbuyCodec(_PathCodec):
    hosts = ("cssbuy.com",)
    referral_param = "promotionCode"
    store_pages = True
    path_pattern = re.compile(r"^/item-(?:(micro|1688)-)?([^/.]+)(?:\.html)?/?$")
    codes = {
        "": Marketplace.TAOBAO,
        "micro": Marketplace.WEIDIAN,
        "1688": Marketplace.ALI_1688,
    }

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        if marketplace is Marketplace.WEIDIAN:
            base = f"https://www.cssbuy.com/item-micro-{id}.html"
        elif marketplace is Marketplace.ALI_1688:
            base = f"https://www.cssbuy.com/item-1688-{id}.html"
        else:
            base = f"https://www.cssbuy.com/item-{id}.html"
        return build_url(base, self._referral(referral))

    def encode_store(self, marketplace, id, referral, tracking_tag) -> str:
        # shop pages take no promotion code
        params = [
            ("t", _CSSBUY_SHOP_CODES[marketplace]),
            ("shop", id),
            ("shop1", _CSSBUY_SHOP1),
        ]
        return build_url("https://cssbuy.com/productlist", params)

    def decode(self, url: str) -> str:
        if urlsplit(url).path.rstrip("/") == "/productlist":
            code, id = self._require(query_params(url), url, "t", "shop")
            marketplace = self._lookup(_CSSBUY_SHOP_MARKETPLACES, code, url)
            return build_raw_link(marketplace, id, ListingKind.STORE)
        return super().decode(url)


@register_agent(Agent.HOOBUY)
class HoobuyCodec(_PathCodec):
    """Hoobuy uses a positional numeric marketplace code; mobile adds ``/m``."""

    hosts = ("hoobuy.com",)
    referral_param = "inviteCode"
    path_pattern = re.compile(r"^(?:/m)?/product/(\d+)/([^/]+)")
    codes = {
        "0": Marketplace.ALI_1688,
        "1": Marketplace.TAOBAO,
        "2": Marketplace.WEIDIAN,
    }

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        code = _HOOBUY_CODES[marketplace]
        return build_url(f"https://www.hoobuy.com/product/{code}/{id}", self._referral(referral))


@register_agent(Agent.BASETAO)
class BasetaoCodec(_PathCodec):
    hosts = ("basetao.com",)
    path_pattern = re.compile(r"/products/agent/([^/]+)/([^/]+?)\.html")
    codes = {m.value: m for m in (Marketplace.TAOBAO, Marketplace.WEIDIAN, Marketplace.ALI_1688)}

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        return (
            "https://www.basetao.com/best-taobao-agent-service/products/agent/"
            f"{_taobao_for_tmall(marketplace).value}/{id}.html"
        )


@register_agent(Agent.OOPBUY)
class OopbuyCodec(_PathCodec):
    hosts = ("oopbuy.com",)
    referral_param = "inviteCode"
    path_pattern = re.compile(r"^/product/([^/]+)/([^/]+)")
    codes = {
        "1": Marketplace.TAOBAO,
        "0": Marketplace.ALI_1688,
        "weidian": Marketplace.WEIDIAN,
    }

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        code = _OOPBUY_CODES[marketplace]
        return build_url(f"https://www.oopbuy.com/product/{code}/{id}", self._referral(referral))
