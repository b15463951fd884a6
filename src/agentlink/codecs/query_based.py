"""Agents that carry the id and a marketplace code as separate parameters.

    https://www.lovegobuy.com/product?id=675330231400&shop_type=taobao
    https://www.ponybuy.com/en-gb/goods?tracking=<ref>&product_id=675330231421&platform=taobao
    https://panglobalbuy.com/#/details?type=1&offerId=676700645111&share_id=<ref>
    https://www.sifubuy.com/detail?invite_code=<ref>&id=675330231421&type=2
    https://www.acbuy.com/product?id=7229470939&source=WD&u=<ref>
"""

from __future__ import annotations

from agentlink.codecs.base import BaseAgentCodec, Params
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, Marketplace
from agentlink.registry import register_agent
from agentlink.urls import build_url, fragment_params, query_params

_WITHOUT_TMALL = frozenset(
    {Marketplace.TAOBAO, Marketplace.WEIDIAN, Marketplace.ALI_1688}
)


class _CodedQueryCodec(BaseAgentCodec):
    """Shared decoding: read ``id_param`` and reverse-map ``code_param``.

    ``codes`` maps marketplace to code; Tmall entries reuse the Taobao code,
    so only the first marketplace listed for a code is decoded back.
    """

    base_url: str
    id_param: str
    code_param: str
    codes: dict[Marketplace, str]
    hash_routed: bool = False

    def decode(self, url: str) -> str:
        params = fragment_params(url) if self.hash_routed else query_params(url)
        id, code = self._require(params, url, self.id_param, self.code_param)
        reverse: dict[str, Marketplace] = {}
        for marketplace, value in self.codes.items():
            reverse.setdefault(value, marketplace)
        return build_raw_link(self._lookup(reverse, code, url), id)

    def _listing_params(self, marketplace: Marketplace, id: str) -> Params:
        return [(self.id_param, id), (self.code_param, self.codes[marketplace])]

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        return build_url(
            self.base_url, [*self._listing_params(marketplace, id), *self._referral(referral)]
        )


@register_agent(Agent.LOVEGOBUY)
class LovegobuyCodec(_CodedQueryCodec):
    hosts = ("lovegobuy.com",)
    referral_param = "invite_code"
    base_url = "https://www.lovegobuy.com/product"
    id_param = "id"
    code_param = "shop_type"
    codes = {
        Marketplace.TAOBAO: "taobao",
        Marketplace.TMALL: "taobao",
        Marketplace.WEIDIAN: "weidian",
        Marketplace.ALI_1688: "1688",
    }


@register_agent(Agent.PONYBUY)
class PonybuyCodec(_CodedQueryCodec):
    hosts = ("ponybuy.com",)
    referral_param = "tracking"
    base_url = "https://www.ponybuy.com/en-gb/goods"
    id_param = "product_id"
    code_param = "platform"
    codes = LovegobuyCodec.codes

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        # the referral leads on ponybuy links
        return build_url(
            self.base_url, [*self._referral(referral), *self._listing_params(marketplace, id)]
        )


@register_agent(Agent.PANGLOBALBUY)
class PanGlobalBuyCodec(_CodedQueryCodec):
    hosts = ("panglobalbuy.com",)
    referral_param = "share_id"
    marketplaces = _WITHOUT_TMALL
    base_url = "https://panglobalbuy.com/#/details"
    id_param = "offerId"
    code_param = "type"
    hash_routed = True
    codes = {
        Marketplace.ALI_1688: "1",
        Marketplace.TAOBAO: "2",
        Marketplace.WEIDIAN: "3",
    }

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        params = [
            (self.code_param, self.codes[marketplace]),
            (self.id_param, id),
            *self._referral(referral),
        ]
        return build_url(self.base_url, params)


@register_agent(Agent.SIFUBUY)
class SifubuyCodec(_CodedQueryCodec):
    hosts = ("sifubuy.com",)
    referral_param = "invite_code"
    marketplaces = _WITHOUT_TMALL
    base_url = "https://www.sifubuy.com/detail"
    id_param = "id"
    code_param = "type"
    codes = PanGlobalBuyCodec.codes

    def encode_item(self, marketplace, id, referral, tracking_tag) -> str:
        return build_url(
            self.base_url, [*self._referral(referral), *self._listing_params(marketplace, id)]
        )


@register_agent(Agent.ACBUY)
class AcbuyCodec(_CodedQueryCodec):
    hosts = ("acbuy.com",)
    referral_param = "u"
    base_url = "https://www.acbuy.com/product"
    id_param = "id"
    code_param = "source"
    codes = {
        Marketplace.TAOBAO: "TB",
        Marketplace.TMALL: "TB",
        Marketplace.WEIDIAN: "WD",
        Marketplace.ALI_1688: "AL",
    }
