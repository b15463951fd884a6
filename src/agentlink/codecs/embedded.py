"""Agents that embed the raw link in a single query parameter.

Only the agents with a quirk (a different parameter name, an undecodable
sibling page) define ``decode``; the rest rely on the generic ``url``
fallback.
"""

from __future__ import annotations

from urllib.parse import urlsplit

from agentlink.codecs.base import EmbeddedUrlCodec
from agentlink.errors import UndecodableLinkShape
from agentlink.models import Agent
from agentlink.registry import register_agent


@register_agent(Agent.HAGOBUY)
class HagobuyCodec(EmbeddedUrlCodec):
    hosts = ("hagobuy.com",)
    referral_param = "affcode"
    base_url = "https://www.hagobuy.com/item/details"


@register_agent(Agent.HEGOBUY)
class HegobuyCodec(EmbeddedUrlCodec):
    hosts = ("hegobuy.com",)
    referral_param = "affcode"
    base_url = "https://www.hegobuy.com/item/details"


@register_agent(Agent.KAMEYMALL)
class KameymallCodec(EmbeddedUrlCodec):
    """Kameymall search links embed the raw link.

    ``/purchases/<order number>/<title>`` is a purchase history page that
    looks similar but references no listing at all.
    """

    hosts = ("kameymall.com",)
    referral_param = "code"
    base_url = "https://www.kameymall.com/purchases/search/item"

    def decode(self, url: str) -> str:
        segments = [s for s in urlsplit(url).path.split("/") if s]
        if len(segments) >= 2 and segments[0] == "purchases" and segments[1].isdigit():
            raise UndecodableLinkShape(
                "Kameymall link is a purchase history link. "
                "This type of link cannot be decoded",
                url,
            )
        return self._decode_embedded(url)


@register_agent(Agent.EZBUYCN)
class EzbuyCnCodec(EmbeddedUrlCodec):
    hosts = ("ezbuycn.com",)
    base_url = "https://ezbuycn.com/api/chaid.aspx"
    url_param = "key"

    def decode(self, url: str) -> str:
        return self._decode_embedded(url)


@register_agent(Agent.EASTMALLBUY)
class EastmallbuyCodec(EmbeddedUrlCodec):
    hosts = ("eastmallbuy.com",)
    referral_param = "inviter"
    base_url = "https://eastmallbuy.com/index/item/index.html"
    leading_params = (("searchlang", "en"),)


@register_agent(Agent.HUBBUYCN)
class HubbuyCnCodec(EmbeddedUrlCodec):
    hosts = ("hubbuycn.com",)
    referral_param = "inviter"
    base_url = "https://www.hubbuycn.com/index/item/index.html"
    leading_params = (("searchlang", "en"),)

    def decode(self, url: str) -> str:
        return self._decode_embedded(url)


@register_agent(Agent.BLIKBUY)
class BlikbuyCodec(EmbeddedUrlCodec):
    hosts = ("blikbuy.com",)
    referral_param = "icode"
    base_url = "https://www.blikbuy.com/"
    leading_params = (("go", "item"),)


@register_agent(Agent.LOONGBUY)
class LoongbuyCodec(EmbeddedUrlCodec):
    hosts = ("loongbuy.com",)
    referral_param = "invitecode"
    base_url = "https://www.loongbuy.com/product-details"
