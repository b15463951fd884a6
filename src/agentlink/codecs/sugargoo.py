"""Sugargoo codec — hash-routed, double percent-encoded embedded link.

    https://www.sugargoo.com/#/home/productDetail?productLink=https%253A%252F%252F...&memberId=<ref>

The site expects ``productLink`` to be encoded twice.  Older single-encoded
links still circulate and decode the same way.  The legacy
``/index/item/index.html?url=...`` shape carries no ``productLink`` and is left
to the generic fallback.
"""

from __future__ import annotations

from urllib.parse import quote

from agentlink.codecs.base import EmbeddedUrlCodec
from agentlink.models import Agent
from agentlink.registry import register_agent


@register_agent(Agent.SUGARGOO)
class SugargooCodec(EmbeddedUrlCodec):
    hosts = ("sugargoo.com", "esugargoo.com")
    referral_param = "memberId"
    base_url = "https://www.sugargoo.com/#/home/productDetail"
    url_param = "productLink"

    def _embed(self, raw: str) -> str:
        # pre-encode once; the query builder adds the second layer
        return quote(raw, safe="")

    def decode(self, url: str) -> str:
        return self._decode_embedded(url)
