"""Pandabuy codec — embedded link, ciphered tokens and shop pages.

Item:  https://www.pandabuy.com/product?ra=1&url=<raw link>&inviteCode=<ref>
Store: https://www.pandabuy.com/shopdetail?ra=1&t=wd&id=<shop id>&inviteCode=<ref>

The ``url`` value is sometimes an encrypted token (prefix ``PJ``) instead of
a URL.  Tokens are percent-decoded completely and handed to the configured
decryptor; ``+`` and ``/`` in them are base64 characters, not separators.
"""

from __future__ import annotations

import logging
from urllib.parse import unquote, urlsplit

from agentlink.cipher import is_ciphered
from agentlink.codecs.base import EmbeddedUrlCodec
from agentlink.errors import DecodeFailed, LinkError
from agentlink.marketplaces import build_raw_link
from agentlink.models import Agent, ListingKind, Marketplace
from agentlink.registry import register_agent
from agentlink.urls import build_url, query_params, raw_query_value, unwrap_url

logger = logging.getLogger(__name__)

_STORE_CODES: dict[Marketplace, str] = {
    Marketplace.TAOBAO: "tb",
    Marketplace.TMALL: "tb",
    Marketplace.WEIDIAN: "wd",
    Marketplace.ALI_1688: "1688",
}
_STORE_MARKETPLACES: dict[str, Marketplace] = {
    "tb": Marketplace.TAOBAO,
    "wd": Marketplace.WEIDIAN,
    "1688": Marketplace.ALI_1688,
}


@register_agent(Agent.PANDABUY)
class PandabuyCodec(EmbeddedUrlCodec):
    hosts = ("pandabuy.com",)
    referral_param = "inviteCode"
    tracking_param = "ra"
    store_pages = True
    base_url = "https://www.pandabuy.com/product"

    def encode_store(self, marketplace, id, referral, tracking_tag) -> str:
        params = [
            *self._tracking(tracking_tag),
            ("t", _STORE_CODES[marketplace]),
            ("id", id),
            *self._referral(referral),
        ]
        return build_url("https://www.pandabuy.com/shopdetail", params)

    def decode(self, url: str) -> str:
        if urlsplit(url).path.rstrip("/").endswith("/shopdetail"):
            code, id = self._require(query_params(url), url, "t", "id")
            marketplace = self._lookup(_STORE_MARKETPLACES, code, url)
            return build_raw_link(marketplace, id, ListingKind.STORE)

        encoded = raw_query_value(url, self.url_param)
        if not encoded:
            raise DecodeFailed(f"{self.name} link has no {self.url_param!r} parameter", url)
        token = unquote(encoded)
        if is_ciphered(token):
            # double-encoded tokens still carry escapes after the first pass
            if "%" in token:
                token = unquote(token)
            logger.debug("Routing ciphered %s token to decryptor", self.name)
            try:
                plaintext = self._config.decrypt(token)
            except LinkError:
                raise
            except Exception as exc:
                raise DecodeFailed(f"decryption failed: {exc}", url) from exc
            return self._as_raw(plaintext, url)
        return self._as_raw(unwrap_url(token, self.decode_rounds), url)
