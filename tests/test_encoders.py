"""Tests for building agent links from a listing reference."""

from __future__ import annotations

import pytest

from agentlink.codecs.base import BaseAgentCodec
from agentlink.errors import UnsupportedLinkKind, UnsupportedMarketplaceForAgent
from agentlink.models import Agent, ListingKind, ListingRef, Marketplace
from agentlink.registry import get_codec
from agentlink.transcoder import to_agent

TAOBAO_ENC = "https%3A%2F%2Fitem.taobao.com%2Fitem.htm%3Fid%3D6481396504"
WEIDIAN_ENC = "https%3A%2F%2Fweidian.com%2Fitem.html%3FitemID%3D6481396504"


class TestEmbeddedAgents:
    def test_pandabuy_item_with_referral(self, listing_id):
        assert to_agent(("taobao", listing_id), Agent.PANDABUY, "ABC") == (
            f"https://www.pandabuy.com/product?ra=1&url={TAOBAO_ENC}&inviteCode=ABC"
        )

    def test_pandabuy_item_without_referral(self, listing_id):
        assert to_agent(("taobao", listing_id), "pandabuy") == (
            f"https://www.pandabuy.com/product?ra=1&url={TAOBAO_ENC}"
        )

    def test_pandabuy_tracking_tag(self, listing_id):
        link = to_agent(("taobao", listing_id), "pandabuy", tracking_tag="7")
        assert link.startswith("https://www.pandabuy.com/product?ra=7&url=")

    def test_superbuy(self, listing_id):
        assert to_agent(("taobao", listing_id), Agent.SUPERBUY, "ABC") == (
            "https://www.superbuy.com/en/page/buy?from=search-input"
            f"&url={TAOBAO_ENC}&partnercode=ABC"
        )

    def test_sugargoo_double_encodes(self, listing_id):
        link = to_agent(("weidian", listing_id), Agent.SUGARGOO, "ABC")
        assert link == (
            "https://www.sugargoo.com/#/home/productDetail?productLink="
            "https%253A%252F%252Fweidian.com%252Fitem.html%253FitemID%253D6481396504"
            "&memberId=ABC"
        )

    def test_ezbuycn_uses_key_param(self, listing_id):
        assert to_agent(("taobao", listing_id), Agent.EZBUYCN) == (
            f"https://ezbuycn.com/api/chaid.aspx?key={TAOBAO_ENC}"
        )

    def test_eastmallbuy_leading_params(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.EASTMALLBUY, "ABC") == (
            "https://eastmallbuy.com/index/item/index.html?searchlang=en"
            f"&url={WEIDIAN_ENC}&inviter=ABC"
        )

    def test_tmall_kept_when_embedded(self, listing_id):
        link = to_agent(("tmall", listing_id), Agent.HAGOBUY)
        assert "detail.tmall.com" in link


class TestStructuredAgents:
    def test_cnfans(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.CNFANS, "ABC") == (
            "https://cnfans.com/product/?shop_type=weidian&id=6481396504&ref=ABC"
        )

    def test_mulebuy_tmall_as_taobao(self, listing_id):
        assert to_agent(("tmall", listing_id), Agent.MULEBUY) == (
            "https://mulebuy.com/product/?shop_type=taobao&id=6481396504"
        )

    @pytest.mark.parametrize(
        "marketplace, expected",
        [
            ("taobao", "https://www.cssbuy.com/item-6481396504.html"),
            ("weidian", "https://www.cssbuy.com/item-micro-6481396504.html"),
            ("1688", "https://www.cssbuy.com/item-1688-6481396504.html"),
        ],
    )
    def test_cssbuy(self, listing_id, marketplace, expected):
        assert to_agent((marketplace, listing_id), Agent.CSSBUY) == expected

    def test_cssbuy_referral(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.CSSBUY, "ABC") == (
            "https://www.cssbuy.com/item-micro-6481396504.html?promotionCode=ABC"
        )

    def test_hoobuy(self, listing_id):
        assert to_agent(("1688", listing_id), Agent.HOOBUY) == "https://www.hoobuy.com/product/0/6481396504"

    @pytest.mark.parametrize(
        "agent, marketplace, expected",
        [
            (Agent.HOOBUY, "tmall", "https://www.hoobuy.com/product/1/6481396504"),
            (Agent.HOOBUY, "weidian", "https://www.hoobuy.com/product/2/6481396504"),
            (Agent.OOPBUY, "tmall", "https://www.oopbuy.com/product/1/6481396504"),
            (Agent.OOPBUY, "1688", "https://www.oopbuy.com/product/0/6481396504"),
        ],
    )
    def test_path_codes(self, listing_id, agent, marketplace, expected):
        assert to_agent((marketplace, listing_id), agent) == expected

    def test_basetao_ignores_referral(self, listing_id):
        assert to_agent(("tmall", listing_id), Agent.BASETAO, "ABC") == (
            "https://www.basetao.com/best-taobao-agent-service/products/agent/taobao/6481396504.html"
        )

    def test_oopbuy(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.OOPBUY, "ABC") == (
            "https://www.oopbuy.com/product/weidian/6481396504?inviteCode=ABC"
        )

    def test_lovegobuy(self, listing_id):
        assert to_agent(("1688", listing_id), Agent.LOVEGOBUY) == (
            "https://www.lovegobuy.com/product?id=6481396504&shop_type=1688"
        )

    def test_ponybuy_referral_leads(self, listing_id):
        assert to_agent(("taobao", listing_id), Agent.PONYBUY, "ABC") == (
            "https://www.ponybuy.com/en-gb/goods?tracking=ABC&product_id=6481396504&platform=taobao"
        )

    def test_panglobalbuy_hash_route(self, listing_id):
        assert to_agent(("taobao", listing_id), Agent.PANGLOBALBUY, "ABC") == (
            "https://panglobalbuy.com/#/details?type=2&offerId=6481396504&share_id=ABC"
        )

    def test_sifubuy(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.SIFUBUY, "ABC") == (
            "https://www.sifubuy.com/detail?invite_code=ABC&id=6481396504&type=3"
        )

    def test_acbuy(self, listing_id):
        assert to_agent(("weidian", listing_id), Agent.ACBUY, "ABC") == (
            "https://www.acbuy.com/product?id=6481396504&source=WD&u=ABC"
        )


class TestStorePages:
    def test_pandabuy_weidian_store(self):
        assert to_agent(("weidian", "1625671124"), Agent.PANDABUY, "myC0d3", kind="store") == (
            "https://www.pandabuy.com/shopdetail?ra=1&t=wd&id=1625671124&inviteCode=myC0d3"
        )

    def test_pandabuy_store_from_raw_link(self):
        link = to_agent("https://weidian.com/?userid=1625671124", Agent.PANDABUY, "myC0d3")
        assert link == "https://www.pandabuy.com/shopdetail?ra=1&t=wd&id=1625671124&inviteCode=myC0d3"

    def test_allchinabuy_store(self):
        assert to_agent(("taobao", "57303596"), Agent.ALLCHINABUY, "ABC", kind="store") == (
            "https://www.allchinabuy.com/en/page/shop/shop/?shopid=57303596&platform=TB&partnercode=ABC"
        )

    def test_cnfans_store(self):
        ref = ListingRef(marketplace=Marketplace.WEIDIAN, id="1625671124", kind=ListingKind.STORE)
        assert to_agent(ref, Agent.CNFANS) == "https://cnfans.com/shops/?shop_type=weidian&shop_id=1625671124"

    def test_cssbuy_store_omits_referral(self):
        assert to_agent(("weidian", "1625671124"), Agent.CSSBUY, "myC0d3", kind="store") == (
            "https://cssbuy.com/productlist?t=micro&shop=1625671124&shop1=676198570"
        )

    def test_cssbuy_store_tmall_as_taobao(self):
        assert to_agent(("tmall", "57303596"), Agent.CSSBUY, kind="store") == (
            "https://cssbuy.com/productlist?t=taobao&shop=57303596&shop1=676198570"
        )

    def test_store_pages_without_store_shape(self):
        class NoShopShape(BaseAgentCodec):
            agent = Agent.HOOBUY
            store_pages = True

            def encode_item(self, marketplace, id, referral, tracking_tag):
                return ""

        ref = ListingRef(marketplace=Marketplace.WEIDIAN, id="1625671124", kind=ListingKind.STORE)
        with pytest.raises(UnsupportedLinkKind, match="has no store page link shape") as excinfo:
            NoShopShape().encode(ref)
        assert excinfo.value.url == "https://weidian.com/?userid=1625671124"

    def test_store_on_agent_without_store_pages(self):
        with pytest.raises(UnsupportedLinkKind, match="hoobuy does not support store pages"):
            to_agent(("weidian", "1625671124"), Agent.HOOBUY, kind=ListingKind.STORE)


class TestGating:
    @pytest.mark.parametrize("agent", [Agent.PANGLOBALBUY, Agent.SIFUBUY])
    def test_tmall_unsupported(self, listing_id, agent):
        with pytest.raises(UnsupportedMarketplaceForAgent, match="does not support tmall"):
            to_agent(("tmall", listing_id), agent)

    def test_error_carries_raw_link(self, listing_id):
        with pytest.raises(UnsupportedMarketplaceForAgent) as excinfo:
            to_agent(("tmall", listing_id), Agent.SIFUBUY)
        assert excinfo.value.url == f"https://detail.tmall.com/item.htm?id={listing_id}"

    def test_supports(self):
        codec = get_codec(Agent.PANGLOBALBUY)()
        assert codec.supports(Marketplace.TAOBAO)
        assert not codec.supports(Marketplace.TMALL)
        assert not codec.supports(Marketplace.TAOBAO, ListingKind.STORE)


class TestReferrals:
    def test_referral_map_used_for_target(self, listing_id):
        link = to_agent(
            ("weidian", listing_id),
            Agent.CNFANS,
            referrals={Agent.CNFANS: "MAP", Agent.PANDABUY: "OTHER"},
        )
        assert link.endswith("&ref=MAP")

    def test_explicit_referral_wins(self, listing_id):
        link = to_agent(("weidian", listing_id), Agent.CNFANS, "EXPLICIT", referrals={Agent.CNFANS: "MAP"})
        assert link.endswith("&ref=EXPLICIT")

    def test_agent_link_source_drops_old_referral(self, listing_id):
        source = f"https://cnfans.com/product/?shop_type=weidian&id={listing_id}&ref=OLD"
        assert to_agent(source, Agent.MULEBUY) == (
            f"https://mulebuy.com/product/?shop_type=weidian&id={listing_id}"
        )
