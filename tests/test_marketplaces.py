"""Tests for the marketplace registry and raw link codec."""

from __future__ import annotations

import pytest

from agentlink.errors import IdNotFound, MarketplaceNotDetected
from agentlink.marketplaces import (
    build_raw_link,
    extract_id,
    identify_marketplace,
    is_raw_link,
    parse_raw_link,
)
from agentlink.models import ListingKind, ListingRef, Marketplace


class TestIdentifyMarketplace:
    @pytest.mark.parametrize(
        "url, expected",
        [
            ("https://item.taobao.com/item.htm?id=1", Marketplace.TAOBAO),
            ("https://world.taobao.com/item/1.htm", Marketplace.TAOBAO),
            ("https://detail.tmall.com/item.htm?id=1", Marketplace.TMALL),
            ("https://detail.tmall.hk/item.htm?id=1", Marketplace.TMALL),
            ("https://weidian.com/item.html?itemID=1", Marketplace.WEIDIAN),
            ("https://shop1234.v.weidian.com/item.html?itemID=1", Marketplace.WEIDIAN),
            ("https://detail.1688.com/offer/1.html", Marketplace.ALI_1688),
            ("HTTPS://DETAIL.1688.COM/offer/1.html", Marketplace.ALI_1688),
        ],
    )
    def test_known_hosts(self, url, expected):
        assert identify_marketplace(url) is expected

    def test_unknown_host(self):
        assert identify_marketplace("https://www.example.com/item.htm?id=1") is None

    def test_lookalike_host_is_not_a_match(self):
        assert identify_marketplace("https://nottaobao.com/item.htm?id=1") is None

    def test_not_a_url(self):
        assert identify_marketplace("weidian") is None
        assert is_raw_link("weidian") is False


class TestBuildRawLink:
    def test_item_templates(self, raw_links, listing_id):
        for marketplace, expected in raw_links.items():
            assert build_raw_link(marketplace, listing_id) == expected

    def test_accepts_string_tags(self, listing_id):
        assert build_raw_link("1688", listing_id) == f"https://detail.1688.com/offer/{listing_id}.html"

    def test_store_templates(self):
        assert build_raw_link(Marketplace.WEIDIAN, "1625671124", ListingKind.STORE) == (
            "https://weidian.com/?userid=1625671124"
        )
        assert build_raw_link(Marketplace.TAOBAO, "57303596", "store") == "https://shop57303596.taobao.com"
        assert build_raw_link(Marketplace.ALI_1688, "b2b-334868973433e6d", "store") == (
            "https://winport.m.1688.com/page/index.html?memberId=b2b-334868973433e6d"
        )

    def test_does_not_validate_ids(self):
        assert build_raw_link(Marketplace.TAOBAO, "not-a-number") == (
            "https://item.taobao.com/item.htm?id=not-a-number"
        )


class TestExtractId:
    def test_taobao_query(self):
        assert extract_id("https://item.taobao.com/item.htm?spm=a1z10&id=691541677564", "taobao") == "691541677564"

    def test_taobao_list_path(self):
        url = "https://www.taobao.com/list/item/674680652328.htm?spm=a21wu.10013406"
        assert extract_id(url, Marketplace.TAOBAO) == "674680652328"

    def test_weidian_query_variants(self):
        assert extract_id("https://weidian.com/item.html?itemID=5418645467&spider_token=4572", "weidian") == "5418645467"
        assert extract_id("https://weidian.com/item.html?itemId=123", "weidian") == "123"

    def test_1688_path(self):
        assert extract_id("https://detail.1688.com/offer/641649880094.html", "1688") == "641649880094"

    def test_store_kind(self):
        assert extract_id("https://weidian.com/?userid=1625671124", "weidian", ListingKind.STORE) == "1625671124"

    def test_non_numeric_item_id_rejected(self):
        with pytest.raises(IdNotFound, match="item.htm\\?id=abc"):
            extract_id("https://item.taobao.com/item.htm?id=abc", "taobao")

    def test_missing_id(self):
        with pytest.raises(IdNotFound, match="No weidian listing id"):
            extract_id("https://weidian.com/", Marketplace.WEIDIAN)


class TestParseRawLink:
    def test_round_trip_every_marketplace(self, listing_id):
        for marketplace in Marketplace:
            for kind in ListingKind:
                ref = parse_raw_link(build_raw_link(marketplace, listing_id, kind))
                assert ref == ListingRef(marketplace=marketplace, id=listing_id, kind=kind)

    def test_1688_store_member_id(self):
        ref = parse_raw_link(build_raw_link("1688", "b2b-334868973433e6d", "store"))
        assert ref.id == "b2b-334868973433e6d"
        assert ref.kind is ListingKind.STORE

    def test_unknown_marketplace(self):
        with pytest.raises(MarketplaceNotDetected, match="https://www.example.com/"):
            parse_raw_link("https://www.example.com/")
