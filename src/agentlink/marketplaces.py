"""Marketplace registry and raw link codec.

Each marketplace owns its domains, a raw-link template per listing kind and
the rules for pulling an id back out of a raw link.  Ids are validated here,
when a raw link is parsed; ``build_raw_link`` treats them as opaque.

Taobao and Tmall differ only by host.  Agents that cannot tell them apart
collapse Tmall listings into Taobao ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Callable
from urllib.parse import urlsplit

from agentlink.errors import IdNotFound, MarketplaceNotDetected
from agentlink.models import ListingKind, ListingRef, Marketplace
from agentlink.urls import host_matches, hostname, query_params

IdRule = Callable[[str], "str | None"]


def _query_rule(*names: str, pattern: str = r"\d+") -> IdRule:
    compiled = re.compile(pattern)

    def rule(url: str) -> str | None:
        params = query_params(url)
        for name in names:
            value = params.get(name, "").strip()
            if compiled.fullmatch(value):
                return value
        return None

    return rule


def _path_rule(pattern: str) -> IdRule:
    compiled = re.compile(pattern)

    def rule(url: str) -> str | None:
        match = compiled.search(urlsplit(url).path)
        return match.group(1) if match else None

    return rule


def _host_rule(pattern: str) -> IdRule:
    compiled = re.compile(pattern)

    def rule(url: str) -> str | None:
        match = compiled.match(hostname(url))
        return match.group(1) if match else None

    return rule


@dataclass(frozen=True)
class MarketplaceSpec:
    """Static description of one marketplace."""

    marketplace: Marketplace
    domains: tuple[str, ...]
    item_template: str
    store_template: str
    item_rules: tuple[IdRule, ...] = field(default=())
    store_rules: tuple[IdRule, ...] = field(default=())

    def rules_for(self, kind: ListingKind) -> tuple[IdRule, ...]:
        return self.item_rules if kind is ListingKind.ITEM else self.store_rules

    def template_for(self, kind: ListingKind) -> str:
        return self.item_template if kind is ListingKind.ITEM else self.store_template


MARKETPLACES: dict[Marketplace, MarketplaceSpec] = {
    Marketplace.TAOBAO: MarketplaceSpec(
        marketplace=Marketplace.TAOBAO,
        domains=("taobao.com",),
        item_template="https://item.taobao.com/item.htm?id={id}",
        store_template="https://shop{id}.taobao.com",
        item_rules=(_query_rule("id"), _path_rule(r"/item/(\d+)\.htm")),
        store_rules=(_host_rule(r"^shop(\d+)\.taobao\.com$"),),
    ),
    Marketplace.WEIDIAN: MarketplaceSpec(
        marketplace=Marketplace.WEIDIAN,
        domains=("weidian.com", "koudai.com"),
        item_template="https://weidian.com/item.html?itemID={id}",
        store_template="https://weidian.com/?userid={id}",
        item_rules=(_query_rule("itemID", "itemId", "itemid"),),
        store_rules=(_query_rule("userid", "userId"),),
    ),
    Marketplace.ALI_1688: MarketplaceSpec(
        marketplace=Marketplace.ALI_1688,
        domains=("1688.com",),
        item_template="https://detail.1688.com/offer/{id}.html",
        store_template="https://winport.m.1688.com/page/index.html?memberId={id}",
        item_rules=(_path_rule(r"/offer/(\d+)\.html"),),
        store_rules=(_query_rule("memberId", pattern=r"[\w-]+"),),
    ),
    Marketplace.TMALL: MarketplaceSpec(
        marketplace=Marketplace.TMALL,
        domains=("tmall.com", "tmall.hk"),
        item_template="https://detail.tmall.com/item.htm?id={id}",
        store_template="https://shop{id}.tmall.com",
        item_rules=(_query_rule("id"),),
        store_rules=(_host_rule(r"^shop(\d+)\.tmall\.com$"),),
    ),
}


def identify_marketplace(url: str) -> Marketplace | None:
    """Return the marketplace whose domains match *url*'s host, if any."""
    host = hostname(url)
    if not host:
        return None
    for spec in MARKETPLACES.values():
        if host_matches(host, spec.domains):
            return spec.marketplace
    return None


def is_raw_link(url: str) -> bool:
    return identify_marketplace(url) is not None


def build_raw_link(
    marketplace: Marketplace | str,
    id: str,
    kind: ListingKind | str = ListingKind.ITEM,
) -> str:
    """Build the canonical marketplace URL for *id*."""
    spec = MARKETPLACES[Marketplace(marketplace)]
    return spec.template_for(ListingKind(kind)).format(id=id)


def extract_id(
    url: str,
    marketplace: Marketplace | str,
    kind: ListingKind | str | None = None,
) -> str:
    """Extract the listing id from a raw link.

    With *kind* left as ``None`` item rules are tried before store rules.
    """
    spec = MARKETPLACES[Marketplace(marketplace)]
    kinds = [ListingKind(kind)] if kind is not None else list(ListingKind)
    for candidate in kinds:
        found = _match(spec, candidate, url)
        if found:
            return found
    raise IdNotFound(f"No {spec.marketplace.value} listing id in link", url)


def parse_raw_link(url: str) -> ListingRef:
    """Turn a raw marketplace link into a ``ListingRef``."""
    marketplace = identify_marketplace(url)
    if marketplace is None:
        raise MarketplaceNotDetected("Marketplace could not be detected", url)
    spec = MARKETPLACES[marketplace]
    for kind in ListingKind:
        found = _match(spec, kind, url)
        if found:
            return ListingRef(marketplace=marketplace, id=found, kind=kind)
    raise IdNotFound(f"No {marketplace.value} listing id in link", url)


def _match(spec: MarketplaceSpec, kind: ListingKind, url: str) -> str | None:
    for rule in spec.rules_for(kind):
        found = rule(url)
        if found:
            return found
    return None
