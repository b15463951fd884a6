"""agentlink — convert marketplace listing links to and from shopping-agent links."""

from agentlink.detector import detect_agent, detect_marketplace, is_agent_link
from agentlink.errors import (
    AgentNotDetected,
    DecodeFailed,
    IdNotFound,
    LinkError,
    MarketplaceNotDetected,
    RawLinkNotFound,
    UndecodableLinkShape,
    UnknownAgent,
    UnsupportedLinkKind,
    UnsupportedMarketplaceForAgent,
)
from agentlink.listing import ListingLink
from agentlink.marketplaces import build_raw_link, extract_id, identify_marketplace, is_raw_link, parse_raw_link
from agentlink.models import Agent, ListingKind, ListingRef, Marketplace, SafeResult
from agentlink.transcoder import (
    parse_listing,
    safe_parse_listing,
    safe_to_agent,
    safe_to_raw,
    to_agent,
    to_raw,
)

__all__ = [
    "Agent",
    "AgentNotDetected",
    "DecodeFailed",
    "IdNotFound",
    "LinkError",
    "ListingKind",
    "ListingLink",
    "ListingRef",
    "Marketplace",
    "MarketplaceNotDetected",
    "RawLinkNotFound",
    "SafeResult",
    "UndecodableLinkShape",
    "UnknownAgent",
    "UnsupportedLinkKind",
    "UnsupportedMarketplaceForAgent",
    "build_raw_link",
    "detect_agent",
    "detect_marketplace",
    "extract_id",
    "identify_marketplace",
    "is_agent_link",
    "is_raw_link",
    "parse_listing",
    "parse_raw_link",
    "safe_parse_listing",
    "safe_to_agent",
    "safe_to_raw",
    "to_agent",
    "to_raw",
]
