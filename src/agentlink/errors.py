"""Error taxonomy for link transcoding.

Every error carries the offending URL so a failure can be diagnosed from the
message alone.  All of them are ``ValueError`` subclasses: a link that cannot
be transcoded is bad input, not a broken program.
"""

from __future__ import annotations


class LinkError(ValueError):
    """Base class for every transcoding failure."""

    def __init__(self, reason: str, url: str | None = None) -> None:
        self.reason = reason
        self.url = url
        super().__init__(f"{reason}: {url}" if url else reason)


class MarketplaceNotDetected(LinkError):
    """The URL's host does not belong to any known marketplace."""


class AgentNotDetected(LinkError):
    """The URL's host does not belong to any known agent.

    Non-fatal during decoding: the generic fallback still runs.
    """


class UnknownAgent(LinkError):
    """The requested target is not one of the supported agents."""


class IdNotFound(LinkError):
    """The marketplace was recognised but no listing id could be extracted."""


class UnsupportedMarketplaceForAgent(LinkError):
    """The target agent cannot express listings from this marketplace."""


class UnsupportedLinkKind(LinkError):
    """The target agent has no link shape for this kind of listing."""


class DecodeFailed(LinkError):
    """A decoding strategy did not find its structural marker."""


class UndecodableLinkShape(LinkError):
    """The link is well formed but intentionally carries no listing reference.

    Raised instead of ``DecodeFailed`` so that no other strategy is tried.
    """


class RawLinkNotFound(LinkError):
    """Every decoding strategy failed."""
