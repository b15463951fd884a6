"""Classify a URL as an agent link or a raw marketplace link.

Both classifications look only at the hostname.  Agent hosts and marketplace
domains are disjoint, so a URL is never both.
"""

from __future__ import annotations

# Importing the subpackage triggers @register_agent decorators in its __init__.py
import agentlink.codecs  # noqa: F401

from agentlink.errors import AgentNotDetected
from agentlink.marketplaces import identify_marketplace
from agentlink.models import Agent, Marketplace
from agentlink.registry import get_codec, registered_agents
from agentlink.urls import host_matches, hostname, strip_host_prefix


def agent_hosts() -> dict[Agent, tuple[str, ...]]:
    """Registered host patterns per agent, in detection order."""
    return {agent: get_codec(agent).hosts for agent in registered_agents()}


def detect_agent(url: str) -> Agent | None:
    """Return the agent owning *url*'s host; the first match wins."""
    host = strip_host_prefix(hostname(url))
    if not host:
        return None
    for agent, hosts in agent_hosts().items():
        if host_matches(host, hosts):
            return agent
    return None


def require_agent(url: str) -> Agent:
    agent = detect_agent(url)
    if agent is None:
        raise AgentNotDetected("Agent not detected", url)
    return agent


def detect_marketplace(url: str) -> Marketplace | None:
    return identify_marketplace(url)


def is_agent_link(url: str) -> bool:
    return detect_agent(url) is not None
