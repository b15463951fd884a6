"""Decorator-based registry of agent codecs.

Concrete codec classes register themselves at import time via
``@register_agent(Agent.CNFANS)``.  The detector and the transcoder resolve
an ``Agent`` to its class via ``get_codec(agent)``; neither imports a
concrete codec directly.
"""

from __future__ import annotations

from agentlink.models import Agent

_agent_registry: dict[Agent, type] = {}


def register_agent(agent: Agent | str):
    """Class decorator that registers a codec under *agent*."""
    key = Agent(agent)

    def decorator(cls: type) -> type:
        if key in _agent_registry:
            raise ValueError(
                f"Duplicate agent registration: {key.value!r} is already "
                f"registered to {_agent_registry[key].__name__}"
            )
        cls.agent = key
        _agent_registry[key] = cls
        return cls

    return decorator


def get_codec(agent: Agent | str) -> type:
    """Return the codec class registered under *agent*."""
    try:
        return _agent_registry[Agent(agent)]
    except (KeyError, ValueError):
        available = ", ".join(sorted(a.value for a in _agent_registry)) or "(none)"
        raise KeyError(
            f"Unknown agent {agent!r}. Available: {available}"
        ) from None


def registered_agents() -> list[Agent]:
    """Registered agents in registration order (the detector's match order)."""
    return list(_agent_registry)


def list_registered() -> dict[str, str]:
    """Return ``{agent: codec class name}`` sorted by agent name."""
    return {
        agent.value: cls.__name__
        for agent, cls in sorted(_agent_registry.items(), key=lambda kv: kv[0].value)
    }
