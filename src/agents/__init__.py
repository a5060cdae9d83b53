"""
DevMind — Agents Package
Registry of all specialist agents for lookup by task family.
"""

from agents.base import BaseAgent
from agents.database import DatabaseAgent
from agents.devops import DevOpsAgent
from agents.performance import PerformanceAgent
from agents.security import SecurityAgent
from agents.testing import TestingAgent


# ── Agent Registry ────────────────────────────
# The command line uses this to instantiate agents by family name.

AGENT_REGISTRY: dict[str, type[BaseAgent]] = {
    "security": SecurityAgent,
    "performance": PerformanceAgent,
    "testing": TestingAgent,
    "database": DatabaseAgent,
    "devops": DevOpsAgent,
}


def get_agent(name: str, **kwargs) -> BaseAgent:
    """Instantiate an agent by name from the registry."""
    if name not in AGENT_REGISTRY:
        raise ValueError(
            f"Unknown agent '{name}'. Available: {list(AGENT_REGISTRY.keys())}"
        )
    return AGENT_REGISTRY[name](**kwargs)


__all__ = [
    "BaseAgent",
    "SecurityAgent",
    "PerformanceAgent",
    "TestingAgent",
    "DatabaseAgent",
    "DevOpsAgent",
    "AGENT_REGISTRY",
    "get_agent",
]
