"""
Agent primitive sets: the calls the facade forwards to once the agent is known
to be loaded.
"""

from .base import AgentPrimitives, Scalar
from .agent import NewRelicAgent

__all__ = [
    "AgentPrimitives",
    "NewRelicAgent",
    "Scalar",
]
