"""
Agent availability detection.

The facade asks a detector before every agent call. Detectors are cheap and
stateless: nothing is cached between calls, so an agent loaded (or disabled)
mid-process is picked up on the next call.
"""

import sys
from abc import ABC, abstractmethod

from .config import AGENT_PACKAGE, facade_enabled


class AgentDetector(ABC):
    """Answers whether the observability agent is loaded and usable."""

    @abstractmethod
    def is_active(self) -> bool:
        """Return True when agent primitives may be called."""


class ModuleRegistryDetector(AgentDetector):
    """Active when the agent module is already present in ``sys.modules``.

    ``newrelic-admin run-program`` and ``newrelic.agent.initialize()`` both
    load the agent package, so its presence in the module registry is what
    "the agent is loaded" means for a Python process. The check never imports
    the module itself.

    :param module_name: Module to look for. Defaults to the ``newrelic``
        package, the one ``NewRelicAgent`` binds to.
    """

    def __init__(self, module_name: str = AGENT_PACKAGE):
        self.module_name = module_name

    def is_active(self) -> bool:
        if not facade_enabled():
            return False
        return sys.modules.get(self.module_name) is not None


class StaticDetector(AgentDetector):
    """Detector with a fixed answer, for forcing the facade on or off."""

    def __init__(self, active: bool):
        self.active = bool(active)

    def is_active(self) -> bool:
        return self.active

    def __repr__(self) -> str:
        return f"StaticDetector(active={self.active})"
