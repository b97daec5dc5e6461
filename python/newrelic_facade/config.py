"""
Environment configuration for the facade.

Settings are read from the environment on every use so that toggling them in
a running process (or under ``unittest.mock.patch.dict``) takes effect on the
next call.

``NEWRELIC_FACADE_ENABLED``
    Master switch (default ``true``). When false the facade reports the agent
    inactive even if it is loaded. Unrecognised values count as false.
"""

import logging
import os

logger = logging.getLogger("newrelic_facade.config")

# Package whose presence in sys.modules means "agent loaded"; the primitive
# set imports its ``agent`` submodule.
AGENT_PACKAGE = "newrelic"

_ENABLED_DEFAULT = "true"

_TRUTHY = ("1", "true", "yes")
_FALSY = ("0", "false", "no")


def _env_bool(key: str, default: str) -> bool:
    raw = os.environ.get(key, default).strip().lower()
    if raw not in _TRUTHY + _FALSY:
        logger.warning("Unrecognised %s=%r; treating as false", key, raw)
    return raw in _TRUTHY


def facade_enabled() -> bool:
    return _env_bool("NEWRELIC_FACADE_ENABLED", _ENABLED_DEFAULT)
