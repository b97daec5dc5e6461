"""
Guarded facade over the New Relic agent.

Each operation forwards to the agent when it is loaded and is a no-op
otherwise, so instrumentation calls can stay in application code that also
runs without the agent.
"""

from .errors import AgentError, ConfigError, NewRelicFacadeException
from .detect import AgentDetector, ModuleRegistryDetector, StaticDetector
from .primitives import AgentPrimitives, NewRelicAgent
from .facade import (
    Facade,
    get_facade,
    set_facade,
    guarded,
    run,
    add_custom_parameter,
    add_custom_tracer,
    background_job,
    capture_params,
    custom_metric,
    disable_autorum,
    end_of_transaction,
    end_transaction,
    get_browser_timing_footer,
    get_browser_timing_header,
    ignore_apdex,
    ignore_transaction,
    name_transaction,
    notice_error,
    record_custom_event,
    set_appname,
    set_user_attributes,
    start_transaction,
)

__all__ = [
    "NewRelicFacadeException",
    "ConfigError",
    "AgentError",
    "AgentDetector",
    "ModuleRegistryDetector",
    "StaticDetector",
    "AgentPrimitives",
    "NewRelicAgent",
    "Facade",
    "get_facade",
    "set_facade",
    "guarded",
    "run",
    "add_custom_parameter",
    "add_custom_tracer",
    "background_job",
    "capture_params",
    "custom_metric",
    "disable_autorum",
    "end_of_transaction",
    "end_transaction",
    "get_browser_timing_footer",
    "get_browser_timing_header",
    "ignore_apdex",
    "ignore_transaction",
    "name_transaction",
    "notice_error",
    "record_custom_event",
    "set_appname",
    "set_user_attributes",
    "start_transaction",
]
