"""
Guarded dispatch over the New Relic agent.

Every operation checks whether the agent is loaded and only then forwards to
the matching agent primitive. With the agent absent each operation is a cheap
no-op returning a documented default, so application code can call the facade
unconditionally in development, CI and production alike.

Quick-start::

    import newrelic_facade

    newrelic_facade.name_transaction("checkout/confirm")
    newrelic_facade.add_custom_parameter("cart_size", 3)
    header = newrelic_facade.get_browser_timing_header()  # "" without the agent

Failures raised by the agent itself are never caught here; they reach the
caller unchanged.
"""

from __future__ import annotations

import functools
import logging
import threading
from typing import Any, Callable, Mapping, Optional, TypeVar, Union

from .detect import AgentDetector, ModuleRegistryDetector
from .primitives import AgentPrimitives, NewRelicAgent, Scalar

logger = logging.getLogger("newrelic_facade.facade")

F = TypeVar("F", bound=Callable[..., Any])


def _as_text(result: Any) -> str:
    """String cast for snippet getters: ``False``/``None`` become ``""``."""
    if result is False or result is None:
        return ""
    return str(result)


class Facade:
    """Agent operations guarded by an availability check.

    :param detector: Decides, per call, whether the agent is loaded.
    :param primitives: Agent calls to forward to when it is.
    """

    def __init__(self, detector: AgentDetector, primitives: AgentPrimitives):
        self.detector = detector
        self.primitives = primitives

    def run(self, callback: Callable[[], Any]) -> Any:
        """Call *callback* if the agent is loaded, otherwise return ``False``.

        The detector is queried once and *callback* invoked at most once. Its
        return value and any exception it raises pass through untouched.
        """
        if self.detector.is_active():
            return callback()

        logger.debug("Agent not loaded; skipping %s", getattr(callback, "__name__", callback))
        return False

    # -- transaction attributes --

    def add_custom_parameter(self, key: str, value: Scalar) -> bool:
        """Attach a custom attribute to the current transaction and span."""
        key = str(key)
        return self.run(lambda: self.primitives.add_custom_parameter(key, value))

    def set_user_attributes(self, user: str, account: str, product: str) -> bool:
        """Create the ``user``, ``account`` and ``product`` custom attributes."""
        user, account, product = str(user), str(account), str(product)
        return self.run(lambda: self.primitives.set_user_attributes(user, account, product))

    # -- instrumentation --

    def add_custom_tracer(self, function_name: str) -> bool:
        """Instrument an additional function or method."""
        function_name = str(function_name)
        return self.run(lambda: self.primitives.add_custom_tracer(function_name))

    def custom_metric(self, name: str, value: float) -> bool:
        """Record a custom metric, *value* in milliseconds."""
        name, value = str(name), float(value)
        return self.run(lambda: self.primitives.custom_metric(name, value))

    def record_custom_event(self, name: str, attributes: Mapping[str, Scalar]) -> None:
        """Record a custom event with the given name and attributes."""
        name, attributes = str(name), dict(attributes)
        self.run(lambda: self.primitives.record_custom_event(name, attributes))

    def notice_error(self, error: Union[str, BaseException]) -> None:
        """Report an error the agent does not collect on its own."""
        self.run(lambda: self.primitives.notice_error(error))

    # -- transaction control --

    def background_job(self, flag: bool = True) -> None:
        """Mark the current transaction as a background job (or a web one)."""
        flag = bool(flag)
        self.run(lambda: self.primitives.background_job(flag))

    def capture_params(self, flag: bool = True) -> None:
        """Enable or disable capture of request parameters."""
        flag = bool(flag)
        self.run(lambda: self.primitives.capture_params(flag))

    def name_transaction(self, name: str) -> None:
        """Set a custom name for the current transaction."""
        name = str(name)
        self.run(lambda: self.primitives.name_transaction(name))

    def ignore_apdex(self) -> None:
        """Leave the current transaction out of the Apdex score."""
        self.run(self.primitives.ignore_apdex)

    def ignore_transaction(self) -> None:
        """Do not report the current transaction."""
        self.run(self.primitives.ignore_transaction)

    def end_of_transaction(self) -> None:
        """Stop timing the current transaction but keep instrumenting it."""
        self.run(self.primitives.end_of_transaction)

    def end_transaction(self, ignore: bool = False) -> None:
        """Stop instrumenting the current transaction immediately."""
        ignore = bool(ignore)
        self.run(lambda: self.primitives.end_transaction(ignore))

    def start_transaction(self, name: str, license: Optional[str] = None) -> bool:
        """Start a new transaction, usually after ending one manually."""
        name = str(name)
        return self.run(lambda: self.primitives.start_transaction(name, license))

    def set_appname(self, name: str, license: Optional[str] = None, xmit: bool = False) -> bool:
        """Set the application name data is rolled up under."""
        name, xmit = str(name), bool(xmit)
        return self.run(lambda: self.primitives.set_appname(name, license, xmit))

    # -- browser monitoring --

    def disable_autorum(self) -> None:
        """Disable automatic injection of the browser monitoring snippet."""
        self.run(self.primitives.disable_autorum)

    def get_browser_timing_header(self, include_tags: bool = True) -> str:
        """Browser monitoring snippet for the page ``<head>``; ``""`` without the agent."""
        include_tags = bool(include_tags)
        return _as_text(self.run(lambda: self.primitives.get_browser_timing_header(include_tags)))

    def get_browser_timing_footer(self, include_tags: bool = True) -> str:
        """Browser monitoring snippet for the end of the page; ``""`` without the agent."""
        include_tags = bool(include_tags)
        return _as_text(self.run(lambda: self.primitives.get_browser_timing_footer(include_tags)))


# ---------------------------------------------------------------------------
# Default facade
# ---------------------------------------------------------------------------

# Module-level singleton, created lazily.
_facade: Optional[Facade] = None
_facade_lock = threading.Lock()


def get_facade() -> Facade:
    """Return the module-level facade, creating it on first call."""
    global _facade
    if _facade is None:
        with _facade_lock:
            if _facade is None:
                _facade = Facade(ModuleRegistryDetector(), NewRelicAgent())
                logger.debug("Created default facade")
    return _facade


def set_facade(facade: Optional[Facade]) -> None:
    """Replace the module-level facade. ``None`` restores the default on next use."""
    global _facade
    with _facade_lock:
        _facade = facade


def guarded(default: Any = False) -> Callable[[F], F]:
    """Decorator running a function only while the agent is loaded.

    Without the agent the wrapped function is not called and *default* is
    returned instead.
    """

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            facade = get_facade()
            if not facade.detector.is_active():
                return default
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


# ---------------------------------------------------------------------------
# Module-level operations on the default facade
# ---------------------------------------------------------------------------


def run(callback: Callable[[], Any]) -> Any:
    return get_facade().run(callback)


def add_custom_parameter(key: str, value: Scalar) -> bool:
    return get_facade().add_custom_parameter(key, value)


def add_custom_tracer(function_name: str) -> bool:
    return get_facade().add_custom_tracer(function_name)


def background_job(flag: bool = True) -> None:
    get_facade().background_job(flag)


def capture_params(flag: bool = True) -> None:
    get_facade().capture_params(flag)


def custom_metric(name: str, value: float) -> bool:
    return get_facade().custom_metric(name, value)


def disable_autorum() -> None:
    get_facade().disable_autorum()


def end_of_transaction() -> None:
    get_facade().end_of_transaction()


def end_transaction(ignore: bool = False) -> None:
    get_facade().end_transaction(ignore)


def get_browser_timing_footer(include_tags: bool = True) -> str:
    return get_facade().get_browser_timing_footer(include_tags)


def get_browser_timing_header(include_tags: bool = True) -> str:
    return get_facade().get_browser_timing_header(include_tags)


def ignore_apdex() -> None:
    get_facade().ignore_apdex()


def ignore_transaction() -> None:
    get_facade().ignore_transaction()


def name_transaction(name: str) -> None:
    get_facade().name_transaction(name)


def notice_error(error: Union[str, BaseException]) -> None:
    get_facade().notice_error(error)


def record_custom_event(name: str, attributes: Mapping[str, Scalar]) -> None:
    get_facade().record_custom_event(name, attributes)


def set_appname(name: str, license: Optional[str] = None, xmit: bool = False) -> bool:
    return get_facade().set_appname(name, license, xmit)


def set_user_attributes(user: str, account: str, product: str) -> bool:
    return get_facade().set_user_attributes(user, account, product)


def start_transaction(name: str, license: Optional[str] = None) -> bool:
    return get_facade().start_transaction(name, license)
