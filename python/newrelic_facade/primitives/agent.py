import importlib
import logging
import re
import threading
from typing import Any, Mapping, Optional, Union

from ..config import AGENT_PACKAGE
from ..errors import AgentError, ConfigError
from .base import AgentPrimitives, Scalar

logger = logging.getLogger("newrelic_facade.primitives.agent")

AGENT_API_MODULE = f"{AGENT_PACKAGE}.agent"

_SCRIPT_BLOCK = re.compile(r"<script[^>]*>(.*?)</script>", re.DOTALL)

# Attribute names the PHP agent uses for newrelic_set_user_attributes().
USER_ATTRIBUTE_KEYS = ("user", "account", "product")


class NewRelicAgent(AgentPrimitives):
    """
    Primitive set backed by the New Relic Python agent (``newrelic.agent``).

    The agent API module is imported on first use, never at construction, so
    building the default facade does not load the agent into ``sys.modules``
    and fool the availability check.

    :param api: Object exposing the ``newrelic.agent`` API. Resolved lazily
        from the installed agent when omitted.
    """

    def __init__(self, api: Any = None):
        self._api = api
        self._api_lock = threading.Lock()

    @property
    def api(self) -> Any:
        if self._api is None:
            with self._api_lock:
                if self._api is None:
                    try:
                        self._api = importlib.import_module(AGENT_API_MODULE)
                    except ImportError as e:
                        raise AgentError(
                            f"Could not import {AGENT_API_MODULE}; install newrelic-facade[agent]"
                        ) from e
                    logger.info("Bound agent primitives to %s", AGENT_API_MODULE)
        return self._api

    # -- transaction attributes --

    def add_custom_parameter(self, key: str, value: Scalar) -> bool:
        if self.api.current_transaction() is None:
            return False
        return self.api.add_custom_attribute(key, value) is not False

    def set_user_attributes(self, user: str, account: str, product: str) -> bool:
        if self.api.current_transaction() is None:
            return False
        results = [
            self.api.add_custom_attribute(key, value)
            for key, value in zip(USER_ATTRIBUTE_KEYS, (user, account, product))
        ]
        return all(result is not False for result in results)

    # -- instrumentation --

    def add_custom_tracer(self, function_name: str) -> bool:
        """Wrap ``"package.module:Class.method"`` in a function trace."""
        module, _, object_path = function_name.partition(":")
        if not module or not object_path:
            raise ConfigError(
                f"Tracer name must look like 'module:object.path', got {function_name!r}"
            )
        self.api.wrap_function_trace(module, object_path)
        return True

    def custom_metric(self, name: str, value: float) -> bool:
        """Record against the current transaction's application, else the default one."""
        if self.api.current_transaction() is None and not self.api.application().active:
            return False
        self.api.record_custom_metric(name, value)
        return True

    def record_custom_event(self, name: str, attributes: Mapping[str, Scalar]) -> None:
        self.api.record_custom_event(name, dict(attributes))

    def notice_error(self, error: Union[str, BaseException]) -> None:
        if not isinstance(error, BaseException):
            error = RuntimeError(str(error))
        self.api.notice_error(error=(type(error), error, error.__traceback__))

    # -- transaction control --

    def background_job(self, flag: bool) -> None:
        self.api.set_background_task(flag)

    def capture_params(self, flag: bool) -> None:
        self.api.capture_request_params(flag)

    def name_transaction(self, name: str) -> None:
        self.api.set_transaction_name(name)

    def ignore_apdex(self) -> None:
        self.api.suppress_apdex_metric()

    def ignore_transaction(self) -> None:
        self.api.ignore_transaction()

    def end_of_transaction(self) -> None:
        self.api.end_of_transaction()

    def end_transaction(self, ignore: bool) -> None:
        transaction = self.api.current_transaction()
        if transaction is None:
            return
        if ignore:
            transaction.ignore_transaction = True
        transaction.__exit__(None, None, None)

    def start_transaction(self, name: str, license: Optional[str]) -> bool:
        self._apply_license(license)
        task = self.api.BackgroundTask(self.api.application(), name)
        task.__enter__()
        return bool(task.enabled)

    def set_appname(self, name: str, license: Optional[str], xmit: bool) -> bool:
        self._apply_license(license)
        if xmit:
            # Harvests are per application in the Python agent, so there is no
            # in-flight transaction data to flush to the old name.
            logger.warning("set_appname(xmit=True) has no effect with the Python agent")
        application = self.api.register_application(name=name)
        return application is not None

    def _apply_license(self, license: Optional[str]) -> None:
        if license:
            self.api.global_settings().license_key = license

    # -- browser monitoring --

    def get_browser_timing_header(self, include_tags: bool) -> str:
        snippet = self.api.get_browser_timing_header() or ""
        if include_tags:
            return snippet
        bodies = _SCRIPT_BLOCK.findall(snippet)
        return "".join(bodies) if bodies else snippet

    def disable_autorum(self) -> None:
        self.api.disable_browser_autorum()

    def get_browser_timing_footer(self, include_tags: bool) -> str:
        # The current browser agent is injected entirely from the header.
        return ""
