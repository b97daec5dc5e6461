from abc import ABC, abstractmethod
from typing import Mapping, Optional, Union

Scalar = Union[str, int, float, bool]


class AgentPrimitives(ABC):
    """
    The set of agent calls the facade forwards to.

    One method per agent primitive, named after the agent's ``newrelic_*``
    functions without the prefix. Implementations perform the call
    unconditionally: deciding *whether* to call is the facade's job, so an
    implementation may assume the agent is loaded.
    """

    @abstractmethod
    def add_custom_parameter(self, key: str, value: Scalar) -> bool:
        pass

    @abstractmethod
    def add_custom_tracer(self, function_name: str) -> bool:
        pass

    @abstractmethod
    def background_job(self, flag: bool) -> None:
        pass

    @abstractmethod
    def capture_params(self, flag: bool) -> None:
        pass

    @abstractmethod
    def custom_metric(self, name: str, value: float) -> bool:
        pass

    @abstractmethod
    def disable_autorum(self) -> None:
        pass

    @abstractmethod
    def end_of_transaction(self) -> None:
        pass

    @abstractmethod
    def end_transaction(self, ignore: bool) -> None:
        pass

    @abstractmethod
    def get_browser_timing_footer(self, include_tags: bool) -> str:
        pass

    @abstractmethod
    def get_browser_timing_header(self, include_tags: bool) -> str:
        pass

    @abstractmethod
    def ignore_apdex(self) -> None:
        pass

    @abstractmethod
    def ignore_transaction(self) -> None:
        pass

    @abstractmethod
    def name_transaction(self, name: str) -> None:
        pass

    @abstractmethod
    def notice_error(self, error: Union[str, BaseException]) -> None:
        pass

    @abstractmethod
    def record_custom_event(self, name: str, attributes: Mapping[str, Scalar]) -> None:
        pass

    @abstractmethod
    def set_appname(self, name: str, license: Optional[str], xmit: bool) -> bool:
        pass

    @abstractmethod
    def set_user_attributes(self, user: str, account: str, product: str) -> bool:
        pass

    @abstractmethod
    def start_transaction(self, name: str, license: Optional[str]) -> bool:
        pass
