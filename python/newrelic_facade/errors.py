class NewRelicFacadeException(Exception):
    """Base class for errors raised by the facade's own code."""


class ConfigError(NewRelicFacadeException):
    """An environment setting or tracer name could not be interpreted."""


class AgentError(NewRelicFacadeException):
    """The agent module could not be imported although dispatch reached it."""


__all__ = [
    "NewRelicFacadeException",
    "ConfigError",
    "AgentError",
]
