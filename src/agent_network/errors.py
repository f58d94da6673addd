"""Exceptions raised by agents, the network and the generation layer."""


class AgentNetworkError(Exception):
    """Base class for all agent network errors."""


class MissingParameterError(AgentNetworkError):
    """An agent was run without one of its required parameters."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required parameters: {', '.join(missing)}")


class AgentNotRegisteredError(AgentNetworkError):
    """An inferred agent name has no entry in the network registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Agent "{name}" not registered.')


class NoApplicableAgentsError(AgentNetworkError):
    """Agent inference selected nothing for the prompt."""

    def __init__(self, message: str = "No applicable agents found for the given prompt."):
        super().__init__(message)


class GenerationError(AgentNetworkError):
    """The model provider failed to produce a result."""


class ObjectValidationError(AgentNetworkError):
    """Structured output did not match the requested schema."""


class StreamConsumedError(AgentNetworkError):
    """A single-pass fragment stream was iterated more than once."""
