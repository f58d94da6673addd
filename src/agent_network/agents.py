"""Agents: named parameter bundles wrapping a single kind of generation."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, ClassVar

from agent_network.errors import MissingParameterError
from agent_network.generation import (
    Generator,
    StreamObjectResult,
    StreamTextResult,
    default_generator,
)
from agent_network.models import ObjectParams, ObjectResult, TextParams, TextResult


class AgentKind(str, Enum):
    """The fixed set of agent variants."""

    TEXT = "text"
    OBJECT = "object"


class Agent(ABC):
    """Base class for all agents.

    Parameters are held in a plain dict owned by the agent. They may be partial
    at construction time; required keys are only checked when the agent runs.
    """

    kind: ClassVar[AgentKind]
    required_parameters: ClassVar[tuple[str, ...]] = ("prompt", "model")

    def __init__(
        self,
        parameters: dict[str, Any] | None = None,
        *,
        generator: Generator | None = None,
        **options: Any,
    ):
        self.parameters: dict[str, Any] = {**(parameters or {}), **options}
        self._generator = generator

    def __repr__(self) -> str:
        return f"{type(self).__name__}(parameters={sorted(self.parameters)})"

    @property
    def generator(self) -> Generator:
        if self._generator is None:
            self._generator = default_generator()
        return self._generator

    def set_parameters(self, parameters: dict[str, Any]) -> None:
        """Shallow-merge ``parameters`` into the current ones."""
        self.parameters = {**self.parameters, **parameters}

    def validate_parameters(self) -> None:
        """Raise MissingParameterError unless every required key has a value."""
        missing = [key for key in self.required_parameters if not self.parameters.get(key)]
        if missing:
            raise MissingParameterError(missing)

    @abstractmethod
    async def execute(self) -> Any:
        """Run the generation and return the completed result."""
        ...

    @abstractmethod
    def stream(self) -> StreamTextResult:
        """Start a streaming generation."""
        ...


class TextAgent(Agent):
    """Agent that generates free-form text, optionally calling tools."""

    kind = AgentKind.TEXT

    async def execute(self) -> TextResult:
        self.validate_parameters()
        return await self.generator.generate_text(TextParams.model_validate(self.parameters))

    def stream(self) -> StreamTextResult:
        self.validate_parameters()
        return self.generator.stream_text(TextParams.model_validate(self.parameters))


class ObjectAgent(Agent):
    """Agent that generates an object matching a pydantic schema."""

    kind = AgentKind.OBJECT
    required_parameters = ("prompt", "model", "schema")

    async def execute(self) -> ObjectResult:
        self.validate_parameters()
        return await self.generator.generate_object(ObjectParams.model_validate(self.parameters))

    def stream(self) -> StreamObjectResult:
        self.validate_parameters()
        return self.generator.stream_object(ObjectParams.model_validate(self.parameters))
