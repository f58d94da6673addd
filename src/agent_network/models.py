"""Pydantic models for generation parameters and results."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from agent_network.tools import ToolSet


class Usage(BaseModel):
    """Token usage reported by the provider."""

    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def __add__(self, other: "Usage") -> "Usage":
        return Usage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )


class ToolCall(BaseModel):
    """A tool invocation requested by the model."""

    id: str
    name: str
    arguments: dict[str, Any] = Field(default_factory=dict)


class ToolResult(BaseModel):
    """Output of a tool invocation."""

    id: str
    name: str
    result: Any = None


class TextResult(BaseModel):
    """Completed text generation."""

    text: str = ""
    tool_calls: list[ToolCall] = Field(default_factory=list)
    tool_results: list[ToolResult] = Field(default_factory=list)
    finish_reason: Optional[str] = None
    usage: Usage = Field(default_factory=Usage)
    steps: int = 1


class ObjectResult(BaseModel):
    """Completed structured generation."""

    object: Any = None
    finish_reason: Optional[str] = None
    usage: Usage = Field(default_factory=Usage)


class TextParams(BaseModel):
    """Parameters for text generation.

    Unknown keys are kept so provider-specific options pass through.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    prompt: str
    model: str
    system: Optional[str] = None
    tools: Optional[ToolSet] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    max_steps: int = 1


class ObjectParams(BaseModel):
    """Parameters for schema-constrained generation."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    prompt: str
    model: str
    output_schema: type[BaseModel] = Field(alias="schema")
    schema_name: Optional[str] = None
    schema_description: Optional[str] = None
    output: Literal["object", "array"] = "object"
    system: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
