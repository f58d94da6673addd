"""Text and structured generation backed by the Anthropic API.

Agents never talk to the provider directly: they hand a parameter struct to a
``Generator`` and get back either a completed result or a lazy stream of text
fragments. ``AnthropicGenerator`` is the production implementation; tests
substitute their own.
"""

import json
from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, AsyncIterator

import anthropic
from pydantic import BaseModel, TypeAdapter, ValidationError

from agent_network.errors import GenerationError, ObjectValidationError, StreamConsumedError
from agent_network.models import (
    ObjectParams,
    ObjectResult,
    TextParams,
    TextResult,
    ToolCall,
    ToolResult,
    Usage,
)
from agent_network.utils.config import Settings, get_settings
from agent_network.utils.logging import get_logger

logger = get_logger(__name__)


class StreamTextResult:
    """Lazy, finite, single-pass stream of generated text.

    Nothing is requested from the provider until ``text_stream`` is iterated.
    """

    def __init__(self, fragments: AsyncIterator[str]):
        self._fragments = fragments
        self._started = False
        self._done = False
        self._chunks: list[str] = []

    @property
    def text_stream(self) -> AsyncIterator[str]:
        if self._started:
            raise StreamConsumedError("Stream has already been consumed")
        self._started = True
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[str]:
        async for fragment in self._fragments:
            self._chunks.append(fragment)
            yield fragment
        self._done = True

    async def text(self) -> str:
        """Drain the stream and return the full text."""
        if not self._started:
            async for _ in self.text_stream:
                pass
        elif not self._done:
            raise StreamConsumedError("Stream was only partially consumed")
        return "".join(self._chunks)


class StreamObjectResult(StreamTextResult):
    """Stream of partial JSON for a schema-constrained object."""

    def __init__(
        self,
        fragments: AsyncIterator[str],
        schema: type[BaseModel],
        output: str = "object",
    ):
        super().__init__(fragments)
        self.schema = schema
        self.output = output

    async def object(self) -> Any:
        """Drain the stream and validate the accumulated JSON."""
        raw = await self.text()
        try:
            data = json.loads(raw) if raw else {}
        except json.JSONDecodeError as e:
            raise ObjectValidationError(f"Streamed output is not valid JSON: {e}") from e
        return parse_object(data, self.schema, self.output)


class Generator(ABC):
    """The generation capability agents delegate to."""

    @abstractmethod
    async def generate_text(self, params: TextParams) -> TextResult:
        """Generate text and return the completed result."""
        ...

    @abstractmethod
    def stream_text(self, params: TextParams) -> StreamTextResult:
        """Stream text fragments as they are generated."""
        ...

    @abstractmethod
    async def generate_object(self, params: ObjectParams) -> ObjectResult:
        """Generate an object that validates against ``params.output_schema``."""
        ...

    @abstractmethod
    def stream_object(self, params: ObjectParams) -> StreamObjectResult:
        """Stream the JSON text of a schema-constrained object."""
        ...


def object_tool(params: ObjectParams) -> dict[str, Any]:
    """Build the forced tool whose input carries the structured output."""
    schema = params.output_schema
    name = params.schema_name or schema.__name__
    description = (
        params.schema_description
        or (schema.__doc__ or "").strip()
        or f"Respond with a {name} object."
    )
    input_schema = schema.model_json_schema()

    if params.output == "array":
        defs = input_schema.pop("$defs", None)
        input_schema = {
            "type": "object",
            "properties": {"elements": {"type": "array", "items": input_schema}},
            "required": ["elements"],
        }
        if defs:
            input_schema["$defs"] = defs

    return {"name": name, "description": description, "input_schema": input_schema}


def parse_object(data: Any, schema: type[BaseModel], output: str = "object") -> Any:
    """Validate raw tool input against the schema."""
    try:
        if output == "array":
            elements = data.get("elements", []) if isinstance(data, dict) else data
            return TypeAdapter(list[schema]).validate_python(elements)
        return schema.model_validate(data)
    except ValidationError as e:
        raise ObjectValidationError(
            f"Output does not match schema {schema.__name__}: {e}"
        ) from e


def _usage(response: Any) -> Usage:
    usage = getattr(response, "usage", None)
    if usage is None:
        return Usage()
    return Usage(input_tokens=usage.input_tokens, output_tokens=usage.output_tokens)


def _generation_error(e: anthropic.APIError) -> GenerationError:
    """Translate a provider exception into a GenerationError."""
    if isinstance(e, anthropic.RateLimitError):
        logger.warning(f"Rate limit hit: {e}")
        return GenerationError("API rate limit reached. Please wait a moment and try again.")
    if isinstance(e, anthropic.AuthenticationError):
        logger.error(f"Authentication error: {e}")
        return GenerationError("API authentication failed. Please check your ANTHROPIC_API_KEY.")
    if isinstance(e, anthropic.APIConnectionError):
        logger.error(f"Connection error: {e}")
        return GenerationError("Could not connect to the API. Please check your internet connection.")
    logger.error(f"API error: {e}")
    return GenerationError(f"API error: {e.message}")


class AnthropicGenerator(Generator):
    """Generator that calls the Anthropic Messages API."""

    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None = None,
        settings: Settings | None = None,
    ):
        self._client = client
        self._settings = settings or get_settings()

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic(
                api_key=self._settings.anthropic_api_key or None
            )
        return self._client

    def _request(
        self,
        params: TextParams | ObjectParams,
        messages: list[dict[str, Any]],
        tools: list[dict[str, Any]] | None = None,
        tool_choice: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Build keyword arguments for a Messages API call."""
        defaults = self._settings.generation
        request: dict[str, Any] = {
            "model": params.model,
            "max_tokens": params.max_tokens or defaults.max_tokens,
            "messages": messages,
        }
        if params.system:
            request["system"] = params.system
        temperature = params.temperature if params.temperature is not None else defaults.temperature
        if temperature is not None:
            request["temperature"] = temperature
        if tools:
            request["tools"] = tools
        if tool_choice:
            request["tool_choice"] = tool_choice

        # Provider options the parameter structs don't know about
        for key, value in (params.model_extra or {}).items():
            request.setdefault(key, value)
        return request

    async def _call_api(self, request: dict[str, Any]) -> Any:
        """Make a single API call with error handling."""
        try:
            return await self.client.messages.create(**request)
        except anthropic.APIError as e:
            raise _generation_error(e) from e

    async def generate_text(self, params: TextParams) -> TextResult:
        messages: list[dict[str, Any]] = [{"role": "user", "content": params.prompt}]
        tools = params.tools.to_anthropic() if params.tools else None
        result = TextResult(steps=0)

        for _ in range(max(params.max_steps, 1)):
            response = await self._call_api(self._request(params, messages, tools=tools))
            result.steps += 1
            result.usage = result.usage + _usage(response)
            result.finish_reason = response.stop_reason
            result.text = "".join(b.text for b in response.content if b.type == "text")

            tool_use_blocks = [b for b in response.content if b.type == "tool_use"]
            if not tool_use_blocks:
                break

            tool_messages = []
            for block in tool_use_blocks:
                logger.info(f"Calling tool: {block.name}")
                arguments = dict(block.input or {})
                if params.tools is not None:
                    output = await params.tools.execute(block.name, arguments)
                else:
                    output = {"error": f"Unknown tool: {block.name}"}

                result.tool_calls.append(ToolCall(id=block.id, name=block.name, arguments=arguments))
                result.tool_results.append(ToolResult(id=block.id, name=block.name, result=output))
                tool_messages.append(
                    {
                        "type": "tool_result",
                        "tool_use_id": block.id,
                        "content": json.dumps(output, default=str),
                    }
                )

            messages.append({"role": "assistant", "content": response.content})
            messages.append({"role": "user", "content": tool_messages})

        return result

    def stream_text(self, params: TextParams) -> StreamTextResult:
        request = self._request(
            params,
            [{"role": "user", "content": params.prompt}],
            tools=params.tools.to_anthropic() if params.tools else None,
        )
        return StreamTextResult(self._text_fragments(request))

    async def _text_fragments(self, request: dict[str, Any]) -> AsyncIterator[str]:
        try:
            async with self.client.messages.stream(**request) as stream:
                async for text in stream.text_stream:
                    yield text
        except anthropic.APIError as e:
            raise _generation_error(e) from e

    async def generate_object(self, params: ObjectParams) -> ObjectResult:
        tool = object_tool(params)
        request = self._request(
            params,
            [{"role": "user", "content": params.prompt}],
            tools=[tool],
            tool_choice={"type": "tool", "name": tool["name"]},
        )
        response = await self._call_api(request)

        block = next((b for b in response.content if b.type == "tool_use"), None)
        if block is None:
            raise ObjectValidationError("Model did not return structured output")

        return ObjectResult(
            object=parse_object(block.input, params.output_schema, params.output),
            finish_reason=response.stop_reason,
            usage=_usage(response),
        )

    def stream_object(self, params: ObjectParams) -> StreamObjectResult:
        tool = object_tool(params)
        request = self._request(
            params,
            [{"role": "user", "content": params.prompt}],
            tools=[tool],
            tool_choice={"type": "tool", "name": tool["name"]},
        )
        return StreamObjectResult(
            self._json_fragments(request), params.output_schema, params.output
        )

    async def _json_fragments(self, request: dict[str, Any]) -> AsyncIterator[str]:
        try:
            async with self.client.messages.stream(**request) as stream:
                async for event in stream:
                    if event.type == "input_json":
                        yield event.partial_json
        except anthropic.APIError as e:
            raise _generation_error(e) from e


@lru_cache
def default_generator() -> AnthropicGenerator:
    """Shared generator used by agents and networks that aren't given one."""
    return AnthropicGenerator()
