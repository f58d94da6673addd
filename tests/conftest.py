"""Pytest configuration and fixtures."""

from typing import Any, AsyncIterator, Callable, Union

import pytest

from agent_network.generation import Generator, StreamObjectResult, StreamTextResult
from agent_network.models import ObjectParams, ObjectResult, TextParams, TextResult
from agent_network.utils.config import CONFIG_DIR_ENV, get_settings


class FakeGenerator(Generator):
    """Generator returning canned output and recording every call."""

    def __init__(
        self,
        text: Union[str, Callable[[TextParams], str]] = "",
        fragments: list[str] | None = None,
        obj: Any = None,
    ):
        self.text = text
        self.fragments = fragments or []
        self.obj = obj
        self.calls: list[tuple[str, Any]] = []
        self.fragments_pulled = 0

    async def _fragments(self) -> AsyncIterator[str]:
        for fragment in self.fragments:
            self.fragments_pulled += 1
            yield fragment

    async def generate_text(self, params: TextParams) -> TextResult:
        self.calls.append(("generate_text", params))
        text = self.text(params) if callable(self.text) else self.text
        return TextResult(text=text)

    def stream_text(self, params: TextParams) -> StreamTextResult:
        self.calls.append(("stream_text", params))
        return StreamTextResult(self._fragments())

    async def generate_object(self, params: ObjectParams) -> ObjectResult:
        self.calls.append(("generate_object", params))
        return ObjectResult(object=self.obj)

    def stream_object(self, params: ObjectParams) -> StreamObjectResult:
        self.calls.append(("stream_object", params))
        return StreamObjectResult(self._fragments(), params.output_schema, params.output)


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep tests away from the repository config directory and .env."""
    monkeypatch.setenv(CONFIG_DIR_ENV, str(tmp_path))
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def generator() -> FakeGenerator:
    return FakeGenerator(text="Hello world", fragments=["Hel", "lo ", "world"])
