"""Tests for the example networks, run against a fake generator."""

from agent_network.examples import collaborative, form_builder
from agent_network.models import TextResult, ToolResult
from tests.conftest import FakeGenerator


class TestCollaborative:
    """Tests for the collaborative example."""

    def test_build_network(self):
        network = collaborative.build_network(FakeGenerator())

        assert network.agent_names == ["data_fetcher", "analyzer", "summarizer"]
        fetcher = network.get_agent("data_fetcher")
        assert fetcher.parameters["tools"].list_tools() == ["fetch_weather", "fetch_news"]
        assert network.get_agent("analyzer").parameters["tools"].list_tools() == ["analyze_data"]

    async def test_analysis_tool_uses_generator(self):
        generator = FakeGenerator(text="Looks sunny")
        tools = collaborative.analysis_tools(generator)

        result = await tools.execute("analyze_data", {"data": {"temp": 21}, "context": "travel"})

        assert result == "Looks sunny"
        _, params = generator.calls[0]
        assert params.max_tokens == 500
        assert '{"temp": 21}' in params.prompt

    def test_tool_results_text(self):
        results = {
            "data_fetcher": TextResult(
                tool_results=[ToolResult(id="1", name="fetch_weather", result={"temp": 21})]
            )
        }
        assert collaborative.tool_results_text(results) == '[{"temp": 21}]'

    async def test_run_chains_three_calls(self):
        generator = FakeGenerator(
            text=lambda params: "analyzer" if "Available agents" in params.prompt else "done"
        )
        network = collaborative.build_network(generator)

        summary = await collaborative.run(network, "London")

        inference_prompts = [p.prompt for name, p in generator.calls if "Available agents" in p.prompt]
        assert len(inference_prompts) == 3
        assert "Fetch weather for London" in inference_prompts[0]
        assert summary == "[]"


class TestFormBuilder:
    """Tests for the streaming form builder example."""

    async def test_streams_form_json(self):
        generator = FakeGenerator(
            text="form_builder",
            fragments=['{"name": "PHQ-9", ', '"fields": []}'],
        )
        network = form_builder.build_network(generator)
        received: list[str] = []

        await form_builder.run(network, "Build a form", received.append)

        assert "".join(received) == '{"name": "PHQ-9", "fields": []}'
        name, params = generator.calls[-1]
        assert name == "stream_object"
        assert params.output_schema is form_builder.Form
        assert params.model == form_builder.MODEL
