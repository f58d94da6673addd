"""Collaborative agents: fetch data, analyze it, then summarize.

Each stage is a separate network call; the tool results of one stage become
the input of the next.
"""

import json
from typing import Any

import httpx

from agent_network.agents import TextAgent
from agent_network.generation import Generator, default_generator
from agent_network.models import TextParams
from agent_network.network import Network
from agent_network.tools import ToolSet
from agent_network.utils.logging import get_logger

logger = get_logger(__name__)

MODEL = "claude-sonnet-4-20250514"

GEOCODING_URL = "https://geocoding-api.open-meteo.com/v1/search"
FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
NEWS_URL = "https://api.spaceflightnewsapi.net/v4/articles/"


def data_fetch_tools() -> ToolSet:
    tools = ToolSet()

    @tools.register(
        name="fetch_weather",
        description="Fetches current weather data for a location",
        parameters={"city": {"type": "string", "description": "City name"}},
        required=["city"],
    )
    async def fetch_weather(city: str) -> dict[str, Any]:
        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
            geocode = await client.get(GEOCODING_URL, params={"name": city, "count": 1})
            geocode.raise_for_status()
            matches = geocode.json().get("results") or []
            if not matches:
                return {"error": f"Unknown city: {city}"}

            response = await client.get(
                FORECAST_URL,
                params={
                    "latitude": matches[0]["latitude"],
                    "longitude": matches[0]["longitude"],
                    "current_weather": "true",
                },
            )
            response.raise_for_status()
            return response.json()

    @tools.register(
        name="fetch_news",
        description="Fetches latest news articles about a topic",
        parameters={"topic": {"type": "string", "description": "Topic to search for"}},
        required=["topic"],
    )
    async def fetch_news(topic: str) -> list[dict[str, Any]]:
        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
            response = await client.get(
                NEWS_URL, params={"title_contains": topic, "limit": 5}
            )
            response.raise_for_status()
            return response.json().get("results", [])

    return tools


def analysis_tools(generator: Generator) -> ToolSet:
    tools = ToolSet()

    @tools.register(
        name="analyze_data",
        description="Analyzes provided data and generates insights",
        parameters={
            "data": {"description": "Data to analyze"},
            "context": {"type": "string", "description": "What the analysis is for"},
        },
        required=["data", "context"],
    )
    async def analyze_data(data: Any, context: str) -> str:
        result = await generator.generate_text(
            TextParams(
                model=MODEL,
                prompt=f"Analyze this data in the context of {context}:\n{json.dumps(data, default=str)}",
                max_tokens=500,
            )
        )
        return result.text

    return tools


def summary_tools(generator: Generator) -> ToolSet:
    tools = ToolSet()

    @tools.register(
        name="create_summary",
        description="Creates a summary with recommendations",
        parameters={
            "analyses": {"type": "array", "items": {"type": "string"}},
            "format": {"type": "string", "enum": ["brief", "detailed"]},
        },
        required=["analyses", "format"],
    )
    async def create_summary(analyses: list[str], format: str) -> str:
        joined = "\n".join(analyses)
        result = await generator.generate_text(
            TextParams(
                model=MODEL,
                prompt=f"Create a {format} summary and recommendations based on these analyses:\n{joined}",
                max_tokens=300,
            )
        )
        return result.text

    return tools


def build_network(generator: Generator | None = None) -> Network:
    """Network with data fetching, analysis and summary agents."""
    generator = generator or default_generator()
    network = Network(default_model=MODEL, generator=generator)

    network.register_agent(
        "data_fetcher",
        TextAgent(
            model=MODEL,
            system="You are a data fetching agent that retrieves and processes external information.",
            tools=data_fetch_tools(),
            generator=generator,
        ),
    )
    network.register_agent(
        "analyzer",
        TextAgent(
            model=MODEL,
            system="You are an analysis agent that processes and derives insights from data.",
            tools=analysis_tools(generator),
            generator=generator,
        ),
    )
    network.register_agent(
        "summarizer",
        TextAgent(
            model=MODEL,
            system="You are a summary agent that creates concise, actionable summaries from analyzed information.",
            tools=summary_tools(generator),
            generator=generator,
        ),
    )
    return network


def tool_results_text(results: dict[str, Any]) -> str:
    """Render each agent's tool results as one JSON line."""
    return "\n".join(
        json.dumps([r.result for r in value.tool_results], default=str)
        for value in results.values()
    )


async def run(network: Network, city: str) -> str:
    """Fetch weather and news for ``city``, analyze them, and summarize."""
    topic = f"travel to {city}"

    logger.info(f"Fetching weather and news for {city}")
    fetched = await network.execute(f"Fetch weather for {city} and news about {topic}")

    logger.info(f"Analyzing weather and news for {city}")
    analyzed = await network.execute(
        "Analyze the weather and news data to determine travel conditions\n\n"
        f"Input: {tool_results_text(fetched)}"
    )

    logger.info(f"Creating final summary for {city}")
    summarized = await network.execute(
        "Create a detailed summary of travel recommendations\n\n"
        f"Input: {tool_results_text(analyzed)}"
    )
    return tool_results_text(summarized)
