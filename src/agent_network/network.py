"""Agent network: registry, agent selection and execution."""

import asyncio
import inspect
from abc import ABC, abstractmethod
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

from agent_network.agents import Agent
from agent_network.errors import AgentNotRegisteredError, NoApplicableAgentsError
from agent_network.generation import Generator, default_generator
from agent_network.models import TextParams
from agent_network.prompts import get_inference_prompt
from agent_network.utils.config import Settings, get_settings
from agent_network.utils.logging import get_logger

logger = get_logger(__name__)

StreamCallback = Callable[[str], Union[None, Awaitable[None]]]


def resolve_model(agent_model: Any, default_model: Any) -> Any:
    """Pick the model an agent runs with.

    The agent's own model wins over the network default. ``None`` means neither
    is set, and the agent will fail validation when it runs.
    """
    return agent_model or default_model or None


def parse_agent_names(text: str) -> list[str]:
    """Split a model reply into agent names.

    Names are used verbatim: no deduplication and no check against the registry.
    """
    text = text.strip()
    if not text:
        return []
    return [name.strip() for name in text.split(",")]


class Selector(ABC):
    """Decides which registered agents should handle a prompt."""

    @abstractmethod
    async def select(self, network: "Network", prompt: str, multiple_agents: bool) -> list[str]:
        ...


class ModelSelector(Selector):
    """Asks a language model which agents to use."""

    def __init__(self, generator: Generator | None = None, settings: Settings | None = None):
        self._generator = generator
        self._settings = settings

    async def select(self, network: "Network", prompt: str, multiple_agents: bool) -> list[str]:
        settings = self._settings or get_settings()
        generator = self._generator or network.generator

        params = TextParams(
            prompt=get_inference_prompt(network.agent_names, prompt, multiple_agents),
            model=network.default_model or settings.network.fallback_model,
            max_tokens=settings.network.inference_max_tokens,
        )
        result = await generator.generate_text(params)
        return parse_agent_names(result.text)


class StaticSelector(Selector):
    """Always selects the same agents."""

    def __init__(self, names: list[str]):
        self.names = list(names)

    async def select(self, network: "Network", prompt: str, multiple_agents: bool) -> list[str]:
        return list(self.names)


class Network:
    """Dispatches prompts to registered agents.

    The network references agents but does not own them: callers may keep
    configuring an agent after registering it.
    """

    def __init__(
        self,
        default_model: Optional[str] = None,
        selector: Selector | None = None,
        generator: Generator | None = None,
    ):
        self.default_model = default_model
        self.selector = selector or ModelSelector()
        self._generator = generator
        self._agents: dict[str, Agent] = {}

    @property
    def generator(self) -> Generator:
        if self._generator is None:
            self._generator = default_generator()
        return self._generator

    @property
    def agents(self) -> Mapping[str, Agent]:
        """Read-only view of the registry."""
        return MappingProxyType(self._agents)

    @property
    def agent_names(self) -> list[str]:
        return list(self._agents.keys())

    def register_agent(self, name: str, agent: Agent) -> None:
        """Register an agent, replacing any agent already bound to ``name``."""
        self._agents[name] = agent
        logger.debug(f"Registered agent: {name}")

    def get_agent(self, name: str) -> Agent | None:
        return self._agents.get(name)

    async def infer_agents(self, prompt: str, multiple_agents: bool = False) -> list[str]:
        """Select agent names for the prompt."""
        names = await self.selector.select(self, prompt, multiple_agents)
        logger.info(f"Inferred agents: {', '.join(names) or '(none)'}")
        return names

    async def execute(
        self,
        prompt: str,
        multiple_agents: bool = False,
        stream: bool = False,
        stream_callback: StreamCallback | None = None,
    ) -> dict[str, Any]:
        """Run the agents selected for ``prompt``.

        Returns a mapping of agent name to result. Streamed agents send their
        fragments to ``stream_callback`` and are left out of the mapping. Any
        error aborts the whole call, including errors from sibling agents run
        concurrently.
        """
        agent_names = await self.infer_agents(prompt, multiple_agents)
        if not agent_names:
            raise NoApplicableAgentsError()

        results: dict[str, Any] = {}

        async def execute_agent(agent_name: str) -> None:
            agent = self._agents.get(agent_name)
            if agent is None:
                raise AgentNotRegisteredError(agent_name)

            agent.set_parameters(
                {
                    "prompt": prompt,
                    "model": resolve_model(agent.parameters.get("model"), self.default_model),
                }
            )
            logger.debug(f"Dispatching agent: {agent_name} (stream={stream})")

            if stream:
                streamed = agent.stream()
                async for fragment in streamed.text_stream:
                    if stream_callback is not None:
                        outcome = stream_callback(fragment)
                        if inspect.isawaitable(outcome):
                            await outcome
            else:
                results[agent_name] = await agent.execute()

        if not multiple_agents:
            await execute_agent(agent_names[0])
        else:
            await asyncio.gather(*(execute_agent(name) for name in agent_names))

        return results
