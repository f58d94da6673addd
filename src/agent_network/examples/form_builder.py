"""Form builder: a single object agent streamed through a network."""

from typing import Literal, Optional

from pydantic import BaseModel

from agent_network.agents import ObjectAgent
from agent_network.generation import Generator
from agent_network.network import Network, StreamCallback

MODEL = "claude-sonnet-4-20250514"


class FieldOption(BaseModel):
    label: str
    value: str


class FormField(BaseModel):
    question: str
    type: Literal["radio", "text", "multiselect", "file"]
    defaultValue: Optional[str] = None
    options: Optional[list[FieldOption]] = None


class Form(BaseModel):
    """A form with a name and a list of fields."""

    name: str
    fields: list[FormField]


def build_network(generator: Generator | None = None) -> Network:
    network = Network(default_model=MODEL, generator=generator)
    network.register_agent(
        "form_builder",
        ObjectAgent(system="You are a form builder agent.", schema=Form, generator=generator),
    )
    return network


async def run(network: Network, prompt: str, callback: StreamCallback) -> None:
    await network.execute(
        prompt,
        multiple_agents=True,
        stream=True,
        stream_callback=callback,
    )
