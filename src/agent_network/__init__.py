"""
Agent Network - model-driven orchestration of language model agents.

Register named agents on a network, and let a model pick which of them
should handle each prompt.
"""

__version__ = "0.1.0"

from agent_network.agents import Agent, AgentKind, ObjectAgent, TextAgent
from agent_network.errors import (
    AgentNetworkError,
    AgentNotRegisteredError,
    GenerationError,
    MissingParameterError,
    NoApplicableAgentsError,
    ObjectValidationError,
    StreamConsumedError,
)
from agent_network.generation import (
    AnthropicGenerator,
    Generator,
    StreamObjectResult,
    StreamTextResult,
)
from agent_network.models import ObjectResult, TextResult, ToolCall, ToolResult, Usage
from agent_network.network import (
    ModelSelector,
    Network,
    Selector,
    StaticSelector,
    parse_agent_names,
    resolve_model,
)
from agent_network.tools import ToolSet

__all__ = [
    "Agent",
    "AgentKind",
    "TextAgent",
    "ObjectAgent",
    "Network",
    "Selector",
    "ModelSelector",
    "StaticSelector",
    "parse_agent_names",
    "resolve_model",
    "Generator",
    "AnthropicGenerator",
    "StreamTextResult",
    "StreamObjectResult",
    "TextResult",
    "ObjectResult",
    "ToolCall",
    "ToolResult",
    "Usage",
    "ToolSet",
    "AgentNetworkError",
    "AgentNotRegisteredError",
    "GenerationError",
    "MissingParameterError",
    "NoApplicableAgentsError",
    "ObjectValidationError",
    "StreamConsumedError",
]
