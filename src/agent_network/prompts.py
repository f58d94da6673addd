"""Prompts used by the network itself."""

INFERENCE_PROMPT = """You are tasked with determining which agents should be used to handle a user's request.
Available agents: {agent_names}.
User prompt: "{prompt}"
Should multiple agents be used? {multiple}.
Return the agent names that should be used as a comma-separated list."""


def get_inference_prompt(agent_names: list[str], prompt: str, multiple_agents: bool) -> str:
    """Get the agent selection prompt."""
    return INFERENCE_PROMPT.format(
        agent_names=", ".join(agent_names),
        prompt=prompt,
        multiple="Yes" if multiple_agents else "No",
    )
