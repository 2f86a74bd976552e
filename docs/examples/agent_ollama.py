import asyncio
import os
from typing import Annotated

from dotenv import load_dotenv
from pydantic import Field

from mini_agent_lib import Agent, AgentError, GenericOllama, setup_logging

# Load environment variables
load_dotenv()


def get_weather(city: Annotated[str, Field(description="City name, e.g. 'San Francisco'")]) -> str:
    """Get weather for a given city."""
    return f"It's always sunny in {city}!"


async def main() -> None:
    """
    Runs a single weather question through a local Ollama model.
    """
    setup_logging()

    llm = GenericOllama(
        model_name=os.getenv("OLLAMA_MODEL", "qwen3:8b"),
        base_url=os.getenv("OLLAMA_BASE_URL", "http://localhost:11434"),
    ).with_options({"temperature": 0.2})

    agent = Agent("weather_agent", llm, max_iterations=5)
    agent.register_tool(get_weather)

    try:
        result = await agent.call_llm("What's the weather in Beijing?")
    except AgentError as e:
        print(f"Agent failed: {e}")
        return

    print(f"Assistant: {result.generation}")
    print(f"Tokens: {result.tokens.total_tokens}")


if __name__ == "__main__":
    asyncio.run(main())
