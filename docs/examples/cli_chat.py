import asyncio
from typing import List

from parallel_tools import GraphGenerator, Settings, build_agent, setup_logging
from parallel_tools.core.messages import AssistantMessage, BaseMessage, UserMessage


async def main() -> None:
    """
    Main function to run the CLI chat against the generalist agent.
    """
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    if not settings.api_key:
        print(f"Error: no API key configured for provider '{settings.provider}'.")
        return

    agent = build_agent(settings)
    graph = GraphGenerator()
    print(f"Using {settings.provider} ({settings.model_name}) with tools: {', '.join(agent.registry.tool_names)}")

    history: List[BaseMessage] = []

    print("\nStart chatting! Type 'exit' or 'quit' to stop.")
    while True:
        user_input = input("\nYou: ").strip()
        if user_input.lower() in ["exit", "quit"]:
            print("Goodbye!")
            break

        if not user_input:
            continue

        try:
            result = await agent.run(user_input, history=history)
        except Exception as e:
            print(f"An error occurred: {e}")
            continue

        for tool_result in result.tool_results:
            status = "ok" if tool_result.ok else "error"
            print(f"  [{tool_result.tool_name}] {status} in {tool_result.execution_time_ms:.0f}ms")

        print(f"Assistant: {result.answer}")

        graph.process_agent_run(user_input, result)
        print(graph.generate_text_graph())

        history.extend([UserMessage(content=user_input), AssistantMessage(content=result.answer)])


if __name__ == "__main__":
    asyncio.run(main())
