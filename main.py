#!/usr/bin/env python3
"""codementor: terminal coding-help chat.

Usage
-----
Copy `.env.example` to `.env`, fill in your credentials, then run:

    python main.py

Type a question and press Enter; the reply is printed as an explanation
followed by a code sample. Type `exit` (or press Ctrl-D) to quit.

Environment variables:
  AI_PROVIDER          openai | anthropic | litellm
  AI_API_KEY           Credential for the provider (falls back to
                       OPENAI_API_KEY / ANTHROPIC_API_KEY)
  AI_MODEL             Model name, e.g. gpt-4o or anthropic/claude-sonnet-4-5
  AI_TEMPERATURE       Sampling temperature       (default: 0.7)
  AI_MAX_TOKENS        Max output tokens          (default: 8000)
  CHAT_LANGUAGE        Language to ask about      (default: python)
  LOG_LEVEL            Logging level              (default: INFO)
"""

import logging
import sys

from codementor.agent.core import ChatAgent
from codementor.agent.response_parser import FENCE
from codementor.config import Config
from codementor.errors import CodementorError
from codementor.models.messages import GenerationResult, Message

logger = logging.getLogger(__name__)


def format_reply(result: GenerationResult, language: str) -> str:
    """Render a reply the way the model was asked to write it."""
    if not result.code:
        return result.explanation
    return f"{result.explanation}\n\n{FENCE}{language}\n{result.code}\n{FENCE}"


def run_chat_loop(agent: ChatAgent, language: str) -> None:
    """Read questions from stdin until EOF or `exit`."""
    history: list[Message] = []
    print(f"Ask a {language} question (type 'exit' to quit).")

    while True:
        try:
            text = input("> ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            logger.info("Shutdown requested, stopping.")
            break

        if not text:
            continue
        if text.lower() in ("exit", "quit"):
            break

        try:
            result = agent.send_message(text, language, history)
        except CodementorError as exc:
            logger.error("Request failed: %s", exc.message)
            continue

        reply = format_reply(result, language)
        print(reply)
        history.append(Message(role="user", content=text))
        history.append(Message(role="assistant", content=reply))


def main() -> None:
    config = Config.from_env()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    if not config.has_startup_provider:
        logger.error(
            "AI_PROVIDER, AI_API_KEY and AI_MODEL must be set. "
            "Copy .env.example to .env and fill in your credentials."
        )
        sys.exit(1)

    try:
        agent = ChatAgent.from_config(config)
    except CodementorError as exc:
        logger.error("Could not configure %s: %s", config.ai_provider, exc.message)
        sys.exit(1)

    run_chat_loop(agent, config.chat_language)


if __name__ == "__main__":
    main()
