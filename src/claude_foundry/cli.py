"""Command line interface for chatting with a Claude deployment."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from dotenv import load_dotenv

from .config import ClientConfig
from .core.adapters.base import ChatClient
from .core.adapters.claude import AzureClaudeClient
from .core.completion import ChatOptions
from .core.errors import AdapterError
from .core.message import ChatMessage, ChatRole


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Chat with Claude models deployed in Azure AI Foundry")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    complete_parser = subparsers.add_parser("complete", help="send a prompt and print the reply")
    complete_parser.add_argument("prompt", help="User message to send")
    complete_parser.add_argument("-s", "--system", help="Optional system directive")
    complete_parser.add_argument("--max-tokens", type=int, help="Maximum number of output tokens")
    complete_parser.add_argument("--temperature", type=float, help="Sampling temperature")
    complete_parser.add_argument("--top-p", type=float, help="Nucleus sampling threshold")
    complete_parser.add_argument(
        "--stream",
        action="store_true",
        help="Print the reply incrementally as it arrives",
    )

    subparsers.add_parser("info", help="show the configured provider, model and endpoint")

    return parser


def _build_messages(args: argparse.Namespace) -> list[ChatMessage]:
    messages: list[ChatMessage] = []
    if args.system:
        messages.append(ChatMessage(ChatRole.SYSTEM, args.system))
    messages.append(ChatMessage(ChatRole.USER, args.prompt))
    return messages


async def _run_completion(client: ChatClient, args: argparse.Namespace) -> None:
    messages = _build_messages(args)
    options = ChatOptions(
        max_output_tokens=args.max_tokens,
        temperature=args.temperature,
        top_p=args.top_p,
    )

    if args.stream:
        stream = client.complete_streaming(messages, options)
        try:
            async for update in stream:
                if update.text:
                    sys.stdout.write(update.text)
                    sys.stdout.flush()
        finally:
            await stream.close()
        sys.stdout.write("\n")
        return

    completion = await client.complete(messages, options)
    print(completion.text)
    print(f"Tokens used: {completion.usage.total_tokens}", file=sys.stderr)


async def _handle_complete(config: ClientConfig, args: argparse.Namespace) -> int:
    async with config.create_client() as client:
        await _run_completion(client, args)
    return 0


def _handle_info(config: ClientConfig) -> int:
    mode = "api key" if config.api_key is not None else "token credential"
    print(f"Provider: {config.provider_name}")
    print(f"Model: {config.model_id}")
    print(f"Endpoint: {config.endpoint}")
    print(f"Authentication: {mode}")
    print(f"Client: {AzureClaudeClient.__module__}.{AzureClaudeClient.__qualname__}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    load_dotenv()

    try:
        config = ClientConfig.from_env()
        if args.command == "info":
            return _handle_info(config)
        if args.command == "complete":
            return asyncio.run(_handle_complete(config, args))
    except AdapterError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    parser.error("no command provided")
    return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
