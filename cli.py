#!/usr/bin/env python3
"""
TramPLAR command-line runner - ask the fallback chain without starting the HTTP server.

Usage:
    tramplar-ask --prompt "Hello" [--system "Be brief"]
    tramplar-ask --input '{"prompt": "...", "system": "..."}'
    echo '{"prompt": "..."}' | tramplar-ask
    tramplar-ask --list
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

# =============================================================================
# Environment Setup
# =============================================================================


def setup_logging() -> None:
    """
    Keep stdout clean for JSON output.

    Use TRAMPLAR_CLI_LOG_LEVEL to control verbosity (default: WARNING).
    Logs always go to stderr.
    """
    from utils.env import get_env

    log_level = (get_env("TRAMPLAR_CLI_LOG_LEVEL", "WARNING") or "WARNING").upper()
    level = getattr(logging, log_level, logging.WARNING)
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")

    for logger_name in ["httpx", "httpcore", "openai"]:
        logging.getLogger(logger_name).setLevel(max(level, logging.WARNING))


# =============================================================================
# Payload Handling
# =============================================================================


def load_payload(input_arg: Optional[str]) -> dict:
    """
    Load the input payload from argument or stdin.

    Args:
        input_arg: JSON string or file path from --input argument

    Returns:
        Parsed dictionary payload
    """
    if input_arg:
        input_arg = input_arg.strip()

        # Avoid OSError "File name too long" for inline JSON
        if input_arg.startswith("{"):
            return _as_object(json.loads(input_arg))

        try:
            if Path(input_arg).exists():
                return _as_object(json.loads(Path(input_arg).read_text()))
        except OSError:
            pass

        return _as_object(json.loads(input_arg))

    if not sys.stdin.isatty():
        data = sys.stdin.read().strip()
        if data:
            return _as_object(json.loads(data))

    raise ValueError("No input provided. Use --prompt, --input '{...}' or pipe JSON to stdin.")


def _as_object(value) -> dict:
    if not isinstance(value, dict):
        raise ValueError("Input must be a JSON object")
    return value


def build_request(args: argparse.Namespace) -> tuple[str, Optional[str]]:
    """Resolve ``(prompt, system_prompt)`` from the parsed arguments."""
    if args.prompt is not None:
        payload = {"prompt": args.prompt, "system": args.system}
    else:
        payload = load_payload(args.input)
        if args.system is not None:
            payload["system"] = args.system

    prompt = payload.get("prompt")
    if not isinstance(prompt, str) or not prompt.strip():
        raise ValueError("prompt is required")

    system = payload.get("system")
    system_prompt = system if isinstance(system, str) and system.strip() else None
    return prompt, system_prompt


# =============================================================================
# Main Entry Point
# =============================================================================


def list_providers() -> str:
    from providers.configuration import load_dispatcher_config
    from utils.env import get_env

    dispatcher_config = load_dispatcher_config(get_env)
    lines = ["Provider order:"]
    for index, provider_type in enumerate(dispatcher_config.provider_order, start=1):
        status = "configured" if dispatcher_config.has_credential(provider_type) else "missing key"
        lines.append(f"  {index}. {provider_type.value} ({status})")
    lines.append(f"Timeout per attempt: {dispatcher_config.timeout_ms}ms")
    return "\n".join(lines)


async def run_dispatch(prompt: str, system_prompt: Optional[str]) -> dict:
    from providers.configuration import build_dispatcher, load_dispatcher_config
    from utils.env import get_env

    dispatcher = build_dispatcher(load_dispatcher_config(get_env))
    outcome = await dispatcher.dispatch(prompt, system_prompt)
    return outcome.to_dict()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="TramPLAR - ask LLM providers in fallback order",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --prompt "Hello"
  %(prog)s --input '{"prompt": "Hello", "system": "Answer in one line"}'
  echo '{"prompt": "Hello"}' | %(prog)s
  %(prog)s --list
        """,
    )
    parser.add_argument("--prompt", help="Prompt text")
    parser.add_argument("--system", help="Optional system instruction")
    parser.add_argument("--input", help="JSON input string or path to JSON file")
    parser.add_argument("--list", action="store_true", help="Show the provider order and credential status")
    args = parser.parse_args(argv)

    setup_logging()

    try:
        if args.list:
            print(list_providers())
            return 0

        prompt, system_prompt = build_request(args)
        result = asyncio.run(run_dispatch(prompt, system_prompt))
    except json.JSONDecodeError as e:
        print(json.dumps({"error": f"Invalid JSON input: {e}"}))
        return 1
    except ValueError as e:
        print(json.dumps({"error": str(e)}))
        return 1

    print(json.dumps(result, ensure_ascii=False, indent=2))
    # Non-zero when nobody answered
    return 0 if result["provider"] else 1


if __name__ == "__main__":
    sys.exit(main())
