"""`codeassist configure` command implementation."""

import argparse
import sys
from typing import Any

from codeassist.cli.shared import build_store, mask_api_key, setup_logging
from codeassist.models import AppConfig
from codeassist.providers import Provider

API_KEY_CLI_WARNING = (
    "Warning: --api-key may leak secrets via shell history and process lists. "
    "Prefer editing the config file directly when possible."
)


def build_parser() -> argparse.ArgumentParser:
    """Build parser for the configure command."""
    parser = argparse.ArgumentParser(
        prog="codeassist configure",
        description="Configure codeassist provider, models, API key, and display settings",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--provider",
        choices=[provider.value for provider in Provider],
        help="AI provider to use (resets all models to the provider default when it changes)",
    )
    parser.add_argument(
        "--api-key",
        help=(
            "Provider API key to store in config; selects the provider from the key prefix "
            "unless --provider is given"
        ),
    )
    parser.add_argument(
        "--clear-api-key",
        action="store_true",
        help="Remove stored API key from config",
    )
    parser.add_argument("--model", help="Use this model for extraction, solution, and debugging")
    parser.add_argument("--extraction-model", help="Model used to extract the problem")
    parser.add_argument("--solution-model", help="Model used to generate solutions")
    parser.add_argument("--debugging-model", help="Model used to debug solutions")
    language_group = parser.add_mutually_exclusive_group()
    language_group.add_argument("--language", help="Always answer in this programming language")
    language_group.add_argument(
        "--auto-language",
        action="store_true",
        help="Forget the stored language and detect it from each file",
    )
    parser.add_argument("--opacity", type=float, help="Window opacity between 0.1 and 1.0")
    return parser


def _model_updates(args: argparse.Namespace) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    if args.model is not None:
        updates = {
            "extraction_model": args.model,
            "solution_model": args.model,
            "debugging_model": args.model,
        }
    if args.extraction_model is not None:
        updates["extraction_model"] = args.extraction_model
    if args.solution_model is not None:
        updates["solution_model"] = args.solution_model
    if args.debugging_model is not None:
        updates["debugging_model"] = args.debugging_model
    return updates


def print_summary(config: AppConfig) -> None:
    print(f"  provider: {config.api_provider}")
    print(f"  api_key: {mask_api_key(config.api_key)}")
    print(f"  extraction_model: {config.extraction_model}")
    print(f"  solution_model: {config.solution_model}")
    print(f"  debugging_model: {config.debugging_model}")
    print(f"  language: {config.language or 'auto-detect'}")
    print(f"  opacity: {config.opacity:g}")


def run(argv: list[str]) -> int:
    """Execute the configure command."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    if args.clear_api_key and args.api_key is not None:
        print("Error: --api-key and --clear-api-key cannot be used together", file=sys.stderr)
        return 2
    if args.api_key is not None:
        print(API_KEY_CLI_WARNING, file=sys.stderr)

    updates: dict[str, Any] = {}
    if args.provider is not None:
        updates["api_provider"] = args.provider
    if args.api_key is not None:
        updates["api_key"] = args.api_key
    if args.clear_api_key:
        updates["api_key"] = ""
    if args.language is not None:
        updates["language"] = args.language
    if args.auto_language:
        updates["language"] = None
    if args.opacity is not None:
        updates["opacity"] = args.opacity
    model_updates = _model_updates(args)

    store = build_store()
    clients_changed = False

    def on_config_updated(_config: AppConfig) -> None:
        nonlocal clients_changed
        clients_changed = True

    store.subscribe(on_config_updated)

    config = store.load_config()
    if updates:
        config = store.update_config(updates)
    # A provider switch resets models, so explicit models go in afterwards.
    if model_updates:
        config = store.update_config(model_updates)

    print(f"\nConfiguration saved to {store.config_path}")
    print_summary(config)
    if clients_changed:
        print("\n  AI client settings changed; running sessions will reinitialize.")
    print("")
    return 0
