"""`codeassist show` and `codeassist models` commands."""

import argparse

from codeassist.cli.configure import print_summary
from codeassist.cli.shared import build_store, highlight, setup_logging
from codeassist.providers import PROVIDERS


def run(argv: list[str]) -> int:
    """Print the stored configuration."""
    parser = argparse.ArgumentParser(
        prog="codeassist show",
        description="Show the stored codeassist configuration",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    store = build_store()
    print(f"\n{store.config_path}")
    print_summary(store.load_config())
    print("")
    return 0


def run_models(argv: list[str]) -> int:
    """List providers and the models each one allows."""
    parser = argparse.ArgumentParser(
        prog="codeassist models",
        description="List supported providers and their models",
    )
    parser.add_argument("provider", nargs="?", help="Only list models for this provider")
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    store = build_store()
    providers = store.get_available_providers()
    if args.provider is not None:
        providers = [p for p in providers if p.value == args.provider]
        if not providers:
            parser.error(f"unknown provider: {args.provider}")

    for provider in providers:
        print(f"\n{highlight(PROVIDERS[provider].label)} ({provider})")
        for model in store.get_available_models(provider):
            marker = " (default)" if model == PROVIDERS[provider].default_model else ""
            print(f"  {model}{marker}")
    print("")
    return 0
