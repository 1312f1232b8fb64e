"""`codeassist test-key` command implementation."""

import argparse
import sys

from codeassist.cli.shared import build_store, setup_logging
from codeassist.providers import Provider


def run(argv: list[str]) -> int:
    """Check an API key, or the stored one, with its provider."""
    parser = argparse.ArgumentParser(
        prog="codeassist test-key",
        description="Check that an API key is accepted by its provider",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--provider",
        choices=[provider.value for provider in Provider],
        help="Provider to test against (default: inferred from the key)",
    )
    parser.add_argument("api_key", nargs="?", help="Key to test (default: the stored key)")
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    store = build_store()
    api_key = args.api_key
    provider = args.provider
    if api_key is None:
        config = store.load_config()
        api_key = config.api_key
        provider = provider or config.api_provider
    if not api_key.strip():
        print("Error: no API key given and none stored", file=sys.stderr)
        return 1

    result = store.test_api_key(api_key, provider)
    if result.valid:
        print("API key is valid.")
        return 0
    print(result.error, file=sys.stderr)
    return 1
