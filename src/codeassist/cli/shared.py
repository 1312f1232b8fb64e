"""Shared CLI helpers."""

import logging
import os
import sys

from codeassist.config import ConfigStore, default_user_data_dir

BOLD = "\033[1m"
CYAN = "\033[36m"
RESET = "\033[0m"


def setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(name)s %(levelname)s: %(message)s",
    )


def build_store() -> ConfigStore:
    """Create the config store rooted in the user's config directory."""
    return ConfigStore(user_data_dir=default_user_data_dir)


def supports_color() -> bool:
    """Return whether ANSI color output should be used."""
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("TERM", "").lower() == "dumb":
        return False
    return sys.stdout.isatty()


def highlight(text: str) -> str:
    if supports_color():
        return f"{BOLD}{CYAN}{text}{RESET}"
    return text


def mask_api_key(api_key: str) -> str:
    """Show just enough of a key to recognise it."""
    key = api_key.strip()
    if not key:
        return "not set"
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:4]}...{key[-4:]}"
