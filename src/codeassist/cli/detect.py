"""`codeassist detect` command implementation."""

import argparse
import logging
from pathlib import Path

from codeassist.cli.shared import build_store, setup_logging

log = logging.getLogger(__name__)


def run(argv: list[str]) -> int:
    """Print the language codeassist would answer in for a file."""
    parser = argparse.ArgumentParser(
        prog="codeassist detect",
        description="Show the programming language used for a file",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("file", nargs="?", help="Source file to inspect")
    args = parser.parse_args(argv)
    setup_logging(args.debug)

    content = None
    if args.file is not None:
        try:
            content = Path(args.file).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            log.debug("could not read %s: %s", args.file, e)

    print(build_store().get_language(args.file, content))
    return 0
