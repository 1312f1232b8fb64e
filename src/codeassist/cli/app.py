"""Top-level CLI router."""

import sys

from codeassist import __version__

from . import configure as configure_cmd
from . import detect as detect_cmd
from . import keycheck as keycheck_cmd
from . import show as show_cmd

COMMANDS = {
    "configure": configure_cmd.run,
    "show": show_cmd.run,
    "models": show_cmd.run_models,
    "detect": detect_cmd.run,
    "test-key": keycheck_cmd.run,
}

USAGE = f"usage: codeassist {{{','.join(COMMANDS)}}} [options]"


def main(argv: list[str] | None = None) -> int:
    """Route to the subcommand named by the first argument."""
    args = list(sys.argv[1:] if argv is None else argv)
    if args and args[0] in {"-V", "--version"}:
        print(f"codeassist {__version__}")
        return 0
    if not args or args[0] not in COMMANDS:
        print(USAGE, file=sys.stderr)
        return 2
    return COMMANDS[args[0]](args[1:])


def entrypoint() -> None:
    """Console script entrypoint."""
    raise SystemExit(main())
