# src/todo_cli/cli/main.py

"""
CLI entrypoint.

Loads settings, initializes logging, builds AppState, then runs exactly one
command: Load -> one operation -> Save. Fatal errors end up here and become
a single "Error: ..." line on stderr plus exit status 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..errors import InvalidInput, TodoError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def _report_error(exc: TodoError) -> None:
    print(f"Error: {exc}", file=sys.stderr)
    if isinstance(exc, InvalidInput) and exc.usage:
        print(f"Usage: {exc.usage}", file=sys.stderr)


def main(argv: Sequence[str] | None = None, *, settings=None, home=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    if not isinstance(console_level, int):
        console_level = logging.WARNING
    setup_logging(console_level=console_level, log_file=getattr(settings, "log_file", None))

    prog = str(getattr(settings, "app_name", "todo") or "todo")
    if not argv:
        print(registry.build_help(prog))
        return 0

    name, args = argv[0], list(argv[1:])
    cmd = registry.get(name)
    if cmd is None:
        print(f"Error: unknown command: {name}", file=sys.stderr)
        print(registry.build_help(prog))
        return 1

    # help never touches storage, so it works even when the store path is unusable.
    if cmd.name == "help":
        print(registry.build_help(prog))
        return 0

    try:
        state = create_initial_state(settings=settings, home=home)
        output = registry.handle(state, name, args)
    except TodoError as exc:
        logger.debug("Command %s failed code=%s", name, exc.code, exc_info=True)
        _report_error(exc)
        return 1

    if output:
        print(output)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
