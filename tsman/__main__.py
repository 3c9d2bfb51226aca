"""Entry point for tsman and python -m tsman.

Usage:
    # Save the attached session, optionally under another name
    tsman save [NAME]

    # Attach to a session, restoring it if it is not running
    tsman open NAME

    # Edit a saved session in $EDITOR
    tsman edit [NAME]

    # Delete a saved session
    tsman delete NAME

    # Interactive menu (the default)
    tsman menu [-p] [-a]
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from tsman import __version__
from tsman.config import load_config
from tsman.exceptions import InvalidSessionNameError, TsmanError, record_error
from tsman.logging_config import log_exception, setup_cli_logging
from tsman.security import validate_session_name
from tsman.services import ServiceContainer

logger = logging.getLogger("tsman.cli")


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging based on command-line arguments."""
    setup_cli_logging(
        args.command,
        debug=args.debug,
        level=args.log_level,
        log_to_file=not args.no_log_file,
    )


def _session_name(value: str) -> str:
    """argparse type for session names."""
    try:
        return validate_session_name(value)
    except InvalidSessionNameError as e:
        raise argparse.ArgumentTypeError(e.message) from e


def is_inside_tmux() -> bool:
    """True when running inside a tmux client."""
    return bool(os.environ.get("TMUX"))


# =============================================================================
# CLI Command Handlers
# =============================================================================


def cmd_save(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Handle save command."""
    path = services.sessions.save_current(args.session_name)
    print(f"Saved session to {path}")
    return 0


def cmd_open(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Handle open command."""
    services.sessions.open(args.session_name)
    return 0


def cmd_edit(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Handle edit command."""
    services.sessions.edit(args.session_name)
    return 0


def cmd_delete(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Handle delete command."""
    services.sessions.delete(args.session_name)
    print(f"Deleted session {args.session_name}")
    return 0


def cmd_menu(args: argparse.Namespace, services: ServiceContainer) -> int:
    """Handle menu command."""
    from tsman.app import TsmanApp
    from tsman.menu.controller import MenuController

    controller = MenuController.create(
        services.sessions,
        show_preview=getattr(args, "preview", False) or services.config.show_preview,
        ask_for_confirmation=(
            getattr(args, "ask_for_confirmation", False) or services.config.ask_for_confirmation
        ),
    )
    TsmanApp(controller).run()
    return 0


COMMANDS = {
    "save": cmd_save,
    "open": cmd_open,
    "edit": cmd_edit,
    "delete": cmd_delete,
    "menu": cmd_menu,
}


# =============================================================================
# Argument Parser Setup
# =============================================================================


def _create_parser() -> argparse.ArgumentParser:
    """Create the main argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="tsman",
        description="Save, restore and browse tmux sessions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Save the current session
  tsman save

  # Save it under another name
  tsman save work

  # Reopen it later
  tsman open work

  # Browse sessions with a preview pane
  tsman menu -p
""",
    )

    # Global arguments
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Set log level (default: INFO)",
    )
    parser.add_argument(
        "--no-log-file",
        action="store_true",
        help="Disable logging to file",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    save_parser = subparsers.add_parser(
        "save",
        aliases=["s"],
        help="Save the attached session",
    )
    save_parser.add_argument(
        "session_name",
        nargs="?",
        type=_session_name,
        help="Save under this name instead of the session's own",
    )
    save_parser.set_defaults(handler="save")

    open_parser = subparsers.add_parser(
        "open",
        aliases=["o"],
        help="Attach to a session, restoring it if needed",
    )
    open_parser.add_argument("session_name", type=_session_name, help="Session to open")
    open_parser.set_defaults(handler="open")

    edit_parser = subparsers.add_parser(
        "edit",
        aliases=["e"],
        help="Edit a saved session in $EDITOR",
    )
    edit_parser.add_argument(
        "session_name",
        nargs="?",
        type=_session_name,
        help="Session to edit (default: the attached session)",
    )
    edit_parser.set_defaults(handler="edit")

    delete_parser = subparsers.add_parser(
        "delete",
        aliases=["d"],
        help="Delete a saved session",
    )
    delete_parser.add_argument("session_name", type=_session_name, help="Session to delete")
    delete_parser.set_defaults(handler="delete")

    menu_parser = subparsers.add_parser(
        "menu",
        aliases=["m"],
        help="Open the interactive menu",
    )
    menu_parser.add_argument(
        "-p",
        "--preview",
        action="store_true",
        help="Show the preview pane on start",
    )
    menu_parser.add_argument(
        "-a",
        "--ask-for-confirmation",
        action="store_true",
        help="Ask before deleting",
    )
    menu_parser.set_defaults(handler="menu")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for tsman."""
    parser = _create_parser()
    args = parser.parse_args(argv)

    # Initialize logging
    _setup_logging(args)

    handler = COMMANDS[getattr(args, "handler", "menu")]

    try:
        config = load_config()
    except TsmanError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    services = ServiceContainer.create(config, inside_tmux=is_inside_tmux())

    try:
        return handler(args, services)
    except TsmanError as e:
        log_exception(logger, e, f"{handler.__name__} failed", include_traceback=args.debug)
        record_error(e)
        print(f"Error: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
