"""Main entry point for the vibe-sessions CLI"""

import os
import sys
from typing import List, Optional

from rich.console import Console

from vibe_sessions.cli.args import INTERACTIVE_COMMANDS, parse_args
from vibe_sessions.config import Config
from vibe_sessions.core import SessionKeeper
from vibe_sessions.logging_config import get_log_file, setup_logging
from vibe_sessions.utils.threading import get_threading_info

console = Console(stderr=True)


def build_config(parsed_args) -> Config:
    """Build config from parsed arguments."""
    options = {
        "worktree_prefix": parsed_args.prefix,
        "main_branch": parsed_args.main_branch,
        "workers": parsed_args.workers,
        "summaries": not parsed_args.no_summaries,
        "dry_run": getattr(parsed_args, "dry_run", False),
        "force": getattr(parsed_args, "force", False),
        "verbose": parsed_args.verbose,
        "debug": parsed_args.debug,
    }
    if parsed_args.summary_command:
        options["summary_command"] = parsed_args.summary_command
    return Config(**options)


def _print_debug_info(config: Config) -> None:
    console.print("[yellow]Debug mode enabled[/yellow]")
    console.print(f"[dim]Logging to {get_log_file()}[/dim]")

    threading_info = get_threading_info()
    console.print("[yellow]Threading Information:[/yellow]")
    console.print(f"  Python version: {threading_info['python_version']}")
    console.print(f"  Threading mode: {threading_info['mode']}")
    console.print(f"  CPU count: {threading_info['cpu_count']}")
    console.print(f"  Optimal workers: {threading_info['optimal_workers']}")
    console.print(f"  Free-threading enabled: {threading_info['free_threading']}")

    console.print("[yellow]Configuration:[/yellow]")
    for key, value in config.to_dict().items():
        console.print(f"  {key}: {value}")


def run_command(keeper: SessionKeeper, parsed_args) -> int:
    """Dispatch a parsed command and map its outcome to an exit code."""
    if parsed_args.command == "status":
        return 0 if keeper.show_status() else 1

    if parsed_args.command == "select":
        session = keeper.select_session(parsed_args.name)
        if session is None:
            return 1
        # Plain stdout so `cd "$(vibe-sessions select)"` works
        print(session.path)
        return 0

    if parsed_args.command == "delete":
        return 0 if keeper.delete_sessions_interactive() else 1

    if parsed_args.command == "cleanup":
        return 0 if keeper.cleanup() else 1

    raise ValueError(f"Unknown command: {parsed_args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    parsed_args = None
    try:
        parsed_args = parse_args(argv)

        # The selector owns the terminal, so its logs go to file
        interactive = parsed_args.command in INTERACTIVE_COMMANDS
        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug, tui_mode=interactive)

        config = build_config(parsed_args)
        if parsed_args.debug:
            _print_debug_info(config)

        keeper = SessionKeeper(os.getcwd(), config)
        return run_command(keeper, parsed_args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if parsed_args is not None and parsed_args.debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
