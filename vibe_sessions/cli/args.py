"""Command-line argument parsing for vibe-sessions."""

import argparse
import shlex
from typing import List, Optional

from vibe_sessions.__version__ import __version__

# Commands that hand the terminal to the interactive selector
INTERACTIVE_COMMANDS = ("select", "delete")


def parse_args(argv: Optional[List[str]] = None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="vibe-sessions",
        description="Pick, inspect and clean up isolated git worktree sessions",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"vibe-sessions {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument(
        "--prefix",
        default="claude/",
        help="Branch prefix that marks a worktree as a session (default: claude/)",
    )
    parser.add_argument(
        "--main-branch",
        default=None,
        help="Main branch name (default: detected from origin/HEAD)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        metavar="N",
        help="Number of parallel status probes (default: auto-detect based on CPU and threading mode)",
    )
    parser.add_argument(
        "--no-summaries",
        action="store_true",
        help="Don't generate summaries of uncommitted changes",
    )
    parser.add_argument(
        "--summary-command",
        type=shlex.split,
        metavar="CMD",
        help="Command that reads a diff on stdin and prints a one-line summary",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    subparsers.add_parser("status", help="Show every session with its status")

    select_parser = subparsers.add_parser(
        "select", help="Pick a session and print its worktree path"
    )
    select_parser.add_argument("name", nargs="?", help="Partial session name or path to pick directly")

    delete_parser = subparsers.add_parser("delete", help="Choose sessions to delete")
    cleanup_parser = subparsers.add_parser("cleanup", help="Remove sessions with nothing to lose")
    for sub in (delete_parser, cleanup_parser):
        sub.add_argument(
            "--dry-run",
            action="store_true",
            help="Preview mode - show what would be deleted without actually deleting",
        )
        sub.add_argument("--force", action="store_true", help="Skip confirmations")

    return parser.parse_args(argv)
