"""Command-line entry point for npm-update-interactive.

Lists outdated dependencies in a tree checkbox (packages outdated in
several workspaces are grouped), then runs one ``npm install`` per
workspace for the selected updates.
"""

from __future__ import annotations

import argparse
import logging
import subprocess
import sys
from pathlib import Path

import questionary
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from tree_select import Theme, TreeCheckbox

from . import __version__, config, npm
from .updates import build_choices, plan_installs

logger = logging.getLogger(__name__)

console = Console(highlight=False)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="npm-update-interactive",
        description="Upgrade your npm dependencies interactively.",
    )
    parser.add_argument(
        "--version", action="version", version=f"npm-update-interactive {__version__}"
    )
    parser.add_argument(
        "--latest",
        action="store_true",
        default=None,
        help="install latest version of dependency, instead of version specified by semver",
    )
    parser.add_argument("--page-size", type=int, help="Rows shown at once in the list")
    parser.add_argument(
        "-y", "--yes", action="store_true", help="Run the install commands without asking"
    )
    parser.add_argument("--debug", action="store_true", default=None, help="Verbose logging")
    parser.add_argument("--dir", help="Project directory (default: cwd)")
    return parser


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _confirm(commands: list[list[str]]) -> bool:
    for args in commands:
        console.print(f"  [cyan]{escape(' '.join(args))}[/cyan]")
    answer = questionary.confirm(f"Run {len(commands)} install command(s)?", default=True).ask()
    return bool(answer)


def run(args: argparse.Namespace, cfg: dict) -> int:
    """Run the tool with parsed arguments; returns the exit status."""
    latest = cfg["latest"] if args.latest is None else args.latest
    page_size = cfg["page_size"] if args.page_size is None else args.page_size
    project_dir = Path(args.dir).resolve() if args.dir else Path.cwd()

    workspaces = npm.get_workspace_map(project_dir)
    outdated = npm.get_outdated(project_dir)
    choices = build_choices(outdated, workspaces, latest=latest)
    if not choices:
        console.print("[green]All dependencies are up to date.[/green]")
        return 0

    prompt = TreeCheckbox(
        "Select packages to update",
        choices,
        page_size=page_size,
        loop=cfg["loop"],
        theme=Theme(help_mode=cfg["help_mode"]),
        console=console,
    )
    result = prompt.show()
    if result.aborted:
        logger.debug("Selection aborted, nothing to install")
        return 0

    commands = plan_installs(result.values, workspaces, latest=latest)
    if not commands:
        return 0
    if cfg["confirm_install"] and not args.yes and not _confirm(commands):
        return 0

    for command in commands:
        console.print(" ".join(command), markup=False)
        npm.run_install(command, cwd=project_dir)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(bool(args.debug))
    cfg = config.load_config()
    if args.debug is None and cfg["debug"]:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        return run(args, cfg)
    except KeyboardInterrupt:
        console.print()
        return 130
    except (npm.NpmError, ValueError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        return 1
    except subprocess.CalledProcessError as e:
        console.print(f"[red]Error:[/red] {escape(' '.join(e.cmd))} exited with status {e.returncode}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
