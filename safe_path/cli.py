"""
Command line front end for the join and parent guards.

COMMANDS:
    safe-path join DIR PATH [--relaxed] [--utf8] [--json]
    safe-path parent DIR [--relaxed] [--utf8] [--json]
    safe-path explain DIR [PATH] [--relaxed]

EXIT CODES:
    0 - path accepted
    1 - path rejected (escape or no-op)
    2 - usage or input error
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from . import guard, utf8
from .config import SafePathConfig
from .errors import InvalidUtf8PathError
from .result import SafePathResult

EXIT_OK = 0
EXIT_REJECTED = 1
EXIT_USAGE = 2

console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="safe-path",
        description="Check joins and parent lookups for directory traversal",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every decision")
    parser.add_argument(
        "--flavor",
        choices=["native", "posix", "windows"],
        help="Path flavor (default: SAFE_PATH_FLAVOR or native)",
    )
    subparsers = parser.add_subparsers(dest="command")

    join_parser = subparsers.add_parser("join", help="Check joining PATH onto DIR")
    join_parser.add_argument("dir", help="Base directory")
    join_parser.add_argument("path", help="Path to join")

    parent_parser = subparsers.add_parser("parent", help="Check ascending from DIR")
    parent_parser.add_argument("dir", help="Directory")

    for sub in (join_parser, parent_parser):
        sub.add_argument("--relaxed", action="store_true", help="Accept a no-op result")
        sub.add_argument("--utf8", action="store_true", help="Require UTF-8 paths")
        sub.add_argument("--json", action="store_true", help="JSON output")

    explain_parser = subparsers.add_parser("explain", help="Show the per-prefix trace")
    explain_parser.add_argument("dir", help="Base directory")
    explain_parser.add_argument("path", nargs="?", help="Path to join (omit to explain parent)")
    explain_parser.add_argument("--relaxed", action="store_true", help="Accept a no-op result")

    return parser


def load_config(flavor: Optional[str]) -> SafePathConfig:
    config = SafePathConfig.from_env()
    if flavor:
        config = config.model_copy(update={"flavor": flavor})
    return config


def render_result(result: SafePathResult) -> None:
    if result.success:
        console.print(f"[green]OK[/green] {escape(str(result.path))}")
        return
    console.print(f"[red]{result.status.value.upper()}[/red] {escape(result.reason)}")
    if result.offending_prefix is not None:
        console.print(f"  first escaping prefix: {escape(str(result.offending_prefix))}")


def render_trace(trace: guard.GuardTrace) -> None:
    table = Table(box=box.MINIMAL, show_header=True, header_style="bold magenta")
    table.add_column("Checked", style="cyan")
    table.add_column("Padded + normalized", style="white")
    table.add_column("Contained", justify="center")
    for step in trace.steps:
        verdict = "[green]yes[/green]" if step.contained else "[red]no[/red]"
        table.add_row(escape(str(step.prefix)), escape(str(step.normalized)), verdict)

    header = (
        f"{trace.operation}: {escape(str(trace.base))} -> {escape(str(trace.candidate))}\n"
        f"sentinel={escape(trace.sentinel)} padding={trace.padding}\n"
        f"base: {escape(str(trace.normalized_base))}"
    )
    console.print(Panel(header, title="safe-path explain", border_style="blue"))
    console.print(table)
    render_result(trace.result)


def run(args: argparse.Namespace, config: SafePathConfig) -> int:
    if args.command == "explain":
        if args.path is None:
            trace = guard.explain_parent(args.dir, relaxed=args.relaxed, config=config)
        else:
            trace = guard.explain_join(args.dir, args.path, relaxed=args.relaxed, config=config)
        render_trace(trace)
        return EXIT_OK if trace.result.success else EXIT_REJECTED

    api = utf8 if args.utf8 else guard
    if args.command == "join":
        check = api.relaxed_safe_join if args.relaxed else api.safe_join
        result = check(args.dir, args.path, config=config)
    else:
        check = api.relaxed_safe_parent if args.relaxed else api.safe_parent
        result = check(args.dir, config=config)

    if args.json:
        print(json.dumps(result.dict(), indent=2))
    else:
        render_result(result)
    return EXIT_OK if result.success else EXIT_REJECTED


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_USAGE

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args.flavor)
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {escape(str(e))}")
        return EXIT_USAGE

    try:
        return run(args, config)
    except InvalidUtf8PathError as e:
        console.print(f"[red]Invalid path:[/red] {escape(str(e))}")
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
