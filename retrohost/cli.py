"""Command-line interface for retrohost."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from retrohost import __version__
from retrohost.config import Settings, configure_logging, load_settings
from retrohost.core.covers import COVER_EXTENSIONS, covers_dir
from retrohost.core.errors import CatalogIOError
from retrohost.core.library import Library

logger = logging.getLogger(__name__)

# Piped or captured output is never wrapped to the terminal width
PIPE_WIDTH = 4096

USAGE = """\
RetroHost - Self-hosted retro gaming platform

Usage:
  retrohost              Start the web server
  retrohost list         List all available ROMs
  retrohost covers       Show cover art status for all ROMs
  retrohost play <name>  Print URL to play a ROM
  retrohost help         Show this help message

Environment variables:
  ROM_DIR    Directory containing ROM files (default: /roms)
  DATA_DIR   Directory for save data (default: /data)
  PORT       Server port (default: 8080)
  HOST_ADDR  External address for URLs (default: localhost:PORT)
"""


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog="retrohost",
        description="Self-hosted retro gaming platform",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=USAGE.split("\n\n", 1)[1],
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--rom-dir",
        type=Path,
        metavar="PATH",
        help="Directory containing ROM files. Overrides ROM_DIR.",
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        metavar="PATH",
        help="Directory for tags, saves and covers. Overrides DATA_DIR.",
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.add_parser("serve", help="Start the web server (default)")
    sub.add_parser("list", help="List all available ROMs")
    sub.add_parser("covers", help="Show cover art status for all ROMs")
    play = sub.add_parser("play", help="Print URL to play a ROM")
    play.add_argument("query", nargs="*", help="Part of a ROM name or file name")
    sub.add_parser("help", help="Show this help message")
    return parser


def _table(*columns: str) -> Table:
    table = Table(box=box.SIMPLE_HEAD, show_edge=False, pad_edge=False)
    for column in columns:
        # One line per row so the output stays greppable
        table.add_column(column, no_wrap=True, overflow="ignore")
    return table


def _console() -> Console:
    console = Console(soft_wrap=True)
    if not console.is_terminal:
        console.width = PIPE_WIDTH
    return console


def cmd_list(library: Library, console: Console) -> int:
    catalog = library.scan()
    if not catalog:
        print(f"No ROMs found in {library.rom_dir}")
        return 0

    table = _table("SYSTEM", "ROM", "FILE")
    for system in library.registry:
        for rom in sorted(catalog.get(system.id, []), key=lambda e: e.name):
            table.add_row(escape(system.name), escape(rom.name), escape(rom.file_name))
    console.print(table)
    return 0


def cmd_covers(library: Library, console: Console) -> int:
    statuses = library.cover_statuses()
    if not statuses:
        print(f"No ROMs found in {library.rom_dir}")
        return 0

    table = _table("SYSTEM", "ROM", "COVER")
    missing = 0
    for status in statuses:
        if status.has_cover:
            mark = "✓"
        else:
            mark = "✗ missing"
            missing += 1
        system = library.registry.by_id(status.entry.system)
        system_name = system.name if system else status.entry.system
        table.add_row(escape(system_name), escape(status.entry.name), mark)
    console.print(table)

    summary = f"\n{len(statuses) - missing}/{len(statuses)} ROMs have covers"
    if missing:
        summary += f" ({missing} missing)"
    print(summary)
    exts = ",".join(COVER_EXTENSIONS)
    print(f"\nPlace cover images in: {covers_dir(library.data_dir)}/<system>/<rom-name>.{{{exts}}}")
    return 0


def cmd_play(library: Library, settings: Settings, query: str) -> int:
    matches = library.search(query)
    if not matches:
        print(f"No ROM found matching '{query}'", file=sys.stderr)
        print("Use 'retrohost list' to see available ROMs", file=sys.stderr)
        return 1

    host = settings.public_host
    if len(matches) == 1:
        rom = matches[0]
        print(f"Open this URL to play {rom.name}:\n")
        print(f"  {library.play_url(rom, host)}\n")
        return 0

    print(f"Multiple ROMs match '{query}':\n")
    for rom in matches:
        system = library.registry.by_id(rom.system)
        print(f"  [{system.name if system else rom.system}] {rom.name}")
        print(f"    {library.play_url(rom, host)}\n")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "help":
        print(USAGE, end="")
        return 0

    serving = args.command in (None, "serve")
    settings = load_settings(args.rom_dir, args.data_dir, with_static=serving)
    if serving:
        from retrohost.main import serve

        serve(settings)
        return 0

    if args.command == "play" and not args.query:
        print("Usage: retrohost play <rom-name>", file=sys.stderr)
        print("  Use 'retrohost list' to see available ROMs", file=sys.stderr)
        return 1

    library = Library(settings.rom_dir, settings.data_dir)
    console = _console()
    try:
        if args.command == "list":
            return cmd_list(library, console)
        if args.command == "covers":
            return cmd_covers(library, console)
        return cmd_play(library, settings, " ".join(args.query))
    except CatalogIOError as e:
        print(f"Error scanning ROMs: {e}", file=sys.stderr)
        return 1


def run() -> None:
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
