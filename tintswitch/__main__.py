"""Entry point for tintswitch."""

import argparse
import asyncio
import os
import sys
import traceback
from dataclasses import replace
from importlib.metadata import version

from rich.console import Console
from rich.table import Table
from rich.text import Text

from tintswitch.app import main
from tintswitch.appearance.notifications import Notifier
from tintswitch.color.analyze import AnalysisReport
from tintswitch.color.palette import KNOWN_COLOR_MAP, RGBColor, nearest_palette_index, palette_region
from tintswitch.commands import Commands
from tintswitch.logger import enable_console
from tintswitch.settings import PLATFORM_CHOICES, Settings, load_settings

TRUECOLOR_VALUES = ("truecolor", "24bit")


def get_version() -> str:
    """Get the installed package version.

    Returns:
        The version string, or "unknown" if it cannot be determined.
    """
    try:
        return version("tintswitch")
    except Exception:
        return "unknown"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Arguments to parse, defaults to ``sys.argv[1:]``.

    Returns:
        The parsed arguments. ``command`` is None when the TUI should start.
    """
    parser = argparse.ArgumentParser(
        prog="tintswitch",
        description="Switch between Basic (256-color) and GUI (true color) appearance modes.",
    )
    parser.add_argument("-v", "--version", action="version", version=f"%(prog)s {get_version()}")
    parser.add_argument("--force-terminal", action="store_true", help="pin Basic mode, skip GUI detection")
    parser.add_argument("--platform", choices=PLATFORM_CHOICES, help="platform used for font selection")
    parser.add_argument("--debug-fonts", action="store_true", help="log every font check")

    subparsers = parser.add_subparsers(dest="command")

    color_parser = subparsers.add_parser("color", help="approximate hex colors in the 256-color palette")
    color_parser.add_argument("colors", nargs="+", metavar="HEX", help="colors such as #e06c75")

    subparsers.add_parser("analyze", help="compare highlight groups between Basic and GUI mode")

    font_parser = subparsers.add_parser("font", help="show which GUI font would be used")
    font_parser.add_argument("--rescan", action="store_true", help="forget cached checks and probe every font")

    return parser.parse_args(argv)


def _ensure_truecolor() -> None:
    """Advertise true color support so Textual renders GUI colors unquantized."""
    current = os.environ.get("COLORTERM", "")
    if current.lower() not in TRUECOLOR_VALUES:
        os.environ["COLORTERM"] = "truecolor"


def _settings_from_args(args: argparse.Namespace) -> Settings:
    settings = load_settings().with_env_overrides()
    changes: dict[str, object] = {}
    if getattr(args, "force_terminal", False):
        changes["force_terminal_mode"] = True
    if getattr(args, "debug_fonts", False):
        changes["debug_fonts"] = True
    if getattr(args, "platform", None):
        changes["platform"] = args.platform
    return replace(settings, **changes) if changes else settings


def show_colors(values: list[str], console: Console) -> int:
    """Print the palette approximation of each color.

    Returns:
        0 if every value parsed, 1 otherwise.
    """
    table = Table(show_header=True, header_style="bold")
    for title in ("Color", "Index", "Region", "Source", "Swatch"):
        table.add_column(title)

    status = 0
    for value in values:
        try:
            color = RGBColor.from_hex(value)
        except ValueError as exc:
            table.add_row(value, "-", "-", Text(str(exc), style="red"), "")
            status = 1
            continue
        index = nearest_palette_index(color)
        source = "known" if color in KNOWN_COLOR_MAP else "approximated"
        swatch = Text("      ", style=f"on color({index})")
        table.add_row(color.hex, str(index), palette_region(index).value, source, swatch)

    console.print(table)
    return status


async def _run_analysis(settings: Settings) -> AnalysisReport:
    commands = Commands.from_settings(settings)
    with commands.notifier.quiet():
        commands.enter_basic_mode()
    commands.engine.startup()
    return await commands.analyze_colors()


def show_analysis(settings: Settings, console: Console) -> int:
    """Run a color analysis and print the report."""
    report = asyncio.run(_run_analysis(settings))
    for line in report.lines():
        console.print(line, markup=False, highlight=False)
    return 1 if report.limited else 0


def show_fonts(settings: Settings, console: Console, *, rescan: bool = False) -> int:
    """Print font availability and the font GUI mode would use."""
    # No event loop here, so transient messages must not arm an auto-close timer
    commands = Commands.from_settings(settings, notifier=Notifier())
    resolver = commands.font_resolver
    if rescan:
        results = commands.rescan_fonts()
    else:
        results = {candidate.family: resolver.is_available(candidate) for candidate in resolver.candidates}

    table = Table(title=f"Fonts ({resolver.platform.value})", show_header=True, header_style="bold")
    table.add_column("Family")
    table.add_column("Available")
    for family, available in results.items():
        table.add_row(family, Text("yes", style="green") if available else Text("no", style="dim"))
    console.print(table)
    console.print(f"GUI font: [bold]{resolver.resolve_best_font().spec}[/bold]")

    if resolver.debug:
        for family, log in resolver.detection_log.items():
            console.print(f"[bold]{family}[/bold]")
            for entry in log:
                console.print(f"  {entry}", markup=False)
    return 0


def run_command(args: argparse.Namespace) -> int:
    """Run a CLI subcommand.

    Returns:
        The process exit status.
    """
    settings = _settings_from_args(args)
    enable_console(settings.log_level)
    console = Console()
    if args.command == "color":
        return show_colors(args.colors, console)
    if args.command == "analyze":
        return show_analysis(settings, console)
    return show_fonts(settings, console, rescan=args.rescan)


def run() -> None:
    """Run the app with standard Python tracebacks."""
    args = parse_args()
    try:
        if args.command is None:
            _ensure_truecolor()
            main(_settings_from_args(args))
            return
        status = run_command(args)
    except Exception:
        # Print standard Python traceback instead of Rich's fancy one
        traceback.print_exc()
        sys.exit(1)
    else:
        sys.exit(status)


if __name__ == "__main__":
    run()
