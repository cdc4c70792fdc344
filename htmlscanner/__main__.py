from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .config import DEFAULT_OUTPUT, load_keywords
from .errors import ConfigurationError, OutputWriteError
from .report import ScanResult
from .scanner import scan_directory


_BANNERS = {
    "b1": """██╗  ██╗████████╗███╗   ███╗██╗         ███████╗ ██████╗ █████╗ ███╗   ██╗
██║  ██║╚══██╔══╝████╗ ████║██║         ██╔════╝██╔════╝██╔══██╗████╗  ██║
███████║   ██║   ██╔████╔██║██║         ███████╗██║     ███████║██╔██╗ ██║
██╔══██║   ██║   ██║╚██╔╝██║██║         ╚════██║██║     ██╔══██║██║╚██╗██║
██║  ██║   ██║   ██║ ╚═╝ ██║███████╗    ███████║╚██████╗██║  ██║██║ ╚████║
╚═╝  ╚═╝   ╚═╝   ╚═╝     ╚═╝╚══════╝    ╚══════╝ ╚═════╝╚═╝  ╚═╝╚═╝  ╚═══╝""",
    "b2": """HTML SCANNER
============
Find keywords in HTML files. Group. Report.""",
    "b3": """┌───────────────────────────┐
│        HTML SCANNER        │
│   Keyword search for HTML  │
└───────────────────────────┘""",
    "b4": """HTMLSCAN :: walk → match → group → report""",
}

# Windows-style "/o <file>" output flag.
_SLASH_FLAGS = {"/o": "-o", "/O": "-o"}

console = Console(stderr=True)


def _resolve_banner(banner: str) -> str:
    banner = (banner or "").strip().lower()
    if banner in {"none", "off", "0"}:
        return ""
    if banner in {"random", "rand"}:
        return _BANNERS[random.choice(sorted(_BANNERS.keys()))]
    return _BANNERS.get(banner, "")


def _print_banner(banner: str) -> None:
    text = _resolve_banner(banner)
    if text:
        console.print(Text(text, style="bold cyan"))


def _print_params(root: str, out_path: Path, keywords: List[str]) -> None:
    console.print(Text.assemble(("Scanning directory: ", "dim"), (str(Path(root).absolute()), "bold")))
    console.print(Text.assemble(("Output file: ", "dim"), (str(out_path), "bold")))
    console.print(
        Text.assemble(("Looking for keywords: ", "dim"), (", ".join(f'"{k}"' for k in keywords), "bold"))
    )


def _print_summary(result: ScanResult, written: Path) -> None:
    style = "green" if result.has_matches else "yellow"
    sub = Text.assemble(
        ("files scanned ", "dim"),
        (str(result.files_scanned), "bold"),
        ("  |  ", "dim"),
        ("keywords matched ", "dim"),
        (f"{len(result.sorted_matches())}/{len(result.keywords)}", style + " bold"),
        ("  |  ", "dim"),
        ("warnings ", "dim"),
        (str(len(result.warnings)), ("red" if result.warnings else "green") + " bold"),
    )
    console.print(Panel.fit(Text.assemble(Text(result.root, style="bold"), "\n", sub), border_style=style))

    if result.has_matches:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Keyword", style="bold")
        table.add_column("Files", justify="right")
        for keyword, files in result.sorted_matches():
            table.add_row(keyword, str(len(files)))
        console.print(table)
    else:
        console.print("No files were found containing the specified keywords.", style="yellow")

    console.print(Text.assemble(("Scan complete. Results saved to ", "dim"), (str(written), "bold")))


def _configure_logging(verbosity: int) -> None:
    level = {-1: logging.WARNING, 0: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False, markup=False)],
        force=True,
    )


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        # Bad arguments are configuration errors: exit 1 like other fatal input.
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="htmlscanner",
        description="Recursively scan a directory for HTML files containing keywords",
        epilog=(
            "Example: htmlscanner ./site /o results.txt form gallery table. "
            "Keywords starting with '-' go after a '--' separator: htmlscanner ./site -- -->"
        ),
    )
    parser.add_argument("directory", help="Directory to scan recursively")
    parser.add_argument("keywords", nargs="*", help="Keywords to look for (case-insensitive)")
    parser.add_argument(
        "-o",
        "--out",
        default=DEFAULT_OUTPUT,
        help=f"Report file to write, overwritten if present (default: {DEFAULT_OUTPUT}). /o is accepted too.",
    )
    parser.add_argument(
        "--format",
        default="text",
        choices=("text", "json"),
        help="Report format to write",
    )
    parser.add_argument(
        "--keywords-file",
        default=None,
        help='JSON file with extra keywords: a list, or {"keywords": [...]}',
    )
    parser.add_argument(
        "--banner",
        default="random",
        choices=("random", "none", "b1", "b2", "b3", "b4"),
        help="Banner style (default: random). Use 'none' to disable.",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-q", "--quiet", action="store_const", const=-1, dest="verbosity", default=0)
    verbosity.add_argument("-v", "--verbose", action="store_const", const=1, dest="verbosity")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    raw = list(sys.argv[1:] if argv is None else argv)
    parser = _build_parser()
    args = parser.parse_intermixed_args([_SLASH_FLAGS.get(a, a) for a in raw])

    _configure_logging(args.verbosity)
    _print_banner(args.banner)

    out_path = Path(args.out)
    try:
        keywords = list(args.keywords) + load_keywords(args.keywords_file)
        _print_params(args.directory, out_path, keywords)
        result = scan_directory(args.directory, keywords)
    except ConfigurationError as e:
        console.print(f"Error: {e}", style="bold red", markup=False)
        parser.print_usage(sys.stderr)
        return 1

    try:
        written = result.write(out_path, fmt=args.format)
    except OutputWriteError as e:
        console.print(f"Error: {e}", style="bold red", markup=False)
        return 1

    _print_summary(result, written)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
