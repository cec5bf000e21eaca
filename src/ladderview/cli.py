"""``ladderview`` command line: inspect, reformat and render rung text."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from ladderview.core.catalog import lookup
from ladderview.core.elements import Branch, RungElement
from ladderview.core.parser import ParseResult, parse_rung_text_with_diagnostics
from ladderview.core.search import InstructionMatch, find_instructions
from ladderview.core.serializer import instruction_text, serialize_rung_elements
from ladderview.core.walker import walk_instructions
from ladderview.l5x import L5XFormatError, find_routine, read_routines
from ladderview.layout.engine import layout_rung
from ladderview.layout.svg import render_svg

logger = logging.getLogger("ladderview")

EXIT_OK = 0
EXIT_USAGE = 2


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


# ---------------------------------------------------------------------------
# Output helpers
# ---------------------------------------------------------------------------


def _tree(elements: Sequence[RungElement], title: str) -> Tree:
    tree = Tree(Text(title, style="bold"))
    locations = iter(walk_instructions(elements))

    def add(node: Tree, seq: Sequence[RungElement]) -> None:
        for element in seq:
            if isinstance(element, Branch):
                branch_node = node.add(Text(f"Branch ({len(element.branches)} legs)", style="cyan"))
                for leg_index, leg in enumerate(element.branches):
                    add(branch_node.add(Text(f"Leg {leg_index}", style="dim")), leg)
            else:
                spec = lookup(element.type)
                label = Text(f"#{next(locations).index} ")
                label.append(instruction_text(element), style="green")
                if spec.mnemonic:
                    label.append(f"  {spec.name}", style="dim")
                node.add(label)

    add(tree, elements)
    return tree


def _diagnostics_table(result: ParseResult) -> Table:
    table = Table(title="Tolerated input", title_justify="left")
    table.add_column("Kind")
    table.add_column("Span", justify="right")
    table.add_column("Text")
    for diag in result.diagnostics:
        table.add_row(diag.kind, f"{diag.start}-{diag.end}", Text(repr(diag.text)))
    return table


def _matches_table(matches: list[InstructionMatch], query: str) -> Table:
    table = Table(title=Text(f"Matches for {query!r}"), title_justify="left")
    table.add_column("Routine")
    table.add_column("Rung", justify="right")
    table.add_column("#", justify="right")
    table.add_column("Instruction")
    for match in matches:
        table.add_row(
            Text(match.routine),
            str(match.rung_number),
            str(match.index),
            Text(instruction_text(match.instruction)),
        )
    return table


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_parse(args: argparse.Namespace, console: Console) -> int:
    result = parse_rung_text_with_diagnostics(args.text)
    console.print(_tree(result.elements, "Rung"))
    if result.diagnostics:
        console.print(_diagnostics_table(result))
    return EXIT_OK


def _cmd_format(args: argparse.Namespace, console: Console) -> int:
    result = parse_rung_text_with_diagnostics(args.text)
    text = serialize_rung_elements(result.elements)
    if args.semicolon:
        text += ";"
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)
    return EXIT_OK


def _cmd_svg(args: argparse.Namespace, console: Console) -> int:
    result = parse_rung_text_with_diagnostics(args.text)
    svg = render_svg(layout_rung(result.elements, rung_number=args.rung))
    if args.output:
        Path(args.output).write_text(svg, encoding="utf-8")
        console.print(Text(f"Wrote {args.output}"))
    else:
        console.print(svg, markup=False, highlight=False, emoji=False, soft_wrap=True, end="")
    return EXIT_OK


def _cmd_l5x(args: argparse.Namespace, console: Console) -> int:
    routines = read_routines(Path(args.file))
    if args.routine:
        try:
            routines = [find_routine(routines, args.routine)]
        except KeyError:
            console.print(Text(f"Error: no routine named {args.routine!r}", style="bold red"))
            return EXIT_USAGE

    if args.find:
        console.print(_matches_table(find_instructions(routines, args.find), args.find))
        return EXIT_OK

    svg_dir = Path(args.svg_dir) if args.svg_dir else None
    if svg_dir is not None:
        svg_dir.mkdir(parents=True, exist_ok=True)

    for routine in routines:
        table = Table(title=routine.name, title_justify="left")
        table.add_column("Rung", justify="right")
        table.add_column("Instructions", justify="right")
        table.add_column("Text")
        for rung in routine.rungs:
            table.add_row(str(rung.number), str(rung.instruction_count), Text(rung.text))
            if svg_dir is not None:
                diagram = layout_rung(rung.parsed, rung_number=rung.number)
                safe_name = routine.name.replace("/", "_")
                path = svg_dir / f"{safe_name}_{rung.number:04d}.svg"
                path.write_text(render_svg(diagram), encoding="utf-8")
                logger.debug("Wrote %s", path)
        console.print(table)
    return EXIT_OK


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ladderview",
        description="Parse, reformat and draw Rockwell ladder rung text.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    p_parse = sub.add_parser("parse", help="Show the parse tree of rung text.")
    p_parse.add_argument("text", help="Rung text, e.g. 'XIC(Start)OTE(Motor);'.")
    p_parse.set_defaults(handler=_cmd_parse)

    p_format = sub.add_parser("format", help="Print canonical rung text.")
    p_format.add_argument("text")
    p_format.add_argument(
        "--semicolon", action="store_true", help="Terminate the output with ';'."
    )
    p_format.set_defaults(handler=_cmd_format)

    p_svg = sub.add_parser("svg", help="Render rung text as an SVG ladder diagram.")
    p_svg.add_argument("text")
    p_svg.add_argument("-o", "--output", help="Write to this file instead of stdout.")
    p_svg.add_argument("--rung", type=int, default=0, help="Rung number label (default: 0).")
    p_svg.set_defaults(handler=_cmd_svg)

    p_l5x = sub.add_parser("l5x", help="List the rungs of RLL routines in an L5X file.")
    p_l5x.add_argument("file")
    p_l5x.add_argument("--routine", help="Only this routine (Program/Routine or Routine).")
    p_l5x.add_argument("--svg-dir", help="Write one SVG per rung into this directory.")
    p_l5x.add_argument(
        "--find", metavar="QUERY", help="List instructions whose mnemonic or operand contains QUERY."
    )
    p_l5x.set_defaults(handler=_cmd_l5x)
    return parser


def main(argv: Sequence[str] | None = None, *, console: Console | None = None) -> int:
    args = _build_parser().parse_args(argv)
    _configure_logging(args.verbose)
    console = console or Console()
    try:
        return args.handler(args, console)
    except (OSError, L5XFormatError) as exc:
        console.print(Text(f"Error: {exc}", style="bold red"))
        return EXIT_USAGE


if __name__ == "__main__":
    sys.exit(main())
