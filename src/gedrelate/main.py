"""
Command line entry point.

    gedrelate parse family.ged -o family.json
    gedrelate relate family.ged @I0@ @I21@
    gedrelate relate family.json @I0@ @I21@ --format json --diagram path.png
    gedrelate draw family.ged -o tree.png --center @I0@ --radius 2
    gedrelate validate family.ged
    gedrelate show family.ged @I0@ --format json
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from gedrelate.config import Settings, load_settings
from gedrelate.errors import PersonNotFoundError, RelateError, UnrelatedError
from gedrelate.graph import build_graph, get_ego_subgraph
from gedrelate.groupsheet import build_group_sheet
from gedrelate.index import build_index
from gedrelate.parsing import load_gedcom
from gedrelate.plotting import plot_graph, plot_relationship
from gedrelate.relate import new_relator
from gedrelate.render import format_group_sheet, format_mutual_relationship
from gedrelate.serialize import (
    dump_population,
    group_sheet_to_dict,
    load_people,
    mutual_relationship_to_dict,
)
from gedrelate.validation import validate_graph, validate_links

logger = logging.getLogger("gedrelate")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNRELATED = 2

# Show at most this many validation warnings
MAX_WARNINGS = 10


def cmd_parse(args: argparse.Namespace, settings: Settings) -> int:
    people, unions = load_gedcom(args.input)
    out = json.dumps(dump_population(people, unions), indent=2)
    if args.output:
        args.output.write_text(out + "\n", encoding="utf-8")
        print(f"Wrote {len(people)} people and {len(unions)} unions to {args.output}")
    else:
        print(out)
    return EXIT_OK


def cmd_relate(args: argparse.Namespace, settings: Settings) -> int:
    people, unions = load_people(args.input)
    relator = new_relator(people, unions, max_generations=settings.max_generations)

    try:
        mutual = relator.relate(args.person1, args.person2)
    except PersonNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except UnrelatedError as e:
        print(e, file=sys.stderr)
        return EXIT_UNRELATED

    output_format = args.format or settings.output_format
    if output_format == "json":
        print(json.dumps(mutual_relationship_to_dict(mutual), indent=2))
    else:
        person1 = relator.index.lookup(args.person1)
        person2 = relator.index.lookup(args.person2)
        print(format_mutual_relationship(mutual, person1, person2))

    if args.diagram:
        plot_relationship(build_graph(people), mutual, args.diagram)
        print(f"Diagram saved to {args.diagram}", file=sys.stderr)

    return EXIT_OK


def cmd_draw(args: argparse.Namespace, settings: Settings) -> int:
    people, _ = load_people(args.input)
    G = build_graph(people)
    logger.info("graph has %d nodes and %d edges", G.number_of_nodes(), G.number_of_edges())

    highlight = ()
    if args.center:
        radius = args.radius if args.radius is not None else settings.ego_radius
        try:
            G = get_ego_subgraph(G, args.center, radius=radius)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR
        highlight = (args.center,)

    saved = plot_graph(G, args.output, highlight=highlight, show_id=args.show_id)
    if saved:
        print(f"Graph saved to {saved}")
    return EXIT_OK


def cmd_validate(args: argparse.Namespace, settings: Settings) -> int:
    people, _ = load_people(args.input)
    warnings = validate_links(people) + validate_graph(build_graph(people))

    if not warnings:
        print("No validation issues found")
        return EXIT_OK

    print(f"Found {len(warnings)} validation warnings:")
    for w in warnings[:MAX_WARNINGS]:
        print(f"  - {w}")
    if len(warnings) > MAX_WARNINGS:
        print(f"  ... and {len(warnings) - MAX_WARNINGS} more")
    return EXIT_ERROR


def cmd_show(args: argparse.Namespace, settings: Settings) -> int:
    people, unions = load_people(args.input)
    try:
        sheet = build_group_sheet(build_index(people, unions), args.person)
    except PersonNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    output_format = args.format or settings.output_format
    if output_format == "json":
        print(json.dumps(group_sheet_to_dict(sheet), indent=2))
    else:
        print(format_group_sheet(sheet))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gedrelate", description="Work out how two people in a family tree are related."
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"),
        help="minimum severity to log (default from settings)",
    )
    parser.add_argument("-q", "--quiet", action="store_true", help="turn logging off")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("parse", help="convert a GEDCOM file to JSON")
    p.add_argument("input", type=Path, help="GEDCOM file")
    p.add_argument("-o", "--output", type=Path, help="JSON file to write (default: stdout)")
    p.set_defaults(func=cmd_parse)

    p = subparsers.add_parser("relate", help="describe how two people are related")
    p.add_argument("input", type=Path, help="GEDCOM file or JSON from `parse`")
    p.add_argument("person1", help="ID of person 1, e.g. @I0@")
    p.add_argument("person2", help="ID of person 2")
    p.add_argument("--format", choices=("text", "json"), help="output format")
    p.add_argument("--diagram", type=Path, help="also draw the relationship to this file")
    p.set_defaults(func=cmd_relate)

    p = subparsers.add_parser("draw", help="draw the family tree with Graphviz")
    p.add_argument("input", type=Path, help="GEDCOM file or JSON from `parse`")
    p.add_argument("-o", "--output", type=Path, help="png/svg/pdf/dot file (default: display)")
    p.add_argument("--center", help="only draw people near this person ID")
    p.add_argument("--radius", type=int, help="distance from --center to include")
    p.add_argument("--show-id", action="store_true", help="print person IDs in the boxes")
    p.set_defaults(func=cmd_draw)

    p = subparsers.add_parser("validate", help="check the data for cycles and impossible dates")
    p.add_argument("input", type=Path, help="GEDCOM file or JSON from `parse`")
    p.set_defaults(func=cmd_validate)

    p = subparsers.add_parser("show", help="show the group sheet of one person")
    p.add_argument("input", type=Path, help="GEDCOM file or JSON from `parse`")
    p.add_argument("person", help="person ID, e.g. @I0@")
    p.add_argument("--format", choices=("text", "json"), help="output format")
    p.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        settings = load_settings()
    except ValueError as e:
        # pydantic's ValidationError is a ValueError
        print(f"Error: invalid GEDRELATE_* setting: {e}", file=sys.stderr)
        return EXIT_ERROR

    if args.quiet:
        logging.disable(logging.CRITICAL)
    else:
        logging.basicConfig(
            level=(args.log_level or settings.log_level).upper(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        return args.func(args, settings)
    except (OSError, ValueError, RelateError) as e:
        logger.debug("command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
