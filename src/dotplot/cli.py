"""Command-line wrapper around the dot-plot reader/writer."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Sequence

from .annotations import AnnotationKind
from .config import resolve_log_level
from .errors import DotPlotError
from .io import open_dotplot, save_dotplot
from .model import DotPlot
from .plan import apply_annotation_plan, load_annotation_plan

LOGGER = logging.getLogger(__name__)


def _save(dotplot: DotPlot, args: argparse.Namespace) -> None:
    target = args.out or args.path
    save_dotplot(dotplot, target)
    print(f"Dot plot saved to {target}")


def command_info(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    length = dotplot.sequence_length
    print(f"Sequence length: {length if length is not None else 'unknown'}")
    print(f"Definitions: {len(dotplot.definitions)}")
    print(f"Leading comment lines: {len(dotplot.leading_comments)}")
    print(f"Leading command lines: {len(dotplot.leading_commands)}")
    for kind, count in dotplot.annotations.counts().items():
        print(f"{kind.keyword}\t{kind.collection}\t{count}")


def command_probability(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    print(f"{dotplot.get_probability(args.first, args.second):.6g}")


def command_set_probability(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    dotplot.set_base_pair_probability(args.first, args.second, args.probability)
    _save(dotplot, args)


def command_mirror(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    dotplot.mirror()
    _save(dotplot, args)


def _read_structure(args: argparse.Namespace) -> str:
    structure = args.structure
    if args.structure_file:
        try:
            lines = args.structure_file.read_text(encoding="utf-8").splitlines()
        except OSError as exc:
            raise ValueError(f"Unable to read structure file '{args.structure_file}': {exc}") from exc
        structure = lines[0] if lines else ""
    if not structure:
        raise ValueError("Provide --structure or --structure-file.")
    return structure


def command_annotate(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    structure = _read_structure(args)
    count = dotplot.annotate_from_structure(structure, args.kind, *args.color)
    print(f"Annotated {count} base pair(s) as {AnnotationKind.coerce(args.kind).keyword}")
    _save(dotplot, args)


def command_apply(args: argparse.Namespace) -> None:
    dotplot = open_dotplot(args.path)
    apply_annotation_plan(dotplot, load_annotation_plan(args.plan))
    _save(dotplot, args)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Read, annotate and re-write RNA dot-plot PostScript files.",
    )
    parser.add_argument("--log-level", help="Logging level (default: $DOTPLOT_LOG_LEVEL or WARNING).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Summarize definitions and annotation counts.")
    info.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    info.set_defaults(func=command_info)

    prob = subparsers.add_parser("probability", help="Print the probability of a base pair (0-based).")
    prob.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    prob.add_argument("first", type=int, help="First base (0-based).")
    prob.add_argument("second", type=int, help="Second base (0-based).")
    prob.set_defaults(func=command_probability)

    set_prob = subparsers.add_parser("set-probability", help="Overwrite the probability of a base pair.")
    set_prob.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    set_prob.add_argument("first", type=int, help="First base (0-based).")
    set_prob.add_argument("second", type=int, help="Second base (0-based).")
    set_prob.add_argument("probability", type=float, help="New probability in [0, 1].")
    set_prob.add_argument("--out", type=Path, help="Output path (default: overwrite the input).")
    set_prob.set_defaults(func=command_set_probability)

    mirror = subparsers.add_parser("mirror", help="Copy upper-triangle boxes into the lower triangle.")
    mirror.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    mirror.add_argument("--out", type=Path, help="Output path (default: overwrite the input).")
    mirror.set_defaults(func=command_mirror)

    annotate = subparsers.add_parser("annotate", help="Color every pair of a bracket structure.")
    annotate.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    annotate.add_argument("--structure", help="Inline bracket structure, e.g. '((..))'.")
    annotate.add_argument("--structure-file", type=Path, help="File whose first line is the structure.")
    annotate.add_argument(
        "--kind",
        default=AnnotationKind.UPPER_CROSS.keyword,
        choices=[kind.keyword for kind in AnnotationKind],
        help="Annotation kind (default: ucross).",
    )
    annotate.add_argument(
        "--color",
        type=float,
        nargs=3,
        metavar=("R", "G", "B"),
        default=(1.0, 0.0, 0.0),
        help="RGB color in [0, 1] (default: 1 0 0).",
    )
    annotate.add_argument("--out", type=Path, help="Output path (default: overwrite the input).")
    annotate.set_defaults(func=command_annotate)

    apply = subparsers.add_parser("apply", help="Apply a YAML annotation plan.")
    apply.add_argument("path", type=Path, help="Dot-plot PostScript file.")
    apply.add_argument("--plan", type=Path, required=True, help="Annotation plan (YAML).")
    apply.add_argument("--out", type=Path, help="Output path (default: overwrite the input).")
    apply.set_defaults(func=command_apply)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        logging.basicConfig(level=resolve_log_level(args.log_level), format="%(levelname)s %(name)s: %(message)s")
        LOGGER.debug("running command=%s", args.command)
        args.func(args)
    except (DotPlotError, ValueError) as exc:
        parser.error(str(exc))


if __name__ == "__main__":  # pragma: no cover - manual invocation path
    main()
