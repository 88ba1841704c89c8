"""Command line interface for PlaneRes."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .api import open_project, save_project
from .compression.codecs import CODEC_BINDINGS, get_global_registry
from .compression.types import DISPLAY_NAMES
from .errors import ResourceError
from .logging import configure_logging, get_logger, section, step
from .reporting import (
    set_reporter,
    get_reporter,
    PlainReporter,
    JsonLinesReporter,
    SilentReporter,
    RichReporter,
    set_verbosity,
)


def _extract_cmd(args: argparse.Namespace) -> int:
    step(f"extracting {args.project.name}")
    session = open_project(args.project, work_dir=args.work_dir)
    return 0 if session.ok else 1


def _save_cmd(args: argparse.Namespace) -> int:
    step(f"saving map of {args.project.name}")
    save_project(args.project, work_dir=args.work_dir)
    return 0


def _codecs_cmd(args: argparse.Namespace) -> int:
    registry = get_global_registry()
    rep = get_reporter()
    with section("Codecs"):
        for tag, binding in CODEC_BINDINGS.items():
            state = "installed" if binding.codec in registry else "missing"
            rep.status(f"{DISPLAY_NAMES[tag]}: codec={binding.codec} {state}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="planeres",
        description="Extract and re-compress plane map, art and palette resources",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase verbosity (repeatable)",
    )
    p.add_argument(
        "-r",
        "--reporter",
        choices=["plain", "rich", "json", "silent"],
        default="plain",
        help="Select reporter backend: plain (default), rich, json (JSONL events), silent",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    e = sub.add_parser(
        "extract", help="Decode project resources into working files"
    )
    e.add_argument("project", type=Path)
    e.add_argument(
        "--work-dir",
        dest="work_dir",
        type=Path,
        help="Directory for working files (overrides project and environment)",
    )
    e.set_defaults(func=_extract_cmd)

    s = sub.add_parser("save", help="Re-compress the working map file")
    s.add_argument("project", type=Path)
    s.add_argument("--work-dir", dest="work_dir", type=Path)
    s.set_defaults(func=_save_cmd)

    c = sub.add_parser("codecs", help="List compression codecs")
    c.set_defaults(func=_codecs_cmd)

    return p


def _select_reporter(requested: str) -> None:
    if requested == "json":
        set_reporter(JsonLinesReporter())
    elif requested == "silent":
        set_reporter(SilentReporter())
    elif requested == "rich" and sys.stderr.isatty():
        set_reporter(RichReporter())
    else:
        # rich quietly falls back to plain without a TTY
        set_reporter(PlainReporter())


def main(argv: list[str] | None = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    parser = build_parser()
    args = parser.parse_args(argv)
    _select_reporter(args.reporter)
    set_verbosity(args.verbose)
    configure_logging(args.verbose)
    try:
        code = args.func(args)
    except ResourceError as exc:
        get_logger().error(exc.message)
        code = 1
    get_reporter().flush()
    return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
