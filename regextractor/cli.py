from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from regextractor.config import PatternList
from regextractor.extract.engine import ExtractionEngine
from regextractor.extract.exceptions import ConfigError, ExtractionError
from regextractor.extract.table import DataTable
from regextractor.io.logging import get_logger, setup_logging
from regextractor.session import ExtractorSession, SeriesLine

logger = get_logger("regextractor.cli")


def _pattern_arg(value: str) -> Tuple[str, str]:
    name, sep, source = value.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=REGEX, got {value!r}")
    return name, source


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        "regextractor",
        description="Extract named numeric series from a log file with regexes.",
    )
    p.add_argument("logfile", help="Log file to scan.")
    p.add_argument(
        "-p",
        "--pattern",
        dest="patterns",
        action="append",
        type=_pattern_arg,
        default=[],
        metavar="NAME=REGEX",
        help="Series definition; the first capture group holds the value. "
        "Repeatable.",
    )
    p.add_argument(
        "-i",
        "--include",
        action="append",
        default=[],
        help="Only lines matching at least one include are scanned. Repeatable.",
    )
    p.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        help="Lines matching any exclude are skipped. Repeatable.",
    )
    p.add_argument("--base", default=None, help="Series used as the x axis.")
    p.add_argument(
        "--whole-match",
        action="store_true",
        help="Parse the whole match as the value instead of the capture group.",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Session file (JSON/YAML) providing series and filters.",
    )
    p.add_argument(
        "--aligned",
        action="store_true",
        help="Write aligned (series, x, y) rows instead of the raw table.",
    )
    p.add_argument("-o", "--out", default=None, help="CSV output (default: stdout).")
    p.add_argument("--log-level", default="WARNING", help="Logging level.")
    return p


def _session_from_args(args: argparse.Namespace) -> ExtractorSession:
    session = (
        ExtractorSession.load(args.config) if args.config else ExtractorSession()
    )
    for name, source in args.patterns:
        session.series.add_line(SeriesLine(name=name, regex=source))
    for src in args.include:
        _add_or_warn(session.filters.includes, src)
    for src in args.exclude:
        _add_or_warn(session.filters.excludes, src)
    if args.whole_match:
        session.filters.use_regex_group = False
    if args.base is not None:
        names = [ln.name for ln in session.series.lines]
        if args.base not in names:
            raise ConfigError(f"--base {args.base!r} is not a defined series")
        session.series.set_base_line(names.index(args.base))
    return session


def _add_or_warn(patterns: PatternList, source: str) -> None:
    if not patterns.add(source):
        logger.warning(
            "cli.invalid_filter", extra={"list": patterns.name, "source": source}
        )


def aligned_frame(table: DataTable) -> pd.DataFrame:
    """Long-format ``series, x, y`` rows for every non-base column."""
    parts = []
    for name in table.column_names:
        if name == table.base_column:
            continue
        pts = table.aligned_array(name)
        parts.append(pd.DataFrame({"series": name, "x": pts[:, 0], "y": pts[:, 1]}))
    if not parts:
        return pd.DataFrame(columns=["series", "x", "y"])
    return pd.concat(parts, ignore_index=True)


def main(argv: Optional[List[str]] = None) -> int:
    argv = argv if argv is not None else sys.argv[1:]
    args = build_parser().parse_args(argv)
    setup_logging(level=args.log_level)

    try:
        session = _session_from_args(args)
        content = Path(args.logfile).read_bytes()
    except (OSError, ConfigError) as exc:
        print(f"regextractor: {exc}", file=sys.stderr)
        return 2

    engine = ExtractionEngine(use_regex_group=session.filters.use_regex_group)
    try:
        table = engine.extract(
            content,
            session.series.named_regexes(),
            line_filter=session.filters.build_filter(),
            base_column_name=session.series.base_line_name,
        )
    except ExtractionError as exc:
        print(f"regextractor: {exc}", file=sys.stderr)
        return 2

    df = aligned_frame(table) if args.aligned else table.to_frame()
    if args.out:
        df.to_csv(args.out, index=not args.aligned)
    else:
        df.to_csv(sys.stdout, index=not args.aligned)
    return 0


if __name__ == "__main__":
    sys.exit(main())
