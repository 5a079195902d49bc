"""CLI entry point for the share ownership calculator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import TextIO

import matplotlib

from ownership.batch import calculate_batch, export_csv, load_inputs
from ownership.charts import OwnershipChart
from ownership.config import (
    DEFAULT_DILUTED_EPS,
    DEFAULT_TOTAL_DILUTED_SHARES,
    ChartConfig,
    ReferenceConstants,
    ReportConfig,
)
from ownership.contracts import Presentation
from ownership.reports.pdf import generate_pdf
from ownership.session import CalculatorSession, ExportUnavailableError

logger = logging.getLogger(__name__)

EXPORT_COMMAND = ":export"
QUIT_COMMAND = ":quit"


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Options shared by every command."""
    parser.add_argument(
        "--total-shares",
        type=int,
        default=DEFAULT_TOTAL_DILUTED_SHARES,
        help=f"Total diluted shares (default: {DEFAULT_TOTAL_DILUTED_SHARES:,})",
    )
    parser.add_argument(
        "--eps",
        type=float,
        default=DEFAULT_DILUTED_EPS,
        help=f"Diluted earnings per share (default: {DEFAULT_DILUTED_EPS})",
    )
    parser.add_argument(
        "--min-visible",
        type=float,
        default=None,
        help="Smallest owner wedge drawn on the chart, in percent (default: 0.5)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="ownership",
        description="Share ownership and earnings calculator",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # calculate command
    calc_parser = subparsers.add_parser(
        "calculate", help="Calculate ownership for one share count"
    )
    calc_parser.add_argument(
        "shares",
        nargs="?",
        default=None,
        help="Number of shares held. Values that look like options, such as "
        "-1e3, are taken as the share count; '--' also ends option parsing",
    )
    calc_parser.add_argument(
        "--chart",
        type=Path,
        default=None,
        help="Write the ownership chart to this image file",
    )
    calc_parser.add_argument(
        "--export",
        type=Path,
        default=None,
        metavar="DIR",
        help="Write a PDF report into this directory",
    )
    _add_common_arguments(calc_parser)

    # interactive command
    inter_parser = subparsers.add_parser(
        "interactive",
        help=f"Recalculate on every line read; {EXPORT_COMMAND} writes a PDF, "
        f"{QUIT_COMMAND} exits",
    )
    inter_parser.add_argument(
        "--chart",
        type=Path,
        default=None,
        help="Redraw the ownership chart into this image file after every input",
    )
    inter_parser.add_argument(
        "--export-dir",
        type=Path,
        default=ReportConfig().output_dir,
        help="Directory for PDF reports (default: output/)",
    )
    _add_common_arguments(inter_parser)

    # batch command
    batch_parser = subparsers.add_parser(
        "batch", help="Calculate ownership for every row of a CSV file"
    )
    batch_parser.add_argument("input", type=Path, help="Input CSV file")
    batch_parser.add_argument(
        "--column",
        default="shares",
        help="Column holding share counts (default: shares)",
    )
    batch_parser.add_argument(
        "--output",
        type=Path,
        default=Path("output/ownership.csv"),
        help="Output CSV path (default: output/ownership.csv)",
    )
    _add_common_arguments(batch_parser)

    args, extras = parser.parse_known_args(argv)

    # argparse only treats plain negatives such as -5 as positionals, so a
    # share count like -1e3 or -Infinity arrives as an unknown option.
    is_calculate = args.command == "calculate"
    if (
        is_calculate
        and args.shares is None
        and len(extras) == 1
        and not extras[0].startswith("--")
    ):
        args.shares = extras.pop()
    if extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")
    if is_calculate and args.shares is None:
        calc_parser.error("the following arguments are required: shares")

    return args


def _chart_config(args: argparse.Namespace) -> ChartConfig:
    if args.min_visible is None:
        return ChartConfig()
    return ChartConfig(min_visible_percent=args.min_visible)


def _print_presentation(presentation: Presentation, out: TextIO) -> None:
    if not presentation.ok:
        print(f"Error: {presentation.error_message}", file=out)
    print(f"Ownership: {presentation.percent_text}", file=out)
    print(f"Annual earnings: {presentation.earnings_text}", file=out)


def _export(
    session: CalculatorSession,
    output_dir: Path,
    out: TextIO,
) -> Path | None:
    """Export the session's current calculation, or report why not."""
    try:
        report = session.report_data()
    except ExportUnavailableError as exc:
        logger.warning("%s", exc)
        print(str(exc), file=out)
        return None

    path = generate_pdf(report, output_dir, chart_config=session.chart_config)
    print(f"Report written to {path}", file=out)
    return path


def run_calculate(
    args: argparse.Namespace,
    constants: ReferenceConstants,
    chart_config: ChartConfig,
    out: TextIO | None = None,
) -> int:
    """Execute the calculate command.

    Returns:
        Exit status: 0 on success, 1 if the input was rejected.
    """
    out = out if out is not None else sys.stdout
    chart = OwnershipChart(chart_config) if args.chart else None
    session = CalculatorSession(constants, chart_config, chart=chart)

    try:
        presentation = session.handle_input(args.shares)
        _print_presentation(presentation, out)

        if chart is not None:
            chart.save(args.chart)

        if args.export is not None and _export(session, args.export, out) is None:
            return 1
    finally:
        if chart is not None:
            chart.close()

    return 0 if presentation.ok else 1


def run_interactive(
    args: argparse.Namespace,
    constants: ReferenceConstants,
    chart_config: ChartConfig,
    stdin: TextIO | None = None,
    out: TextIO | None = None,
) -> int:
    """Execute the interactive command.

    Every line read is one input event. The chart, if requested, is
    redrawn in place and rewritten after each event.
    """
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    chart = OwnershipChart(chart_config) if args.chart else None
    session = CalculatorSession(constants, chart_config, chart=chart)
    logger.info(
        "Interactive mode: %s total diluted shares, EPS $%.2f",
        f"{constants.total_diluted_shares:,}",
        constants.diluted_eps,
    )

    try:
        for line in stdin:
            command = line.strip()
            if command == QUIT_COMMAND:
                break
            if command == EXPORT_COMMAND:
                _export(session, args.export_dir, out)
                continue

            presentation = session.handle_input(line.rstrip("\r\n"))
            _print_presentation(presentation, out)
            if chart is not None:
                chart.save(args.chart)
    finally:
        if chart is not None:
            chart.close()

    return 0


def run_batch(args: argparse.Namespace, constants: ReferenceConstants) -> int:
    """Execute the batch command."""
    try:
        raw_values = load_inputs(args.input, args.column)
    except (FileNotFoundError, ValueError) as exc:
        logger.error("%s", exc)
        return 1

    results = calculate_batch(raw_values, constants)
    export_csv(results, args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Process exit status.
    """
    args = _parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Charts are only ever written to files
    matplotlib.use("Agg")

    try:
        constants = ReferenceConstants(
            total_diluted_shares=args.total_shares,
            diluted_eps=args.eps,
        )
        chart_config = _chart_config(args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2

    if args.command == "calculate":
        return run_calculate(args, constants, chart_config)
    if args.command == "interactive":
        return run_interactive(args, constants, chart_config)
    if args.command == "batch":
        return run_batch(args, constants)

    logger.error("Unknown command: %s", args.command)
    return 1


if __name__ == "__main__":
    sys.exit(main())
