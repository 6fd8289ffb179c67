"""Command line interface of card counter."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import List, Optional

from lagom import Container

from card_counter import __version__
from card_counter.config_dependency_injection import get_container
from card_counter.entities.constants import OutputMode
from card_counter.entities.snapshot import ListDelta
from card_counter.frameworks.api.api_endpoint import APIEndpoint, APIEndpointConfig
from card_counter.settings.card_counter_settings import CardCounterSettings
from card_counter.use_cases.board_score_use_case import BoardScoreUseCase, format_score_table
from card_counter.use_cases.burndown_chart_use_case import BurndownChartUseCase
from card_counter.use_cases.charts.scaling import format_number
from card_counter.utils.basic_logger import loguru_logger
from card_counter.utils.exceptions import CardCounterException


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="card_counter",
        description="Sum the story points of kanban boards and draw burndown charts",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--stream_level",
        default="WARNING",
        choices=["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"],
        help="Console logging level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    score = subparsers.add_parser("score", help="Score a board and store the snapshot")
    score.add_argument("--board-id", "-b", help="Board to score, defaults to the configured board")
    score.add_argument("--filter", "-f", help="Leave out lists whose name contains this text")
    score.add_argument("--no-save", action="store_true", help="Do not store the snapshot")
    score.add_argument("--compare", "-c", action="store_true", help="Show changes since the last stored snapshot")

    burndown = subparsers.add_parser("burndown", help="Render a burndown chart from stored snapshots")
    burndown.add_argument("--board-id", "-b", help="Board to chart, defaults to the configured board")
    burndown.add_argument("--start", "-s", required=True, help="First day, YYYY-MM-DD")
    burndown.add_argument("--end", "-e", required=True, help="Last day, YYYY-MM-DD")
    burndown.add_argument("--filter", "-f", help="Leave out lists whose name contains this text")
    burndown.add_argument(
        "--output", "-o",
        default=OutputMode.CSV.value,
        choices=[mode.value for mode in OutputMode],
        help="Output format",
    )
    burndown.add_argument("--compare", "-c", action="store_true", help="Also list per-list changes over the range")

    subparsers.add_parser("boards", help="List the boards of the kanban source")

    serve = subparsers.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=None, help="Host to bind the server to")
    serve.add_argument("--port", type=int, default=None, help="Port to bind the server to")

    return parser


def _board_id(args: argparse.Namespace, container: Container) -> str:
    board_id = args.board_id or container[CardCounterSettings].default_board_id
    if not board_id:
        raise CardCounterException(
            "No board given, pass --board-id or set CARD_COUNTER_DEFAULT_BOARD_ID"
        )
    return board_id


async def run_score(args: argparse.Namespace, container: Container) -> str:
    report = await container[BoardScoreUseCase].execute(
        _board_id(args, container),
        name_filter=args.filter,
        save=not args.no_save,
        compare=args.compare,
    )
    return format_score_table(report)


def _signed(value: float) -> str:
    sign = "+" if value >= 0 else "-"
    return f"{sign}{format_number(abs(value))}"


def format_comparison(deltas: List[ListDelta]) -> str:
    """One line per list with its changes since the snapshot preceding the range."""
    if not deltas:
        return "No per-list changes to compare\n"
    lines = []
    for delta in deltas:
        if not delta.baseline_found:
            lines.append(f"{delta.name}: new list")
            continue
        lines.append(
            f"{delta.name}: cards {_signed(delta.card_count)}, score {_signed(delta.score)}, "
            f"estimated {_signed(delta.estimated)}, unscored {_signed(delta.unscored_count)}"
        )
    return "\n".join(lines) + "\n"


async def run_burndown(args: argparse.Namespace, container: Container) -> str:
    chart = await container[BurndownChartUseCase].execute(
        _board_id(args, container),
        args.start,
        args.end,
        name_filter=args.filter,
        output=OutputMode(args.output),
        compare=args.compare,
    )
    if args.compare:
        sys.stderr.write(format_comparison(chart.series.comparison or []))
    return chart.content


async def run_boards(args: argparse.Namespace, container: Container) -> str:
    boards = await container[BoardScoreUseCase].list_boards()
    return "".join(f"{board.id}\t{board.name}\n" for board in boards)


COMMANDS = {
    "score": run_score,
    "burndown": run_burndown,
    "boards": run_boards,
}


def serve(args: argparse.Namespace, container: Container) -> None:
    config = container[APIEndpointConfig]
    if args.host is not None:
        config.host = args.host
    if args.port is not None:
        config.port = args.port
    container[APIEndpoint].run()


def main(argv: Optional[List[str]] = None, container: Optional[Container] = None) -> int:
    """Run one command; returns the process exit code."""
    args = build_parser().parse_args(argv)
    logger = loguru_logger(__name__, stream_level=args.stream_level)

    if container is None:
        container = get_container()

    try:
        if args.command == "serve":
            serve(args, container)
            return 0
        output = asyncio.run(COMMANDS[args.command](args, container))
    except CardCounterException as e:
        logger.debug(f"{args.command} failed: {e.message}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130

    sys.stdout.write(output)
    return 0
