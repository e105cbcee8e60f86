"""Command-line interface for runsummary."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import List, Optional

from runsummary.dsl.loader import load_run_file
from runsummary.exec.listener import LoggingListener
from runsummary.exec.replay import summarize_run
from runsummary.logging import get_logger, set_global_log_level
from runsummary.model.identifier import Identifier
from runsummary.model.plan import TestPlan
from runsummary.results.render import write_failures, write_overview

logger = get_logger(__name__)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _tree_lines(plan: TestPlan, identifier: Identifier, depth: int) -> List[str]:
    marker = "+" if identifier.is_container else "-"
    line = f"   {'  ' * depth}{marker} {identifier.display_name}"
    if identifier.source is not None:
        line += f"  [{identifier.source}]"
    lines = [line]
    for child in plan.get_children(identifier):
        lines.extend(_tree_lines(plan, child, depth + 1))
    return lines


def _report_run(path: Path, json_path: Optional[Path], stdout: bool) -> None:
    """Replay a recorded run and print its summary.

    Exits with status 1 when the run recorded any failure, or when the file
    cannot be loaded or replayed.

    Args:
        path: Recorded run YAML file.
        json_path: Optional path where the summary should be exported as JSON.
        stdout: Whether to also print the JSON summary to stdout.
    """
    logger.info(f"Loading recorded run from: {path}")
    _start_time = perf_counter()

    try:
        run = load_run_file(path)
        summary = summarize_run(run, listeners=[LoggingListener()])

        write_overview(summary, sys.stdout)
        write_failures(summary, sys.stdout)

        if json_path is not None or stdout:
            json_str = json.dumps(summary.to_dict(), indent=2, default=str)
            if json_path is not None:
                json_path.parent.mkdir(parents=True, exist_ok=True)
                logger.info(f"Writing summary to: {json_path}")
                json_path.write_text(json_str)
                print(f"✅ Summary written to: {json_path}")
            if stdout:
                print(json_str)

        _elapsed = perf_counter() - _start_time
        logger.info(f"Report completed in {_format_duration(_elapsed)}")

    except FileNotFoundError:
        logger.error(f"Recorded run file not found: {path}")
        print(f"❌ ERROR: Recorded run file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to report run: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to report run: {type(e).__name__}: {e}")
        sys.exit(1)

    if summary.has_failures:
        n = summary.total_failure_count
        logger.warning(f"{n} {_plural(n, 'failure')} recorded")
        sys.exit(1)


def _inspect_run(path: Path) -> None:
    """Print the plan tree and event count of a recorded run."""
    try:
        run = load_run_file(path)
    except FileNotFoundError:
        print(f"❌ ERROR: Recorded run file not found: {path}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect run: {e}")
        print("❌ ERROR: Failed to inspect run")
        print(f"  {type(e).__name__}: {e}")
        sys.exit(1)

    plan = run.plan
    counts = plan.count_by_kind()

    print("\n1. TEST PLAN")
    print("-" * 30)
    for kind, n in counts.items():
        print(f"   {kind.plural.capitalize()}: {n}")
    if not plan.contains_tests():
        print("   WARNING: plan contains no tests")
    for root in plan.roots:
        print("\n".join(_tree_lines(plan, root, 0)))

    print("\n2. EVENTS")
    print("-" * 30)
    n_events = len(run.events)
    print(f"   Total: {n_events} {_plural(n_events, 'event')}")


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``runsummary`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="runsummary",
        description="Summarize recorded test plan executions.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress informational logs"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{report,inspect}",
        help="Available commands",
    )

    report_parser = subparsers.add_parser(
        "report", help="Replay a recorded run and print its summary"
    )
    report_parser.add_argument("run", type=Path, help="Path to recorded run YAML")
    report_parser.add_argument(
        "--json",
        "-j",
        type=Path,
        default=None,
        help="Export the summary to this JSON file",
    )
    report_parser.add_argument(
        "--stdout",
        action="store_true",
        help="Also print the JSON summary to stdout",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show the plan tree of a recorded run"
    )
    inspect_parser.add_argument("run", type=Path, help="Path to recorded run YAML")

    effective_args = sys.argv[1:] if argv is None else argv

    # If no arguments are provided, show help and exit cleanly
    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    if args.command == "report":
        _report_run(args.run, args.json, args.stdout)
    elif args.command == "inspect":
        _inspect_run(args.run)


if __name__ == "__main__":
    main()
