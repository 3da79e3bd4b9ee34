#!/usr/bin/env python3
"""
Banker's Safety Checker
Main entry point for analyzing a resource-allocation snapshot.

Loads one snapshot, validates it, runs the Banker's safety algorithm
and reports whether the system is in a safe state.
"""

import argparse
import sys
from typing import Optional

from models.snapshot import Snapshot
from models.verdict import SafetyVerdict
from utils.scenario_loader import load_snapshot, get_scenario_description, ScenarioLoadError, FORMATS
from utils.logger import AnalyzerLogger
from utils.report import format_verdict, format_completion_order, format_integrity_error
from algorithms.integrity import check_integrity, IntegrityError
from algorithms.safety import analyze_safety
from analysis.events import EventLog


EXIT_SAFE = 0
EXIT_FAILURE = 1


def analyze(snapshot: Snapshot, event_log: Optional[EventLog] = None) -> SafetyVerdict:
    """
    Validate a snapshot and run the safety algorithm on it.

    Args:
        snapshot: Snapshot to analyze
        event_log: Optional log that receives the safety algorithm trace

    Returns:
        SafetyVerdict

    Raises:
        IntegrityError: If the snapshot violates a consistency invariant;
            the safety algorithm is not run in that case
    """
    check_integrity(snapshot)
    return analyze_safety(snapshot, event_log)


def run_analysis(
    scenario_path: str,
    fmt: str = 'auto',
    verbose: bool = False,
    log_file: Optional[str] = None,
    show_order: bool = False
) -> int:
    """
    Load, validate and analyze one scenario file.

    Args:
        scenario_path: Path to scenario file
        fmt: Scenario format ('auto', 'text' or 'json')
        verbose: Enable verbose logging (snapshot tables and pass trace)
        log_file: Optional file that mirrors all output
        show_order: Print the completion order found by the scan

    Returns:
        Process exit code: 0 when safe, 1 on load failure, integrity
        failure or unsafe verdict
    """
    try:
        logger = AnalyzerLogger(verbose=verbose, log_file=log_file)
    except OSError as e:
        print(f"[ERROR] Unable to open log file: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        return _run(logger, scenario_path, fmt, show_order)
    finally:
        logger.close()


def _run(logger: AnalyzerLogger, scenario_path: str, fmt: str, show_order: bool) -> int:
    """Pipeline body; the caller owns the logger."""
    try:
        snapshot = load_snapshot(scenario_path, fmt)
    except ScenarioLoadError as e:
        logger.log(f"Failed to load scenario: {e}", "error")
        return EXIT_FAILURE

    description = get_scenario_description(scenario_path)
    if description:
        logger.log(f"Scenario: {description}", "debug")
    logger.log(
        f"{snapshot.num_processes} processes, {snapshot.num_resources} resource types",
        "debug"
    )
    logger.log_snapshot(snapshot)

    event_log = EventLog()
    try:
        verdict = analyze(snapshot, event_log)
    except IntegrityError as e:
        logger.log_integrity_failure(format_integrity_error(e, verbose=logger.verbose))
        return EXIT_FAILURE

    for event in event_log.events:
        logger.log_event(event)

    logger.log_verdict(verdict, format_verdict(verdict))
    if show_order:
        logger.log(f"Completion order: {format_completion_order(verdict)}")

    return EXIT_SAFE if verdict.is_safe else EXIT_FAILURE


def main(argv=None):
    """Main entry point for the safety checker."""
    parser = argparse.ArgumentParser(
        description="Banker's algorithm safety checker for a resource-allocation snapshot"
    )
    parser.add_argument(
        'scenario',
        type=str,
        help='Path to scenario file'
    )
    parser.add_argument(
        '--format',
        choices=FORMATS,
        default='auto',
        help='Scenario file format (default: auto, JSON for .json files)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )
    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write all output to this file'
    )
    parser.add_argument(
        '--show-order',
        action='store_true',
        help='Print the order in which processes completed'
    )

    args = parser.parse_args(argv)

    return run_analysis(
        args.scenario,
        fmt=args.format,
        verbose=args.verbose,
        log_file=args.log_file,
        show_order=args.show_order
    )


if __name__ == '__main__':
    sys.exit(main())
