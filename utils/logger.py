"""
Logger utility for the Banker's Safety Checker.

Provides leveled console logging with an optional log file.
"""

import sys
from typing import Optional
from datetime import datetime

from analysis.events import AnalysisEvent
from models.snapshot import Snapshot
from models.verdict import SafetyVerdict


class AnalyzerLogger:
    """
    Logger for analysis events and results.

    info/debug go to stdout, warning/error go to stderr. Debug lines are
    dropped unless verbose is set.
    """

    def __init__(self, verbose: bool = False, log_file: Optional[str] = None):
        """
        Initialize logger.

        Args:
            verbose: Enable verbose output
            log_file: Optional file path for logging
        """
        self.verbose = verbose
        self.log_file = log_file
        self.file_handle = None

        if self.log_file:
            self.file_handle = open(self.log_file, 'w', encoding='utf-8')
            self._write_header()

    def _write_header(self) -> None:
        """Write log file header."""
        if self.file_handle:
            timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
            self.file_handle.write(f"Safety Analysis Log - {timestamp}\n")
            self.file_handle.write("="*60 + "\n\n")

    def log(self, message: str, level: str = "info") -> None:
        """
        Log a message.

        Args:
            message: Message to log
            level: Log level (info, debug, warning, error)
        """
        if level == "debug" and not self.verbose:
            return

        formatted = self._format_message(message, level)
        stream = sys.stderr if level in ("warning", "error") else sys.stdout
        self._emit(formatted, stream)

    def _emit(self, line: str, stream) -> None:
        """Write a finished line to the console stream and the log file."""
        print(line, file=stream)

        if self.file_handle:
            self.file_handle.write(line + "\n")
            self.file_handle.flush()

    def _format_message(self, message: str, level: str) -> str:
        """Format message with level prefix."""
        if level == "error":
            return f"[ERROR] {message}"
        elif level == "warning":
            return f"[WARNING] {message}"
        elif level == "debug":
            return f"[DEBUG] {message}"
        else:
            return message

    def log_snapshot(self, snapshot: Snapshot) -> None:
        """Log the loaded snapshot tables (verbose only)."""
        self.log(f"Loaded Snapshot:{snapshot.display()}", "debug")

    def log_event(self, event: AnalysisEvent) -> None:
        """
        Log one trace event from the safety analysis.

        Args:
            event: Event recorded by the analyzer
        """
        self.log(f"{event} (available={list(event.available)})", "debug")

    def log_integrity_failure(self, message: str) -> None:
        """Log an integrity violation to stderr, unprefixed like the reference output."""
        self._emit(message, sys.stderr)

    def log_verdict(self, verdict: SafetyVerdict, line: str) -> None:
        """
        Log the final verdict line.

        Args:
            verdict: Result of the safety analysis
            line: Formatted verdict text
        """
        self.log(line)
        self.log(f"Passes: {verdict.passes}, completed: {verdict.num_completed}", "debug")

    def close(self) -> None:
        """Close log file if open."""
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def __del__(self):
        """Cleanup on destruction."""
        self.close()
