"""
Verdict formatting for the Banker's Safety Checker.
"""

from models.verdict import SafetyVerdict
from algorithms.integrity import IntegrityError, SupplyExceeded


def format_verdict(verdict: SafetyVerdict) -> str:
    """
    Format the safety verdict as a single line.

    Returns:
        "Safe", or "Unsafe: T<i> T<j> ... can't finish"
    """
    if verdict.is_safe:
        return "Safe"
    threads = " ".join(f"T{i}" for i in verdict.residual)
    return f"Unsafe: {threads} can't finish"


def format_completion_order(verdict: SafetyVerdict) -> str:
    """Format the order in which processes completed, e.g. 'T1 -> T3 -> T0'."""
    if not verdict.completion_order:
        return "(none)"
    return " -> ".join(f"T{i}" for i in verdict.completion_order)


def format_integrity_error(error: IntegrityError, verbose: bool = False) -> str:
    """
    Diagnostic for an integrity violation.

    Args:
        error: The violation raised by the integrity checker
        verbose: Append the offending counts where the message omits them

    Returns:
        One or more lines of text
    """
    message = str(error)
    if verbose and isinstance(error, SupplyExceeded):
        message += f"\n{error.details()}"
    return message
