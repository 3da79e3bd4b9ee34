"""
Safety Analyzer (Banker's safety algorithm) for the Banker's Safety Checker.

Decides whether every process in a snapshot can run to completion.
"""

import numpy as np
from typing import Optional

from models.snapshot import Snapshot
from models.verdict import SafetyVerdict
from analysis.events import EventLog, AnalysisEvent, EventType


def analyze_safety(snapshot: Snapshot, event_log: Optional[EventLog] = None) -> SafetyVerdict:
    """
    Run the safety algorithm to its fixed point.

    Algorithm:
    1. Initialize Available = copy of resource totals, Completed = {}
    2. Scan processes 0..P-1; a not-yet-completed process i can complete
       if Demand[i] <= Available (element-wise)
    3. If it can: Available += Allocation[i], mark i completed. Releases
       count toward later processes in the same pass
    4. Repeat passes until one completes nobody (fixed point)
    5. SAFE if all completed, otherwise UNSAFE with the residual set

    Each productive pass completes at least one process, so the loop runs
    at most P + 1 passes.

    The caller is expected to have run the integrity checker first.

    Args:
        snapshot: Snapshot to analyze (not modified)
        event_log: Optional log that receives a trace of every pass

    Returns:
        SafetyVerdict with residual indices in increasing order
    """
    num_processes = snapshot.num_processes

    available = snapshot.resource_totals.copy()
    completed = np.zeros(num_processes, dtype=bool)
    completion_order = []

    max_passes = num_processes + 1
    passes = 0

    for pass_number in range(1, max_passes + 1):
        passes = pass_number
        made_progress = False
        _record(event_log, pass_number, EventType.PASS_START, available)

        for i in range(num_processes):
            if completed[i]:
                continue

            # Full declared demand must fit, not just the remaining need
            if np.all(snapshot.demand[i] <= available):
                available += snapshot.allocation[i]
                completed[i] = True
                completion_order.append(i)
                made_progress = True
                _record(
                    event_log, pass_number, EventType.COMPLETION, available,
                    process_index=i,
                    message=f"released {snapshot.allocation[i].tolist()}"
                )

        if not made_progress:
            break
    else:
        raise RuntimeError(
            f"Safety analysis did not reach a fixed point within {max_passes} passes"
        )

    residual = tuple(int(i) for i in np.flatnonzero(~completed))
    _record(
        event_log, passes, EventType.FIXED_POINT, available,
        message=f"{len(completion_order)}/{num_processes} completed"
    )

    return SafetyVerdict(
        is_safe=not residual,
        residual=residual,
        completion_order=tuple(completion_order),
        passes=passes
    )


def is_safe(snapshot: Snapshot) -> bool:
    """Check if the snapshot is in a safe state."""
    return analyze_safety(snapshot).is_safe


def _record(
    event_log: Optional[EventLog],
    pass_number: int,
    event_type: EventType,
    available: np.ndarray,
    process_index: Optional[int] = None,
    message: str = ""
) -> None:
    """Append a trace event if a log was supplied."""
    if event_log is None:
        return
    event_log.add_event(AnalysisEvent(
        pass_number=pass_number,
        event_type=event_type,
        process_index=process_index,
        available=tuple(int(v) for v in available),
        message=message
    ))
