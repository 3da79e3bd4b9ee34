"""
Event Model for the Banker's Safety Checker.

Defines event types for tracing the safety algorithm pass by pass.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class EventType(Enum):
    """Types of events recorded during a safety analysis."""
    PASS_START = "pass_start"
    COMPLETION = "completion"
    FIXED_POINT = "fixed_point"


@dataclass
class AnalysisEvent:
    """
    Represents a single event in the safety analysis.

    Attributes:
        pass_number: Scan pass (1-based) in which the event occurred
        event_type: Type of event
        process_index: Process involved (COMPLETION only)
        available: Available vector right after the event
        message: Human-readable description
    """
    pass_number: int
    event_type: EventType
    process_index: Optional[int] = None
    available: Tuple[int, ...] = ()
    message: str = ""

    def __str__(self) -> str:
        """String representation for logging."""
        parts = [f"Pass {self.pass_number}"]
        parts.append(self.event_type.value.upper())
        if self.process_index is not None:
            parts.append(f"T{self.process_index}")
        if self.message:
            parts.append(f"- {self.message}")
        return " ".join(parts)


@dataclass
class EventLog:
    """
    Container for all events of one analysis.

    Provides methods for querying and filtering events.
    """
    events: List[AnalysisEvent] = field(default_factory=list)

    def add_event(self, event: AnalysisEvent) -> None:
        """Add an event to the log."""
        self.events.append(event)

    def get_events_by_type(self, event_type: EventType) -> List[AnalysisEvent]:
        """Get all events of a specific type."""
        return [e for e in self.events if e.event_type == event_type]

    def get_events_by_pass(self, pass_number: int) -> List[AnalysisEvent]:
        """Get all events recorded during one pass."""
        return [e for e in self.events if e.pass_number == pass_number]

    def completed_indices(self) -> List[int]:
        """Process indices in the order they completed."""
        return [e.process_index for e in self.get_events_by_type(EventType.COMPLETION)]

    def available_history(self) -> List[Tuple[int, ...]]:
        """Available vector after every recorded event, in order."""
        return [e.available for e in self.events]

    def __len__(self) -> int:
        """Get number of events."""
        return len(self.events)
