"""
Snapshot Integrity Checker for the Banker's Safety Checker.

Validates the two consistency invariants of a snapshot before any
safety reasoning is attempted. Fails fast on the first violation.
"""

from models.snapshot import Snapshot


class IntegrityError(Exception):
    """Base class for snapshot integrity violations."""
    pass


class SupplyExceeded(IntegrityError):
    """Total allocation of a resource type exceeds its supply."""

    def __init__(self, resource_type: int, allocated: int, total: int):
        self.resource_type = resource_type
        self.allocated = allocated
        self.total = total
        super().__init__(
            "Integrity test failed: allocated resources exceed total resources"
        )

    def details(self) -> str:
        """One-line diagnostic with the offending counts."""
        return (
            f"R{self.resource_type}: allocated {self.allocated} "
            f"of {self.total} total instances"
        )


class DemandExceeded(IntegrityError):
    """
    A process holds more of a resource type than it declared it would need.

    ``shortfall`` is ``demand - allocation`` and is therefore negative;
    ``excess`` is the same distance as a positive magnitude.
    """

    def __init__(self, process: int, resource_type: int, shortfall: int):
        self.process = process
        self.resource_type = resource_type
        self.shortfall = shortfall
        super().__init__(
            f"Integrity test failed: allocated resources exceed demand for Thread {process}\n"
            f"Need {shortfall} instances of resource {resource_type}"
        )

    @property
    def excess(self) -> int:
        """How far the allocation is over the declared maximum."""
        return -self.shortfall


def check_integrity(snapshot: Snapshot) -> None:
    """
    Check snapshot consistency.

    Order of checks:
    1. For each resource type j: sum(allocation[:, j]) <= resource_totals[j]
    2. For each process i, resource type j: allocation[i][j] <= demand[i][j]

    Only the first violation in this scan order is reported.

    Args:
        snapshot: Snapshot to validate (not modified)

    Raises:
        SupplyExceeded: If a resource type is over-allocated
        DemandExceeded: If a process holds more than its declared demand
    """
    allocated_totals = snapshot.allocated_totals

    for j in range(snapshot.num_resources):
        if allocated_totals[j] > snapshot.resource_totals[j]:
            raise SupplyExceeded(
                resource_type=j,
                allocated=int(allocated_totals[j]),
                total=int(snapshot.resource_totals[j])
            )

    for i in range(snapshot.num_processes):
        for j in range(snapshot.num_resources):
            if snapshot.allocation[i][j] > snapshot.demand[i][j]:
                raise DemandExceeded(
                    process=i,
                    resource_type=j,
                    shortfall=int(snapshot.demand[i][j] - snapshot.allocation[i][j])
                )
