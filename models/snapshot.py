"""
Snapshot model for the Banker's Safety Checker.

Holds one point-in-time record of resource totals, declared maximum
demands and current allocations for every process in the system.
"""

import numpy as np
from typing import List, Sequence
from dataclasses import dataclass


def _exact_copy(values, label: str) -> np.ndarray:
    """
    Read-only copy holding Python ints.

    Object dtype keeps integer arithmetic exact, so column sums and
    released totals cannot wrap around the way int64 would.
    """
    source = np.array(values, dtype=object)
    flat = source.ravel().tolist()
    _check_entries(flat, label)

    array = np.array([int(value) for value in flat], dtype=object).reshape(source.shape)
    array.setflags(write=False)
    return array


def _check_entries(values: Sequence[int], label: str) -> None:
    """Reject anything that is not a non-negative integer."""
    for j, value in enumerate(values):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ValueError(f"{label}[{j}] is not an integer: {value!r}")
        if value < 0:
            raise ValueError(f"{label}[{j}] is negative: {value}")


@dataclass(frozen=True, eq=False)
class Snapshot:
    """
    Immutable snapshot of a resource-allocation system.

    Attributes:
        resource_totals: [R] Total instances of each resource type
        demand: [P][R] Maximum instances each process may ever hold
        allocation: [P][R] Instances each process currently holds

    Inputs are copied into read-only object-dtype arrays of Python ints;
    the caller's arrays are left untouched.

    Invariants (checked by the integrity checker, not assumed here):
        sum(allocation[:, j]) <= resource_totals[j]
        allocation[i][j] <= demand[i][j]
    """
    resource_totals: np.ndarray
    demand: np.ndarray
    allocation: np.ndarray

    def __post_init__(self):
        """Copy the inputs, validate shapes and entries, and lock the copies."""
        for name in ("resource_totals", "demand", "allocation"):
            object.__setattr__(self, name, _exact_copy(getattr(self, name), name))

        if self.resource_totals.ndim != 1:
            raise ValueError("resource_totals must be a vector")
        num_resources = self.resource_totals.shape[0]

        for label, matrix in (("demand", self.demand), ("allocation", self.allocation)):
            if matrix.ndim != 2 or matrix.shape[1] != num_resources:
                raise ValueError(
                    f"{label} must have shape (P, {num_resources}), got {matrix.shape}"
                )

        if self.demand.shape != self.allocation.shape:
            raise ValueError(
                f"demand {self.demand.shape} and allocation {self.allocation.shape} "
                f"have different shapes"
            )

    @classmethod
    def from_lists(
        cls,
        resource_totals: Sequence[int],
        demand: Sequence[Sequence[int]],
        allocation: Sequence[Sequence[int]]
    ) -> "Snapshot":
        """
        Build a snapshot from plain nested sequences.

        Args:
            resource_totals: Total instances per resource type
            demand: Per-process maximum demand rows
            allocation: Per-process current allocation rows

        Returns:
            Snapshot with freshly copied, read-only arrays

        Raises:
            ValueError: If a row has the wrong length or an entry is not
                a non-negative integer
        """
        num_resources = len(resource_totals)
        _check_entries(resource_totals, "resource_totals")

        if len(demand) != len(allocation):
            raise ValueError(
                f"demand has {len(demand)} rows but allocation has {len(allocation)}"
            )

        for label, matrix in (("demand", demand), ("allocation", allocation)):
            for i, row in enumerate(matrix):
                if len(row) != num_resources:
                    raise ValueError(
                        f"{label}[{i}] has {len(row)} entries, expected {num_resources}"
                    )
                _check_entries(row, f"{label}[{i}]")

        num_processes = len(demand)
        shape = (num_processes, num_resources)

        return cls(
            resource_totals=np.array(resource_totals, dtype=object).reshape(num_resources),
            demand=np.array(demand, dtype=object).reshape(shape),
            allocation=np.array(allocation, dtype=object).reshape(shape),
        )

    @property
    def num_processes(self) -> int:
        """Number of processes in the snapshot."""
        return self.demand.shape[0]

    @property
    def num_resources(self) -> int:
        """Number of resource types in the snapshot."""
        return self.resource_totals.shape[0]

    @property
    def need_matrix(self) -> np.ndarray:
        """
        Get need matrix [P][R].
        Computed as: Need = Demand - Allocation
        Informational only; the safety test compares the full demand row.
        """
        return self.demand - self.allocation

    @property
    def allocated_totals(self) -> np.ndarray:
        """Instances of each resource type held across all processes [R]."""
        return self.allocation.sum(axis=0)

    def display(self) -> str:
        """
        Generate readable string representation of the snapshot.

        Returns:
            Formatted string showing totals and all matrices
        """
        header = "     " + " ".join([f"R{j:2}" for j in range(self.num_resources)])

        output = []
        output.append("\n" + "="*60)
        output.append("SNAPSHOT")
        output.append("="*60)

        output.append("\nResource Totals:")
        totals = ", ".join(
            f"R{j}:{self.resource_totals[j]:2}" for j in range(self.num_resources)
        )
        output.append(f"  [{totals}]")

        for title, matrix in (
            ("Demand Matrix", self.demand),
            ("Allocation Matrix", self.allocation),
            ("Need Matrix (Demand - Allocation)", self.need_matrix),
        ):
            output.append(f"\n{title}:")
            output.append(header)
            output.extend(_matrix_rows(matrix))

        output.append("\n" + "="*60)
        return "\n".join(output)


def _matrix_rows(matrix: np.ndarray) -> List[str]:
    """Format each matrix row as '  T<i>:  a  b  c'."""
    rows = []
    for i, row in enumerate(matrix):
        rows.append(f"  T{i}: " + " ".join([f"{value:3}" for value in row]))
    return rows
