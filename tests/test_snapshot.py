"""
Snapshot Model Tests

Tests construction, shape validation, immutability and derived views.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from models.snapshot import Snapshot
from models.verdict import SafetyVerdict


def make_textbook_snapshot():
    """Classic five-process, three-resource snapshot."""
    return Snapshot.from_lists(
        [10, 5, 7],
        [[7, 5, 3], [3, 2, 2], [9, 0, 2], [2, 2, 2], [4, 3, 3]],
        [[0, 1, 0], [2, 0, 0], [3, 0, 2], [2, 1, 1], [0, 0, 2]],
    )


def test_dimensions():
    """P and R come from the matrices."""
    snapshot = make_textbook_snapshot()
    assert snapshot.num_processes == 5
    assert snapshot.num_resources == 3
    assert snapshot.demand.shape == (5, 3)
    assert snapshot.allocation.shape == (5, 3)


def test_derived_views():
    """Need matrix and allocated totals."""
    snapshot = make_textbook_snapshot()
    np.testing.assert_array_equal(snapshot.allocated_totals, [7, 2, 5])
    np.testing.assert_array_equal(snapshot.need_matrix[0], [7, 4, 3])
    np.testing.assert_array_equal(snapshot.need_matrix[3], [0, 1, 1])


def test_arrays_are_read_only():
    """A snapshot cannot be mutated after construction."""
    snapshot = make_textbook_snapshot()
    with pytest.raises(ValueError):
        snapshot.allocation[0][0] = 5
    with pytest.raises(ValueError):
        snapshot.resource_totals[1] = 0
    with pytest.raises(AttributeError):
        snapshot.demand = np.zeros((5, 3), dtype=int)


def test_from_lists_copies_input():
    """Later changes to the source lists do not leak in."""
    totals = [4]
    demand = [[2]]
    allocation = [[1]]
    snapshot = Snapshot.from_lists(totals, demand, allocation)
    totals[0] = 0
    allocation[0][0] = 9
    assert snapshot.resource_totals[0] == 4
    assert snapshot.allocation[0][0] == 1


def test_empty_process_list():
    """P = 0 still carries the resource dimension."""
    snapshot = Snapshot.from_lists([3, 4], [], [])
    assert snapshot.num_processes == 0
    assert snapshot.num_resources == 2
    assert snapshot.demand.shape == (0, 2)
    np.testing.assert_array_equal(snapshot.allocated_totals, [0, 0])


def test_no_resource_types():
    """R = 0 gives empty rows."""
    snapshot = Snapshot.from_lists([], [[], []], [[], []])
    assert snapshot.num_processes == 2
    assert snapshot.num_resources == 0
    assert snapshot.allocation.shape == (2, 0)


def test_row_length_mismatch_rejected():
    """Every row must have R entries."""
    with pytest.raises(ValueError, match="demand\\[1\\]"):
        Snapshot.from_lists([1, 1], [[1, 1], [1]], [[0, 0], [0, 0]])
    with pytest.raises(ValueError, match="allocation\\[0\\]"):
        Snapshot.from_lists([1, 1], [[1, 1]], [[0, 0, 0]])


def test_row_count_mismatch_rejected():
    """demand and allocation describe the same processes."""
    with pytest.raises(ValueError, match="rows"):
        Snapshot.from_lists([1], [[1], [1]], [[0]])


def test_negative_and_non_integer_entries_rejected():
    """Entries must be non-negative integers."""
    with pytest.raises(ValueError, match="negative"):
        Snapshot.from_lists([-1], [[0]], [[0]])
    with pytest.raises(ValueError, match="not an integer"):
        Snapshot.from_lists([1], [[1.5]], [[0]])
    with pytest.raises(ValueError, match="not an integer"):
        Snapshot.from_lists([1], [[True]], [[0]])


def test_direct_construction_checks_shape():
    """Building from arrays directly still validates shape."""
    with pytest.raises(ValueError, match="shape"):
        Snapshot(
            resource_totals=np.array([1, 2]),
            demand=np.zeros((2, 3), dtype=int),
            allocation=np.zeros((2, 3), dtype=int),
        )


def test_display_lists_every_process():
    """display() renders one row per process in each table."""
    snapshot = make_textbook_snapshot()
    output = snapshot.display()
    print(output)
    assert "Resource Totals:" in output
    assert "R0:10" in output
    assert output.count("  T4: ") == 3
    assert "Need Matrix (Demand - Allocation):" in output


def test_verdict_consistency():
    """A verdict cannot be safe with residual processes, or unsafe without."""
    assert SafetyVerdict(is_safe=True).residual == ()
    assert SafetyVerdict(is_safe=False, residual=(1,), completion_order=(0,)).num_completed == 1
    with pytest.raises(ValueError):
        SafetyVerdict(is_safe=True, residual=(0,))
    with pytest.raises(ValueError):
        SafetyVerdict(is_safe=False)


def test_caller_arrays_stay_writable():
    """Direct construction copies the inputs instead of locking them."""
    totals = np.array([4, 4])
    demand = np.array([[2, 1]])
    allocation = np.array([[1, 1]])

    snapshot = Snapshot(resource_totals=totals, demand=demand, allocation=allocation)

    assert totals.flags.writeable
    assert allocation.flags.writeable
    allocation[0][0] = 3
    assert snapshot.allocation[0][0] == 1


def test_values_beyond_int64_are_exact():
    """Entries and derived sums are Python ints with no upper bound."""
    big = 2 ** 64
    snapshot = Snapshot.from_lists([big], [[big], [big]], [[big], [1]])

    assert snapshot.resource_totals[0] == big
    assert snapshot.allocated_totals[0] == big + 1
    assert snapshot.need_matrix[1][0] == big - 1


def test_direct_construction_checks_entries():
    """Floats and negatives are rejected on the direct path too."""
    with pytest.raises(ValueError, match="not an integer"):
        Snapshot(
            resource_totals=np.array([1.5]),
            demand=np.zeros((1, 1), dtype=int),
            allocation=np.zeros((1, 1), dtype=int),
        )
    with pytest.raises(ValueError, match="negative"):
        Snapshot(
            resource_totals=np.array([1]),
            demand=np.array([[-1]]),
            allocation=np.zeros((1, 1), dtype=int),
        )
