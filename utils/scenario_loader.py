"""
Scenario Loader for the Banker's Safety Checker.

Loads a snapshot from either the plain-text integer format or a JSON
scenario file. Only shape is validated here; the consistency invariants
are left to the integrity checker.
"""

import json
from typing import Dict, List, Any
from pathlib import Path

from models.snapshot import Snapshot


FORMATS = ('auto', 'text', 'json')


class ScenarioLoadError(Exception):
    """Exception raised when scenario file cannot be loaded or is invalid."""
    pass


class InputUnavailable(ScenarioLoadError):
    """Scenario file is missing or cannot be read."""
    pass


def load_snapshot(file_path: str, fmt: str = 'auto') -> Snapshot:
    """
    Load a snapshot from a scenario file.

    Args:
        file_path: Path to scenario file
        fmt: 'text', 'json', or 'auto' (JSON for a .json suffix, text otherwise)

    Returns:
        Snapshot ready for the integrity checker

    Raises:
        InputUnavailable: If the file cannot be opened or read
        ScenarioLoadError: If the file contents are malformed
    """
    if fmt not in FORMATS:
        raise ValueError(f"Unknown scenario format: {fmt}")

    if fmt == 'auto':
        fmt = 'json' if Path(file_path).suffix.lower() == '.json' else 'text'

    content = _read_file(file_path)

    if fmt == 'json':
        return parse_json_scenario(content)
    return parse_text_scenario(content)


def _read_file(file_path: str) -> str:
    """Read the whole file, mapping OS errors to InputUnavailable."""
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return f.read()
    except FileNotFoundError:
        raise InputUnavailable(f"Unable to open file \"{file_path}\"")
    except (OSError, UnicodeDecodeError) as e:
        raise InputUnavailable(f"Unable to read file \"{file_path}\": {e}")


def parse_text_scenario(content: str) -> Snapshot:
    """
    Parse the whitespace-separated integer format.

    Layout:
        R P
        R resource totals
        P*R demand values (row-major)
        P*R allocation values (row-major)

    Args:
        content: File contents

    Returns:
        Parsed Snapshot

    Raises:
        ScenarioLoadError: On truncated input, non-integer tokens,
            negative values, or trailing data
    """
    tokens = content.split()
    values = []
    for position, token in enumerate(tokens):
        try:
            values.append(int(token))
        except ValueError:
            raise ScenarioLoadError(f"Token {position + 1} is not an integer: '{token}'")

    if len(values) < 2:
        raise ScenarioLoadError("Scenario must start with resource and process counts")

    num_resources, num_processes = values[0], values[1]
    if num_resources < 0 or num_processes < 0:
        raise ScenarioLoadError(
            f"Counts must be non-negative (resources={num_resources}, "
            f"processes={num_processes})"
        )

    expected = 2 + num_resources + 2 * num_processes * num_resources
    if len(values) < expected:
        raise ScenarioLoadError(
            f"Scenario truncated: expected {expected} integers, found {len(values)}"
        )
    if len(values) > expected:
        raise ScenarioLoadError(
            f"Unexpected trailing data: expected {expected} integers, found {len(values)}"
        )

    cursor = 2
    totals = values[cursor:cursor + num_resources]
    cursor += num_resources

    demand = _take_rows(values, cursor, num_processes, num_resources)
    cursor += num_processes * num_resources
    allocation = _take_rows(values, cursor, num_processes, num_resources)

    return _build_snapshot(totals, demand, allocation)


def _take_rows(values: List[int], start: int, rows: int, cols: int) -> List[List[int]]:
    """Slice a row-major block of values into a list of rows."""
    return [values[start + i * cols:start + (i + 1) * cols] for i in range(rows)]


def parse_json_scenario(content: str) -> Snapshot:
    """
    Parse a JSON scenario.

    Expected shape:
        {
          "description": "...",
          "resources": [{"type_id": 0, "total_instances": 10}, ...],
          "processes": [{"max_demand": [...], "initial_allocation": [...]}, ...]
        }

    Args:
        content: File contents

    Returns:
        Parsed Snapshot

    Raises:
        ScenarioLoadError: If JSON is invalid or required fields are missing
    """
    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ScenarioLoadError(f"Invalid JSON in scenario file: {e}")

    if not isinstance(data, dict):
        raise ScenarioLoadError("Scenario must be a JSON object")

    # Validate required fields
    if 'resources' not in data:
        raise ScenarioLoadError("Scenario missing 'resources' field")
    if 'processes' not in data:
        raise ScenarioLoadError("Scenario missing 'processes' field")

    _require_list(data['resources'], "'resources'")
    _require_list(data['processes'], "'processes'")

    totals = _load_resources(data['resources'])
    num_resources = len(totals)

    demand = []
    allocation = []
    for index, proc_data in enumerate(data['processes']):
        max_demand, initial_allocation = _load_process(proc_data, index, num_resources)
        demand.append(max_demand)
        allocation.append(initial_allocation)

    return _build_snapshot(totals, demand, allocation)


def _load_resources(resource_data: List[Dict[str, Any]]) -> List[int]:
    """
    Load resource totals, ordered by type_id.

    Args:
        resource_data: List of resource dictionaries

    Returns:
        Total instances per resource type
    """
    resources = []

    for position, res in enumerate(resource_data):
        if not isinstance(res, dict):
            raise ScenarioLoadError(f"Resource {position} must be an object, got {res!r}")
        if 'type_id' not in res:
            raise ScenarioLoadError("Resource missing 'type_id' field")
        if 'total_instances' not in res:
            raise ScenarioLoadError(f"Resource {res['type_id']} missing 'total_instances'")
        if isinstance(res['type_id'], bool) or not isinstance(res['type_id'], int):
            raise ScenarioLoadError(f"Resource {position}: type_id must be an integer")
        resources.append(res)

    resources.sort(key=lambda r: r['type_id'])

    type_ids = [r['type_id'] for r in resources]
    if type_ids != list(range(len(resources))):
        raise ScenarioLoadError(
            f"Resource type_ids must be 0..{len(resources) - 1}, got {type_ids}"
        )

    return [r['total_instances'] for r in resources]


def _load_process(proc_data: Dict[str, Any], index: int, num_resources: int):
    """
    Load one process's demand and allocation rows.

    Args:
        proc_data: Process dictionary from scenario
        index: Position of the process in the file
        num_resources: Number of resource types in system

    Returns:
        Tuple of (max_demand, initial_allocation)
    """
    if not isinstance(proc_data, dict):
        raise ScenarioLoadError(f"Process {index} must be an object, got {proc_data!r}")
    if 'max_demand' not in proc_data:
        raise ScenarioLoadError(f"Process {index} missing required field: max_demand")

    max_demand = proc_data['max_demand']
    _require_list(max_demand, f"Process {index}: max_demand")
    if len(max_demand) != num_resources:
        raise ScenarioLoadError(
            f"Process {index}: max_demand length ({len(max_demand)}) "
            f"does not match resource count ({num_resources})"
        )

    # Defaults to all zeros
    initial_allocation = proc_data.get('initial_allocation', [0] * num_resources)
    _require_list(initial_allocation, f"Process {index}: initial_allocation")
    if len(initial_allocation) != num_resources:
        raise ScenarioLoadError(f"Process {index}: initial_allocation length mismatch")

    return max_demand, initial_allocation


def _require_list(value: Any, what: str) -> None:
    """Raise ScenarioLoadError unless value is a JSON array."""
    if not isinstance(value, list):
        raise ScenarioLoadError(f"{what} must be a list, got {type(value).__name__}")


def _build_snapshot(totals, demand, allocation) -> Snapshot:
    """Construct the snapshot, mapping shape errors to ScenarioLoadError."""
    try:
        return Snapshot.from_lists(totals, demand, allocation)
    except ValueError as e:
        raise ScenarioLoadError(f"Invalid scenario: {e}")


def get_scenario_description(file_path: str) -> str:
    """
    Get description from a JSON scenario file without full loading.

    Args:
        file_path: Path to scenario JSON file

    Returns:
        Description string, or empty string if not present
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError):
        return ''
    if not isinstance(data, dict):
        return ''
    return data.get('description', '')
