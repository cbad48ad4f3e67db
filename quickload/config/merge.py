# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Deep merging of configuration trees.

Merge Behavior:
    The merger performs deep merging with "last wins" semantics:

    - **Mappings**: Recursively merged (keys from source override target)
    - **Sequences**: Completely replaced (NOT appended/extended)
    - **Scalars**: Overwritten (strings, numbers, booleans, null)
    - **Absent**: A source value of ABSENT leaves the target untouched

    Keys present only in the target are preserved. Neither input is mutated.

Every value is classified into a NodeKind before it is merged, so the
rules above are decided on the kind of node rather than on ad hoc type
checks scattered through the merge loop.

Example:
    Environment overrides on top of defaults:
        ```python
        from quickload.config.merge import merge

        merge(
            {"db": {"host": "localhost", "port": 5432}, "hosts": ["a", "b"]},
            {"db": {"host": "db.internal"}, "hosts": ["c"]},
        )
        # {"db": {"host": "db.internal", "port": 5432}, "hosts": ["c"]}
        ```
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from quickload.exceptions import ConfigurationError, ErrorCode

__all__ = ["ABSENT", "NodeKind", "classify", "merge"]


class _Absent:
    """Type of the ABSENT sentinel."""

    _instance: _Absent | None = None

    def __new__(cls) -> _Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


# Marks a value that should not take part in a merge
ABSENT: Any = _Absent()


class NodeKind(Enum):
    """Kinds of node found in a configuration tree."""

    SCALAR = "scalar"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    ABSENT = "absent"


def classify(value: Any) -> NodeKind:
    """Return the NodeKind of a configuration value.

    Strings are scalars, not sequences. Any dict is a mapping and any list or
    tuple is a sequence; everything else is treated as a scalar leaf.
    """
    if value is ABSENT:
        return NodeKind.ABSENT
    if isinstance(value, dict):
        return NodeKind.MAPPING
    if isinstance(value, (list, tuple)):
        return NodeKind.SEQUENCE
    return NodeKind.SCALAR


def _merge_mappings(target: dict[str, Any], source: dict[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(target)
    for key, incoming in source.items():
        incoming_kind = classify(incoming)
        if incoming_kind is NodeKind.ABSENT:
            continue
        existing_kind = classify(result.get(key, ABSENT))
        if incoming_kind is NodeKind.MAPPING and existing_kind is NodeKind.MAPPING:
            result[key] = _merge_mappings(result[key], incoming)
        else:
            # Replace sequences and scalars entirely
            result[key] = incoming
    return result


def merge(target: Any, source: Any) -> dict[str, Any]:
    """Deep-merge ``source`` on top of ``target`` and return a new dict.

    Args:
        target: The base configuration (e.g., defaults).
        source: The overriding configuration (e.g., environment overrides).

    Returns:
        A new dict. Nested mappings in the result that were rebuilt by the
        merge are new objects; untouched subtrees are shared with the inputs.

    Raises:
        ConfigurationError: MERGE_ERROR if either root is not a mapping, for
            example a configuration file whose top level is a JSON array.
    """
    for name, value in (("target", target), ("source", source)):
        if classify(value) is not NodeKind.MAPPING:
            raise ConfigurationError(
                f"Cannot merge configuration: {name} must be a mapping, "
                f"got {type(value).__name__}",
                ErrorCode.MERGE_ERROR,
            )
    return _merge_mappings(target, source)
