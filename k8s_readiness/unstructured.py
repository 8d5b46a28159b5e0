# Copyright 2026 The Kubernetes Authors.
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
"""
Lenient field access over the untyped object trees returned by the API server.

Missing fields and fields of the wrong type resolve to the caller's default
so a partially populated object never breaks an evaluator.
"""

import logging
from typing import Any

from .errors import AccessorError

logger = logging.getLogger(__name__)

StrDict = dict[str, Any]

_NOT_FOUND = object()


def json_path(fields: list[str] | tuple[str, ...]) -> str:
    return "." + ".".join(fields)


def split_path(field_path: str) -> list[str]:
    """Splits a dotted path such as '.status.phase' into its keys."""
    fields = field_path.split(".")
    if fields and fields[0] == "":
        fields = fields[1:]
    return fields


def nested_field(obj: StrDict, *fields: str) -> tuple[Any, bool]:
    """
    Returns the value at the nested field path and whether it was found.
    Raises AccessorError when an intermediate value is not a map.
    """
    val: Any = obj
    for i, field in enumerate(fields):
        if not isinstance(val, dict):
            raise AccessorError(
                json_path(fields[:i]),
                f"{json_path(fields[:i])} accessor error: {val!r} is of the type "
                f"{type(val).__name__}, expected dict",
            )
        val = val.get(field, _NOT_FOUND)
        if val is _NOT_FOUND:
            return None, False
    return val, True


def nested_map_slice(obj: StrDict, *fields: str) -> tuple[list[StrDict] | None, bool]:
    """
    Returns the list of maps at the nested field path.

    (None, False) is returned when the field is absent. AccessorError is
    raised when the field is present but is not a list, or when one of its
    entries is not a map.
    """
    val, found = nested_field(obj, *fields)
    if not found:
        return None, False

    path = json_path(fields)
    if not isinstance(val, list):
        raise AccessorError(
            path,
            f"{path} accessor error: {val!r} is of the type {type(val).__name__}, "
            "expected list",
        )

    entries = []
    for index, entry in enumerate(val):
        if not isinstance(entry, dict):
            raise AccessorError(
                path,
                f"{path} accessor error: {path}[{index}] is of the type "
                f"{type(entry).__name__}, expected dict",
                index=index,
            )
        entries.append(entry)
    return entries, True


def _lookup(obj: StrDict, field_path: str) -> tuple[Any, bool]:
    try:
        return nested_field(obj, *split_path(field_path))
    except AccessorError:
        return None, False


def get_string_field(obj: StrDict, field_path: str, default: str) -> str:
    """Returns the string at field_path, or default if absent or not a string."""
    val, found = _lookup(obj, field_path)
    if found and isinstance(val, str):
        return val
    return default


def get_int_field(obj: StrDict, field_path: str, default: int) -> int:
    """Returns the integer at field_path, or default if absent or not an integer."""
    val, found = _lookup(obj, field_path)
    # bool is an int subclass but never a valid count or generation.
    if found and isinstance(val, int) and not isinstance(val, bool):
        return int(val)
    return default


def get_conditions(obj: StrDict) -> list[StrDict]:
    """Returns .status.conditions, or an empty list if absent or malformed."""
    try:
        conditions, found = nested_map_slice(obj, "status", "conditions")
    except AccessorError as e:
        logger.warning(f"Ignoring malformed conditions: {e}")
        return []
    if not found:
        return []
    return conditions
