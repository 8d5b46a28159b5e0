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
Conditions reported for a resource and the aggregate result of a status run.
"""

from dataclasses import dataclass, field
from enum import Enum

from .errors import AggregateError
from .resource import Resource


class ConditionType(str, Enum):
    # Level conditions
    READY = "Ready"
    SETTLED = "Settled"

    # Terminal conditions
    FAILED = "Failed"
    COMPLETED = "Completed"

    def __str__(self) -> str:
        return self.value


class ConditionStatus(str, Enum):
    TRUE = "True"
    FALSE = "False"
    UNKNOWN = "Unknown"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Condition:
    """A single readiness condition. Immutable once built."""

    type: ConditionType
    status: ConditionStatus
    reason: str = ""

    @classmethod
    def true(cls, ctype: ConditionType, reason: str) -> "Condition":
        return cls(type=ctype, status=ConditionStatus.TRUE, reason=reason)

    @classmethod
    def false(cls, ctype: ConditionType, reason: str = "") -> "Condition":
        return cls(type=ctype, status=ConditionStatus.FALSE, reason=reason)

    @property
    def is_true(self) -> bool:
        return self.status == ConditionStatus.TRUE

    def to_dict(self) -> dict[str, str]:
        return {"type": str(self.type), "status": str(self.status), "reason": self.reason}


def get_condition(conditions: list[Condition], ctype: ConditionType) -> Condition | None:
    """Returns the first condition of the given type, or None."""
    for condition in conditions:
        if condition.type == ctype:
            return condition
    return None


@dataclass
class ResourceStatus:
    """
    Readiness of one resource. An item that failed to fetch or evaluate
    carries only an error.
    """

    resource: Resource
    conditions: list[Condition] = field(default_factory=list)
    error: Exception | None = None

    def is_ready(self) -> bool:
        """
        True when the item has no error and its first Ready condition is True.
        Evaluators that mirror several Ready entries list them in object order,
        so the first entry decides.
        """
        ready = get_condition(self.conditions, ConditionType.READY)
        return self.error is None and ready is not None and ready.is_true

    def to_dict(self) -> dict:
        rv = {
            "apiVersion": self.resource.api_version,
            "kind": self.resource.kind,
            "namespace": self.resource.namespace,
            "name": self.resource.name,
        }
        if self.error is not None:
            rv["error"] = str(self.error)
        else:
            rv["conditions"] = [c.to_dict() for c in self.conditions]
        return rv


@dataclass
class Result:
    """
    One ResourceStatus per input reference, in input order. When any item
    failed, error aggregates the individual errors; the remaining items are
    still fully populated.
    """

    resources: list[ResourceStatus] = field(default_factory=list)
    error: AggregateError | None = None

    def is_ready(self) -> bool:
        return all(rs.is_ready() for rs in self.resources)

    def raise_for_errors(self):
        """Raises the aggregate error if any resource failed."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict:
        return {"resources": [rs.to_dict() for rs in self.resources]}


def new_result(resources: list[ResourceStatus]) -> Result:
    """Builds a Result, aggregating item errors in input order."""
    errors = [rs.error for rs in resources if rs.error is not None]
    return Result(resources=resources, error=AggregateError(errors) if errors else None)
