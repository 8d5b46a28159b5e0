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

from .conditions import (
    Condition,
    ConditionStatus,
    ConditionType,
    ResourceStatus,
    Result,
    get_condition,
)
from .errors import AccessorError, AggregateError, ReadinessError
from .object_store import KubernetesObjectStore, ObjectStore
from .registry import EVALUATORS, get_legacy_ready_fn, get_ready_fn, is_ready
from .resource import GroupVersionKind, Resource
from .status import Status

__all__ = [
    "AccessorError",
    "AggregateError",
    "Condition",
    "ConditionStatus",
    "ConditionType",
    "EVALUATORS",
    "GroupVersionKind",
    "KubernetesObjectStore",
    "ObjectStore",
    "ReadinessError",
    "Resource",
    "ResourceStatus",
    "Result",
    "Status",
    "get_condition",
    "get_legacy_ready_fn",
    "get_ready_fn",
    "is_ready",
]
