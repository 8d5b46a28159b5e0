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

from .conditions import Condition, ConditionType
from .constants import GENERATION_MISMATCH_REASON, MISSING
from .resource import Resource
from .unstructured import get_conditions, get_int_field, get_string_field


def ready_condition_reader(u: Resource) -> list[Condition]:
    """
    Readiness for kinds without a dedicated rule, chiefly custom resources.

    Every 'Ready' entry under .status.conditions is mirrored in order. An
    object that reports no Ready condition at all is considered ready.
    """
    rv = []
    obj = u.object

    # An object without .status.observedGeneration is treated as observed.
    meta_generation = get_int_field(obj, ".metadata.generation", MISSING)
    observed_generation = get_int_field(
        obj, ".status.observedGeneration", meta_generation
    )
    if observed_generation != meta_generation:
        return [Condition.false(ConditionType.READY, GENERATION_MISMATCH_REASON)]

    for c in get_conditions(obj):
        if get_string_field(c, "type", "") != "Ready":
            continue
        reason = get_string_field(c, "reason", "")
        if get_string_field(c, "status", "") == "False":
            rv.append(Condition.false(ConditionType.READY, reason))
        else:
            rv.append(Condition.true(ConditionType.READY, reason))

    if not rv:
        rv.append(Condition.true(ConditionType.READY, "No Ready condition found"))
    return rv
