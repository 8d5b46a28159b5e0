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

import yaml

from k8s_readiness import ConditionType, Resource, ResourceStatus, get_condition, is_ready
from k8s_readiness.constants import GENERATION_MISMATCH_REASON
from k8s_readiness.generic_status import ready_condition_reader


def y2u(spec: str) -> Resource:
    return Resource(object=yaml.safe_load(spec))


CRD_NO_STATUS = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
"""

CRD_MISMATCH_STATUS_GENERATION = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
   generation: 2
status:
   observedGeneration: 1
"""

CRD_READY = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
status:
   conditions:
    - type: Ready
      status: "True"
      reason: All looks ok
"""

CRD_NOT_READY = """
apiVersion: something/v1
kind: MyCR
metadata:
   generation: 1
   name: test
   namespace: qual
status:
   observedGeneration: 1
   conditions:
    - type: Ready
      status: "False"
"""

CRD_NO_CONDITION = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
status:
   conditions:
    - type: SomeCondition
      status: "False"
"""

CRD_UNKNOWN_READY = """
apiVersion: something/v1
kind: MyCR
metadata:
   generation: 4
   name: test
   namespace: qual
status:
   conditions:
    - type: Ready
      status: "Unknown"
      reason: Reconciling
"""

CRD_MULTIPLE_READY = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
status:
   conditions:
    - type: Ready
      status: "False"
      reason: first
    - type: Synced
      status: "True"
    - type: Ready
      status: "True"
      reason: second
"""

CRD_MALFORMED_CONDITIONS = """
apiVersion: something/v1
kind: MyCR
metadata:
   name: test
   namespace: qual
status:
   conditions: Ready
"""


def test_no_status_is_ready():
    conditions = is_ready(y2u(CRD_NO_STATUS))
    assert len(conditions) == 1
    assert conditions[0].type == ConditionType.READY
    assert conditions[0].status == "True"
    assert conditions[0].reason == "No Ready condition found"


def test_ready_condition_is_mirrored():
    ready = get_condition(is_ready(y2u(CRD_READY)), ConditionType.READY)
    assert ready.status == "True"
    assert ready.reason == "All looks ok"


def test_not_ready_condition_is_mirrored():
    ready = get_condition(is_ready(y2u(CRD_NOT_READY)), ConditionType.READY)
    assert ready.status == "False"
    assert ready.reason == ""


def test_other_conditions_are_ignored():
    conditions = is_ready(y2u(CRD_NO_CONDITION))
    assert len(conditions) == 1
    assert conditions[0].status == "True"
    assert conditions[0].reason == "No Ready condition found"


def test_generation_mismatch():
    ready = get_condition(
        is_ready(y2u(CRD_MISMATCH_STATUS_GENERATION)), ConditionType.READY
    )
    assert ready.status == "False"
    assert ready.reason == GENERATION_MISMATCH_REASON


def test_missing_observed_generation_is_treated_as_observed():
    ready = get_condition(is_ready(y2u(CRD_UNKNOWN_READY)), ConditionType.READY)
    # Only an explicit "False" status reports not ready.
    assert ready.status == "True"
    assert ready.reason == "Reconciling"


def test_every_ready_condition_is_reported_in_order():
    conditions = ready_condition_reader(y2u(CRD_MULTIPLE_READY))
    assert [(c.status, c.reason) for c in conditions] == [
        ("False", "first"),
        ("True", "second"),
    ]


def test_first_ready_condition_decides_readiness():
    u = y2u(CRD_MULTIPLE_READY)
    rs = ResourceStatus(resource=u, conditions=ready_condition_reader(u))
    assert not rs.is_ready()


def test_malformed_conditions_look_like_no_conditions():
    conditions = is_ready(y2u(CRD_MALFORMED_CONDITIONS))
    assert len(conditions) == 1
    assert conditions[0].reason == "No Ready condition found"
