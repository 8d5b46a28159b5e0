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
Maps an object's (API group, kind) to the function that evaluates it.
"""

from types import MappingProxyType
from typing import Callable, Mapping

from . import legacy_status
from .conditions import Condition
from .constants import (
    APPS_API_GROUP,
    BATCH_API_GROUP,
    CORE_API_GROUP,
    CRONJOB_KIND,
    DAEMONSET_KIND,
    DEPLOYMENT_KIND,
    JOB_KIND,
    PDB_KIND,
    POD_KIND,
    POLICY_API_GROUP,
    PVC_KIND,
    REPLICASET_KIND,
    SERVICE_KIND,
    STATEFULSET_KIND,
)
from .generic_status import ready_condition_reader
from .resource import Resource

GetConditionsFn = Callable[[Resource], list[Condition]]

EVALUATORS: Mapping[tuple[str, str], GetConditionsFn] = MappingProxyType(
    {
        (CORE_API_GROUP, SERVICE_KIND): legacy_status.service_conditions,
        (CORE_API_GROUP, POD_KIND): legacy_status.pod_conditions,
        (CORE_API_GROUP, PVC_KIND): legacy_status.pvc_conditions,
        (APPS_API_GROUP, STATEFULSET_KIND): legacy_status.sts_conditions,
        (APPS_API_GROUP, DAEMONSET_KIND): legacy_status.daemonset_conditions,
        (APPS_API_GROUP, DEPLOYMENT_KIND): legacy_status.deployment_conditions,
        (APPS_API_GROUP, REPLICASET_KIND): legacy_status.replicaset_conditions,
        (POLICY_API_GROUP, PDB_KIND): legacy_status.pdb_conditions,
        (BATCH_API_GROUP, CRONJOB_KIND): legacy_status.always_ready,
        (BATCH_API_GROUP, JOB_KIND): legacy_status.job_conditions,
    }
)


def get_legacy_ready_fn(u: Resource) -> GetConditionsFn | None:
    """Returns the dedicated evaluator for the object's group and kind, if any."""
    return EVALUATORS.get((u.group, u.kind))


def get_ready_fn(u: Resource) -> GetConditionsFn:
    return get_legacy_ready_fn(u) or ready_condition_reader


def is_ready(u: Resource) -> list[Condition]:
    """Evaluates the object with its dedicated evaluator or the generic one."""
    return get_ready_fn(u)(u)
