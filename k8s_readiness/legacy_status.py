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
Readiness rules for the built-in workload, storage and networking kinds.

Each function mirrors what the owning upstream controller reports and
returns the conditions computed from a single snapshot of the object.
"""

from .conditions import Condition, ConditionType
from .constants import GENERATION_MISMATCH_REASON, MISSING
from .resource import Resource
from .unstructured import get_conditions, get_int_field, get_string_field


def _not_ready(reason: str) -> list[Condition]:
    return [Condition.false(ConditionType.READY, reason)]


def _ready(reason: str) -> list[Condition]:
    return [Condition.true(ConditionType.READY, reason)]


def _generation_observed(obj: dict) -> bool:
    observed_generation = get_int_field(obj, ".status.observedGeneration", MISSING)
    meta_generation = get_int_field(obj, ".metadata.generation", MISSING)
    return observed_generation == meta_generation


def always_ready(u: Resource) -> list[Condition]:
    return _ready("always")


def sts_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    # updateStrategy==ondelete is a user managed statefulset.
    update_strategy = get_string_field(obj, ".spec.updateStrategy.type", "")
    if update_strategy == "ondelete":
        return _ready("ondelete strategy")

    if not _generation_observed(obj):
        return _not_ready(GENERATION_MISMATCH_REASON)

    spec_replicas = get_int_field(obj, ".spec.replicas", 1)
    ready_replicas = get_int_field(obj, ".status.readyReplicas", 0)
    current_replicas = get_int_field(obj, ".status.currentReplicas", 0)
    updated_replicas = get_int_field(obj, ".status.updatedReplicas", 0)
    status_replicas = get_int_field(obj, ".status.replicas", 0)
    partition = get_int_field(
        obj, ".spec.updateStrategy.rollingUpdate.partition", MISSING
    )

    if spec_replicas > status_replicas:
        return _not_ready(
            f"Waiting for requested replicas. Replicas: {status_replicas}/{spec_replicas}"
        )

    if spec_replicas > ready_replicas:
        return _not_ready(
            f"Waiting for replicas to become Ready. Ready: {ready_replicas}/{spec_replicas}"
        )

    if partition != MISSING:
        if updated_replicas < spec_replicas - partition:
            return _not_ready(
                "Waiting for partition rollout to complete. "
                f"updated: {updated_replicas}/{spec_replicas - partition}"
            )
        return _ready(f"Partition rollout complete. updated: {updated_replicas}")

    if spec_replicas > current_replicas:
        return _not_ready(
            f"Waiting for replicas to become current. current: {current_replicas}/{spec_replicas}"
        )

    current_revision = get_string_field(obj, ".status.currentRevision", "")
    updated_revision = get_string_field(obj, ".status.updatedRevision", "")
    if current_revision != updated_revision:
        return _not_ready("Waiting for updated revision to match current")

    return _ready(f"All replicas scheduled as expected. Replicas: {status_replicas}")


def deployment_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    if not _generation_observed(obj):
        return _not_ready(GENERATION_MISMATCH_REASON)

    progress = False
    available = False
    for c in get_conditions(obj):
        status = get_string_field(c, ".status", "")
        reason = get_string_field(c, ".reason", "")
        ctype = get_string_field(c, ".type", "")
        if ctype == "Progressing":
            # https://github.com/kubernetes/kubernetes/blob/a3ccea9d8743f2ff82e41b6c2af6dc2c41dc7b10/pkg/controller/deployment/progress.go#L52
            if reason == "ProgressDeadlineExceeded":
                return _not_ready("Progress Deadline exceeded")
            if status == "True" and reason == "NewReplicaSetAvailable":
                progress = True
        elif ctype == "Available":
            if status == "True":
                available = True

    spec_replicas = get_int_field(obj, ".spec.replicas", 1)
    status_replicas = get_int_field(obj, ".status.replicas", 0)
    updated_replicas = get_int_field(obj, ".status.updatedReplicas", 0)
    ready_replicas = get_int_field(obj, ".status.readyReplicas", 0)
    available_replicas = get_int_field(obj, ".status.availableReplicas", 0)

    if spec_replicas > updated_replicas:
        return _not_ready(
            f"Waiting for all replicas to be updated. Updated: {updated_replicas}/{spec_replicas}"
        )

    if status_replicas > updated_replicas:
        return _not_ready(
            "Waiting for old replicas to finish termination. "
            f"Pending termination: {status_replicas - updated_replicas}"
        )

    if updated_replicas > available_replicas:
        return _not_ready(
            f"Waiting for all replicas to be available. Available: {available_replicas}/{updated_replicas}"
        )

    if spec_replicas > ready_replicas:
        return _not_ready(
            f"Waiting for all replicas to be ready. Ready: {ready_replicas}/{spec_replicas}"
        )

    if spec_replicas > status_replicas:
        return _not_ready(
            f"Waiting for all .status.replicas to be catchup. replicas: {status_replicas}/{spec_replicas}"
        )

    if not progress:
        return _not_ready("New ReplicaSet is not available")
    if not available:
        return _not_ready("Deployment is not Available")

    return _ready(f"Deployment is available. Replicas: {status_replicas}")


def replicaset_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    if not _generation_observed(obj):
        return _not_ready(GENERATION_MISMATCH_REASON)

    # https://github.com/kubernetes/kubernetes/blob/a3ccea9d8743f2ff82e41b6c2af6dc2c41dc7b10/pkg/controller/replicaset/replica_set_utils.go
    for c in get_conditions(obj):
        if get_string_field(c, ".type", "") == "ReplicaFailure":
            if get_string_field(c, ".status", "") == "True":
                return _not_ready("Replica Failure condition. Check Pods")

    spec_replicas = get_int_field(obj, ".spec.replicas", 1)
    status_replicas = get_int_field(obj, ".status.replicas", 0)
    ready_replicas = get_int_field(obj, ".status.readyReplicas", 0)
    available_replicas = get_int_field(obj, ".status.availableReplicas", 0)
    labelled_replicas = get_int_field(obj, ".status.labelledReplicas", 0)

    if (
        spec_replicas == 0
        and labelled_replicas == 0
        and available_replicas == 0
        and ready_replicas == 0
    ):
        return _not_ready("Replica is 0")

    if spec_replicas > labelled_replicas:
        return _not_ready(
            f"Waiting for all replicas to be fully-labeled. Labelled: {labelled_replicas}/{spec_replicas}"
        )

    if spec_replicas > available_replicas:
        return _not_ready(
            f"Waiting for all replicas to be available. Available: {available_replicas}/{spec_replicas}"
        )

    if spec_replicas > ready_replicas:
        return _not_ready(
            f"Waiting for all replicas to be ready. Ready: {ready_replicas}/{spec_replicas}"
        )

    return _ready(f"ReplicaSet is available. Replicas: {status_replicas}")


def daemonset_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    if not _generation_observed(obj):
        return _not_ready(GENERATION_MISMATCH_REASON)

    desired = get_int_field(obj, ".status.desiredNumberScheduled", MISSING)
    current = get_int_field(obj, ".status.currentNumberScheduled", 0)
    updated = get_int_field(obj, ".status.updatedNumberScheduled", 0)
    available = get_int_field(obj, ".status.numberAvailable", 0)
    ready = get_int_field(obj, ".status.numberReady", 0)

    if desired == MISSING:
        return _not_ready("Missing .status.desiredNumberScheduled")

    if desired > current:
        return _not_ready(
            f"Waiting for desired replicas to be scheduled. Current: {current}/{desired}"
        )

    if desired > updated:
        return _not_ready(
            f"Waiting for updated replicas to be scheduled. Updated: {updated}/{desired}"
        )

    if desired > available:
        return _not_ready(
            f"Waiting for replicas to be available. Available: {available}/{desired}"
        )

    if desired > ready:
        return _not_ready(f"Waiting for replicas to be ready. Ready: {ready}/{desired}")

    return _ready(f"All replicas scheduled as expected. Replicas: {desired}")


def pvc_conditions(u: Resource) -> list[Condition]:
    phase = get_string_field(u.object, ".status.phase", "unknown")
    if phase != "Bound":
        return _not_ready(f"PVC is not Bound. phase: {phase}")
    return _ready("PVC is Bound")


def pod_conditions(u: Resource) -> list[Condition]:
    """
    Mirrors the pod's own Ready condition. A pod whose containers ran to
    completion reports Ready=False/PodCompleted upstream; that is reported
    here as Ready plus a terminal Completed or Failed condition.
    """
    obj = u.object
    rv = []
    ready_status = False
    ready_reason = ""

    phase = get_string_field(obj, ".status.phase", "unknown")
    for c in get_conditions(obj):
        if get_string_field(c, ".type", "") != "Ready":
            continue
        ready_reason = get_string_field(c, "reason", "")
        if get_string_field(c, "status", "") == "True":
            ready_status = True
            continue
        ready_status = False
        if ready_reason == "PodCompleted":
            ready_status = True
            if phase == "Succeeded":
                rv.append(Condition.true(ConditionType.COMPLETED, "Pod Succeeded"))
            else:
                rv.append(Condition.true(ConditionType.FAILED, f"Pod phase: {phase}"))

    reason = f"Phase: {phase}"
    if ready_reason:
        reason = f"{reason}, {ready_reason}"

    if ready_status:
        rv.append(Condition.true(ConditionType.READY, reason))
    else:
        rv.append(Condition.false(ConditionType.READY, reason))
    return rv


def pdb_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    current_healthy = get_int_field(obj, ".status.currentHealthy", 0)
    desired_healthy = get_int_field(obj, ".status.desiredHealthy", MISSING)
    if desired_healthy == MISSING:
        return _not_ready("Missing .status.desiredHealthy")

    if desired_healthy > current_healthy:
        return _not_ready(
            f"Budget not met. healthy replicas: {current_healthy}/{desired_healthy}"
        )

    return _ready(f"Budget is met. Replicas: {current_healthy}/{desired_healthy}")


def job_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    parallelism = get_int_field(obj, ".spec.parallelism", 1)
    completions = get_int_field(obj, ".spec.completions", parallelism)
    succeeded = get_int_field(obj, ".status.succeeded", 0)
    active = get_int_field(obj, ".status.active", 0)
    failed = get_int_field(obj, ".status.failed", 0)
    start_time = get_string_field(obj, ".status.startTime", "")

    # https://github.com/kubernetes/kubernetes/blob/master/pkg/controller/job/utils.go#L24
    for c in get_conditions(obj):
        if get_string_field(c, ".status", "") != "True":
            continue
        ctype = get_string_field(c, ".type", "")
        if ctype == "Complete":
            message = f"Job Completed. succeeded: {succeeded}/{completions}"
            return [
                Condition.true(ConditionType.READY, message),
                Condition.true(ConditionType.COMPLETED, message),
            ]
        if ctype == "Failed":
            message = f"Job Failed. failed: {failed}/{completions}"
            return [
                Condition.true(ConditionType.READY, message),
                Condition.true(ConditionType.FAILED, message),
            ]

    if start_time == "":
        return _not_ready("Job not started")

    return _ready(
        f"Job in progress. success:{succeeded}, active: {active}, failed: {failed}"
    )


def service_conditions(u: Resource) -> list[Condition]:
    obj = u.object

    spec_type = get_string_field(obj, ".spec.type", "ClusterIP")
    cluster_ip = get_string_field(obj, ".spec.clusterIP", "")

    message = f"Always Ready. Service type: {spec_type}"
    if spec_type == "LoadBalancer":
        if cluster_ip == "":
            return _not_ready("ClusterIP not set. Service type: LoadBalancer")
        message = f"ClusterIP: {cluster_ip}"

    return _ready(message)
