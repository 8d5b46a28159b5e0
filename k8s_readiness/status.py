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
Evaluates the readiness of a batch of resources against the live cluster.
"""

import logging
from typing import Iterable

from opentelemetry import trace

from .conditions import ConditionType, ResourceStatus, Result, get_condition, new_result
from .constants import SERVICE_NAME
from .object_store import ObjectStore
from .registry import is_ready
from .resource import Resource
from .trace_manager import get_tracer, initialize_tracer, trace_span

logger = logging.getLogger(__name__)


def evaluate(u: Resource) -> ResourceStatus:
    """Runs the evaluator for a fetched snapshot, recording any failure on the item."""
    span = trace.get_current_span()
    span.set_attribute("k8s.resource.kind", u.kind)
    span.set_attribute("k8s.resource.name", u.name)
    span.set_attribute("k8s.resource.namespace", u.namespace)

    try:
        conditions = is_ready(u)
    except Exception as e:
        logger.error(f"Failed to evaluate {u}: {e}", exc_info=True)
        return ResourceStatus(resource=u, error=e)

    ready = get_condition(conditions, ConditionType.READY)
    if ready is not None:
        span.set_attribute("k8s.resource.ready", str(ready.status))
        logger.debug(f"{u}: Ready={ready.status} ({ready.reason})")
    return ResourceStatus(resource=u, conditions=conditions)


def fetch_failed(u: Resource, error: Exception) -> ResourceStatus:
    logger.error(f"Failed to fetch {u}: {error}")
    return ResourceStatus(resource=u, error=error)


def log_summary(result: Result):
    ready = sum(1 for rs in result.resources if rs.is_ready())
    failed = len(result.error) if result.error is not None else 0
    logger.info(
        f"Status complete: {ready}/{len(result.resources)} ready, {failed} failed."
    )


class Status:
    """
    Fetches each resource in order and evaluates its readiness.

    A resource that cannot be fetched or evaluated is recorded with its error
    and the batch carries on; Result.error then aggregates every failure.
    """

    def __init__(
        self,
        object_store: ObjectStore,
        resources: Iterable[Resource],
        enable_tracing: bool = False,
        trace_service_name: str = SERVICE_NAME,
    ):
        self.object_store = object_store
        self.resources = list(resources)
        self.tracer = None
        if enable_tracing and initialize_tracer(trace_service_name):
            self.tracer = get_tracer(trace_service_name)

    @trace_span("k8s-readiness.status")
    def do(self) -> Result:
        logger.info(f"Checking status of {len(self.resources)} resources...")
        result = new_result([self._resource_status(u) for u in self.resources])
        log_summary(result)
        return result

    @trace_span("k8s-readiness.evaluate")
    def _resource_status(self, u: Resource) -> ResourceStatus:
        try:
            snapshot = self.object_store.get(u)
        except Exception as e:
            return fetch_failed(u, e)
        return evaluate(snapshot)
