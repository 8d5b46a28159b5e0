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
Concurrent variant of the status evaluation: one fetch per resource in
flight at a time, results reported in input order.
"""

import asyncio
import logging
from types import TracebackType
from typing import Iterable, Protocol

try:
    from kubernetes_asyncio import client as k8s_client
    from kubernetes_asyncio import config as k8s_config
    from kubernetes_asyncio.dynamic import DynamicClient
except ImportError as exc:
    raise ImportError(
        "Async dependencies are not installed. Install k8s-readiness[async]."
    ) from exc

from .conditions import ResourceStatus, Result, new_result
from .constants import SERVICE_NAME
from .resource import Resource
from .status import evaluate, fetch_failed, log_summary
from .trace_manager import get_tracer, initialize_tracer, trace_span

logger = logging.getLogger(__name__)

DEFAULT_MAX_CONCURRENCY = 10


class AsyncObjectStore(Protocol):
    async def get(self, resource: Resource) -> Resource: ...


class AsyncKubernetesObjectStore:
    """
    Reads arbitrary kinds with kubernetes_asyncio. Use as an async context
    manager so the underlying connection pool is closed.
    """

    def __init__(self, kubeconfig: str | None = None, context: str | None = None):
        self.kubeconfig = kubeconfig
        self.context = context
        self.api_client: k8s_client.ApiClient | None = None
        self.dynamic_client = None

    async def _load_config(self):
        if self.kubeconfig or self.context:
            await k8s_config.load_kube_config(
                config_file=self.kubeconfig, context=self.context
            )
            return
        try:
            k8s_config.load_incluster_config()
        except k8s_config.ConfigException:
            await k8s_config.load_kube_config()

    async def __aenter__(self) -> "AsyncKubernetesObjectStore":
        await self._load_config()
        self.api_client = k8s_client.ApiClient()
        try:
            self.dynamic_client = await DynamicClient(self.api_client)
        except Exception:
            await self.api_client.close()
            self.api_client = None
            raise
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ):
        if self.api_client is not None:
            await self.api_client.close()
            self.api_client = None
            self.dynamic_client = None

    async def get(self, resource: Resource) -> Resource:
        if self.dynamic_client is None:
            raise RuntimeError("Object store is not open; use 'async with'.")
        api = await self.dynamic_client.resources.get(
            api_version=resource.api_version, kind=resource.kind
        )
        namespace = (resource.namespace or None) if api.namespaced else None
        logger.debug(f"Fetching {resource}")
        obj = await self.dynamic_client.get(api, name=resource.name, namespace=namespace)
        return Resource(object=obj.to_dict())


class AsyncStatus:
    """
    Same partial-failure policy as Status, with fetches fanned out.
    At most max_concurrency fetches are outstanding at once.
    """

    def __init__(
        self,
        object_store: AsyncObjectStore,
        resources: Iterable[Resource],
        max_concurrency: int = DEFAULT_MAX_CONCURRENCY,
        enable_tracing: bool = False,
        trace_service_name: str = SERVICE_NAME,
    ):
        if max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got: {max_concurrency}")
        self.object_store = object_store
        self.resources = list(resources)
        self.max_concurrency = max_concurrency
        self.tracer = None
        if enable_tracing and initialize_tracer(trace_service_name):
            self.tracer = get_tracer(trace_service_name)

    @trace_span("k8s-readiness.status")
    async def do(self) -> Result:
        logger.info(
            f"Checking status of {len(self.resources)} resources "
            f"(concurrency {self.max_concurrency})..."
        )
        semaphore = asyncio.Semaphore(self.max_concurrency)
        statuses = await asyncio.gather(
            *(self._resource_status(u, semaphore) for u in self.resources)
        )
        result = new_result(list(statuses))
        log_summary(result)
        return result

    @trace_span("k8s-readiness.evaluate")
    async def _resource_status(
        self, u: Resource, semaphore: asyncio.Semaphore
    ) -> ResourceStatus:
        async with semaphore:
            try:
                snapshot = await self.object_store.get(u)
            except Exception as e:
                return fetch_failed(u, e)
        return evaluate(snapshot)
