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

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

pytest.importorskip("kubernetes_asyncio")

from k8s_readiness import AggregateError, ConditionType, Resource, get_condition
from k8s_readiness import async_status as async_status_module
from k8s_readiness.async_status import AsyncKubernetesObjectStore, AsyncStatus


def _ref(kind: str, name: str) -> Resource:
    return Resource(
        object={"apiVersion": "v1", "kind": kind, "metadata": {"name": name, "namespace": "qual"}}
    )


class SlowObjectStore:
    """Completes fetches in reverse input order and tracks concurrency."""

    def __init__(self, names: list[str], errors: dict[str, Exception] | None = None):
        self.delays = {name: 0.01 * (len(names) - i) for i, name in enumerate(names)}
        self.errors = errors or {}
        self.in_flight = 0
        self.max_in_flight = 0

    async def get(self, resource: Resource) -> Resource:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays[resource.name])
            if resource.name in self.errors:
                raise self.errors[resource.name]
            return Resource(object={**resource.object, "spec": {"type": "NodePort"}})
        finally:
            self.in_flight -= 1


async def test_async_status_preserves_input_order():
    names = ["a", "b", "c", "d"]
    store = SlowObjectStore(names)

    result = await AsyncStatus(store, [_ref("Service", n) for n in names], max_concurrency=4).do()

    assert [rs.resource.name for rs in result.resources] == names
    assert result.error is None
    assert store.max_in_flight == 4
    ready = get_condition(result.resources[0].conditions, ConditionType.READY)
    assert ready.reason == "Always Ready. Service type: NodePort"


async def test_async_status_limits_concurrency():
    names = [f"svc-{i}" for i in range(6)]
    store = SlowObjectStore(names)

    result = await AsyncStatus(store, [_ref("Service", n) for n in names], max_concurrency=2).do()

    assert len(result.resources) == 6
    assert store.max_in_flight <= 2


async def test_async_status_collects_errors_in_input_order():
    names = ["a", "b", "c"]
    err_a = RuntimeError("a failed")
    err_c = RuntimeError("c failed")
    # c completes before a, but the aggregate follows input order.
    store = SlowObjectStore(names, errors={"a": err_a, "c": err_c})

    result = await AsyncStatus(store, [_ref("Service", n) for n in names]).do()

    assert isinstance(result.error, AggregateError)
    assert result.error.errors == [err_a, err_c]
    assert result.resources[1].error is None
    assert result.resources[1].conditions


def test_async_status_rejects_invalid_concurrency():
    with pytest.raises(ValueError):
        AsyncStatus(SlowObjectStore([]), [], max_concurrency=0)


async def test_async_store_requires_context_manager():
    store = AsyncKubernetesObjectStore()
    with pytest.raises(RuntimeError):
        await store.get(_ref("Service", "a"))


async def test_async_store_closes_client_when_discovery_fails(monkeypatch: pytest.MonkeyPatch):
    api_client = MagicMock()
    api_client.close = AsyncMock()

    async def _failing_discovery(client):
        raise RuntimeError("discovery failed")

    monkeypatch.setattr(async_status_module.k8s_config, "load_incluster_config", lambda: None)
    monkeypatch.setattr(async_status_module.k8s_client, "ApiClient", lambda: api_client)
    monkeypatch.setattr(async_status_module, "DynamicClient", _failing_discovery)

    store = AsyncKubernetesObjectStore()
    with pytest.raises(RuntimeError, match="discovery failed"):
        async with store:
            pass

    api_client.close.assert_awaited_once()
    assert store.api_client is None
