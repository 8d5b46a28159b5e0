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
Fetches the current state of objects from the cluster.
"""

import logging
from typing import Protocol

from kubernetes import client, config, dynamic

from .resource import Resource

logger = logging.getLogger(__name__)


class ObjectStore(Protocol):
    def get(self, resource: Resource) -> Resource:
        """
        Returns a fresh snapshot of the object identified by the reference's
        apiVersion, kind, namespace and name. Raises on any failure.
        """
        ...


def new_api_client(
    kubeconfig: str | None = None, context: str | None = None
) -> client.ApiClient:
    """
    Builds an ApiClient. An explicit kubeconfig or context always wins;
    otherwise the in-cluster config is tried before the default kubeconfig
    (which honours $KUBECONFIG).
    """
    if kubeconfig or context:
        return config.new_client_from_config(config_file=kubeconfig, context=context)

    try:
        config.load_incluster_config()
        logger.debug("Loaded in-cluster Kubernetes config.")
    except config.ConfigException:
        config.load_kube_config()
        logger.debug("Loaded Kubernetes config from kubeconfig file.")
    return client.ApiClient()


class KubernetesObjectStore:
    """Reads arbitrary kinds through the discovery-backed dynamic client."""

    def __init__(
        self,
        api_client: client.ApiClient | None = None,
        kubeconfig: str | None = None,
        context: str | None = None,
    ):
        self.api_client = api_client or new_api_client(kubeconfig, context)
        self.dynamic_client = dynamic.DynamicClient(self.api_client)

    def get(self, resource: Resource) -> Resource:
        api = self.dynamic_client.resources.get(
            api_version=resource.api_version, kind=resource.kind
        )
        # Cluster-scoped kinds ignore any namespace the reference carries.
        namespace = (resource.namespace or None) if api.namespaced else None
        logger.debug(f"Fetching {resource}")
        obj = api.get(name=resource.name, namespace=namespace)
        return Resource(object=obj.to_dict())
