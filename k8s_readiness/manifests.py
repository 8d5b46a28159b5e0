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
Reads resource references from raw YAML manifests.
"""

import logging
import os
from typing import Iterable

import yaml

from .constants import LIST_KIND_SUFFIX
from .resource import Resource

logger = logging.getLogger(__name__)

# Built-in kinds that never carry a namespace, so no default is applied to
# them. Cluster-scoped custom resources are not listed; KubernetesObjectStore
# drops the namespace for them using the discovered REST mapping.
CLUSTER_SCOPED_KINDS = frozenset(
    {
        "APIService",
        "CertificateSigningRequest",
        "ClusterRole",
        "ClusterRoleBinding",
        "CSIDriver",
        "CSINode",
        "CustomResourceDefinition",
        "FlowSchema",
        "IngressClass",
        "MutatingWebhookConfiguration",
        "Namespace",
        "Node",
        "PersistentVolume",
        "PriorityClass",
        "PriorityLevelConfiguration",
        "RuntimeClass",
        "StorageClass",
        "ValidatingAdmissionPolicy",
        "ValidatingAdmissionPolicyBinding",
        "ValidatingWebhookConfiguration",
        "VolumeAttachment",
    }
)


class ManifestError(ValueError):
    """A manifest could not be turned into resource references."""


def _expand(manifest: dict) -> Iterable[dict]:
    kind = manifest.get("kind")
    api_version = manifest.get("apiVersion")
    if not (kind and isinstance(kind, str) and api_version and isinstance(api_version, str)):
        raise ManifestError(f"Object is missing apiVersion or kind: {manifest!r}")
    if kind.endswith(LIST_KIND_SUFFIX) and isinstance(manifest.get("items"), list):
        for item in manifest["items"]:
            if not item:
                continue
            if not isinstance(item, dict):
                raise ManifestError(f"{kind} item is not a mapping: {item!r}")
            yield from _expand(item)
        return
    yield manifest


def parse_manifests(manifest_text: str, namespace: str | None = None) -> list[Resource]:
    """
    Parses a multi-document YAML stream into Resources, in document order.
    Empty documents are skipped and List kinds are flattened. Namespaced
    objects without a namespace get the given default.

    Raises ManifestError for invalid YAML or objects without a string
    apiVersion, kind and name.
    """
    resources = []
    try:
        manifests = list(yaml.safe_load_all(manifest_text))
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML: {e}") from e

    for manifest in manifests:
        if not manifest:
            continue
        if not isinstance(manifest, dict):
            raise ManifestError(f"Expected a mapping, got {type(manifest).__name__}")
        for obj in _expand(manifest):
            resource = Resource(object=obj)
            if not resource.name:
                raise ManifestError(f"{resource.kind} is missing metadata.name")
            if (
                namespace
                and not resource.namespace
                and resource.kind not in CLUSTER_SCOPED_KINDS
            ):
                resource.namespace = namespace
            resources.append(resource)
    return resources


def load_resources(path: str, namespace: str | None = None) -> list[Resource]:
    """Reads resource references from a manifest file."""
    # Kustomizations must be built first; the raw file lists no objects.
    if os.path.basename(path) == "kustomization.yaml":
        raise ManifestError(f"{path}: kustomization files are not supported")
    with open(path, "r") as f:
        resources = parse_manifests(f.read(), namespace)
    logger.info(f"Loaded {len(resources)} resources from {path}")
    return resources
