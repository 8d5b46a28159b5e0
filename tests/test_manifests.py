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

import pytest

from k8s_readiness.manifests import ManifestError, load_resources, parse_manifests

MANIFESTS = """
apiVersion: v1
kind: Namespace
metadata:
  name: shop
---
apiVersion: apps/v1
kind: Deployment
metadata:
  name: web
---
---
apiVersion: v1
kind: Service
metadata:
  name: web
  namespace: frontend
"""

LIST_MANIFEST = """
apiVersion: v1
kind: List
items:
- apiVersion: v1
  kind: ConfigMap
  metadata:
    name: settings
- apiVersion: batch/v1
  kind: Job
  metadata:
    name: migrate
"""


def test_parse_manifests_in_document_order():
    resources = parse_manifests(MANIFESTS, namespace="shop")

    assert [(r.kind, r.namespace, r.name) for r in resources] == [
        ("Namespace", "", "shop"),
        ("Deployment", "shop", "web"),
        ("Service", "frontend", "web"),
    ]
    assert resources[1].group == "apps"
    assert resources[1].version == "v1"


def test_parse_manifests_without_default_namespace():
    resources = parse_manifests(MANIFESTS)
    assert resources[1].namespace == ""


def test_parse_manifests_expands_lists():
    resources = parse_manifests(LIST_MANIFEST, namespace="ops")
    assert [(r.kind, r.name, r.namespace) for r in resources] == [
        ("ConfigMap", "settings", "ops"),
        ("Job", "migrate", "ops"),
    ]


@pytest.mark.parametrize(
    "text",
    [
        "- just\n- a list\n",
        "kind: Service\nmetadata:\n  name: web\n",
        "apiVersion: v1\nkind: Service\nmetadata: {}\n",
    ],
)
def test_parse_manifests_rejects_invalid_documents(text):
    with pytest.raises(ManifestError):
        parse_manifests(text)


def test_load_resources(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text(MANIFESTS)

    resources = load_resources(str(path), namespace="default")

    assert len(resources) == 3
    assert resources[1].namespace == "default"


def test_load_resources_rejects_kustomization(tmp_path):
    path = tmp_path / "kustomization.yaml"
    path.write_text("resources:\n- app.yaml\n")

    with pytest.raises(ManifestError):
        load_resources(str(path))


@pytest.mark.parametrize(
    "text",
    [
        "apiVersion: v1\nkind: [unclosed\n",
        "apiVersion: v1\nkind: 5\nmetadata:\n  name: web\n",
        "apiVersion: [v1]\nkind: Service\nmetadata:\n  name: web\n",
        "apiVersion: v1\nkind: List\nitems:\n- oops\n",
        "apiVersion: v1\nkind: List\nitems:\n- kind: Service\n  metadata:\n    name: web\n",
    ],
)
def test_parse_manifests_rejects_malformed_input(text):
    with pytest.raises(ManifestError):
        parse_manifests(text)


def test_parse_manifests_leaves_cluster_scoped_kinds_without_namespace():
    text = (
        "apiVersion: networking.k8s.io/v1\nkind: IngressClass\nmetadata:\n  name: nginx\n"
        "---\n"
        "apiVersion: node.k8s.io/v1\nkind: RuntimeClass\nmetadata:\n  name: gvisor\n"
    )
    resources = parse_manifests(text, namespace="default")
    assert [r.namespace for r in resources] == ["", ""]
