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
A Kubernetes object held as its serialized field tree.
"""

import copy
from dataclasses import dataclass, field
from typing import NamedTuple

from .unstructured import StrDict, get_int_field, get_string_field


class GroupVersionKind(NamedTuple):
    group: str
    version: str
    kind: str

    def __str__(self) -> str:
        if self.group:
            return f"{self.group}/{self.version}, Kind={self.kind}"
        return f"{self.version}, Kind={self.kind}"


def parse_api_version(api_version: str) -> tuple[str, str]:
    """Splits 'apps/v1' into ('apps', 'v1'); the core group 'v1' becomes ('', 'v1')."""
    if "/" not in api_version:
        return "", api_version
    group, _, version = api_version.partition("/")
    return group, version


@dataclass
class Resource:
    """
    Identifies an object by apiVersion, kind, namespace and name and carries
    its full field tree. A reference read from a manifest and a snapshot
    fetched from the cluster are both Resources.
    """

    object: StrDict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, obj: StrDict) -> "Resource":
        return cls(object=copy.deepcopy(obj))

    @property
    def api_version(self) -> str:
        return get_string_field(self.object, ".apiVersion", "")

    @property
    def kind(self) -> str:
        return get_string_field(self.object, ".kind", "")

    @property
    def group(self) -> str:
        return parse_api_version(self.api_version)[0]

    @property
    def version(self) -> str:
        return parse_api_version(self.api_version)[1]

    @property
    def gvk(self) -> GroupVersionKind:
        group, version = parse_api_version(self.api_version)
        return GroupVersionKind(group, version, self.kind)

    @property
    def name(self) -> str:
        return get_string_field(self.object, ".metadata.name", "")

    @property
    def namespace(self) -> str:
        return get_string_field(self.object, ".metadata.namespace", "")

    @namespace.setter
    def namespace(self, namespace: str):
        self.object.setdefault("metadata", {})["namespace"] = namespace

    @property
    def generation(self) -> int:
        return get_int_field(self.object, ".metadata.generation", -1)

    def __str__(self) -> str:
        if self.namespace:
            return f"{self.kind}/{self.namespace}/{self.name}"
        return f"{self.kind}/{self.name}"
