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
Exceptions raised while evaluating resource readiness.
"""


class ReadinessError(Exception):
    """Base class for readiness evaluation errors."""


class AccessorError(ReadinessError):
    """A field exists on an object but does not have the expected shape."""

    def __init__(self, path: str, message: str, index: int | None = None):
        super().__init__(message)
        self.path = path
        self.index = index


class AggregateError(ReadinessError):
    """Carries every per-resource error from a single status evaluation."""

    def __init__(self, errors: list[Exception]):
        self.errors = list(errors)
        super().__init__(self._message())

    def _message(self) -> str:
        if len(self.errors) == 1:
            return str(self.errors[0])
        return "[" + ", ".join(str(err) for err in self.errors) + "]"

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)
