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

# API groups
CORE_API_GROUP = ""
APPS_API_GROUP = "apps"
BATCH_API_GROUP = "batch"
POLICY_API_GROUP = "policy"

# Kinds with a dedicated readiness evaluator
SERVICE_KIND = "Service"
POD_KIND = "Pod"
PVC_KIND = "PersistentVolumeClaim"
STATEFULSET_KIND = "StatefulSet"
DAEMONSET_KIND = "DaemonSet"
DEPLOYMENT_KIND = "Deployment"
REPLICASET_KIND = "ReplicaSet"
PDB_KIND = "PodDisruptionBudget"
CRONJOB_KIND = "CronJob"
JOB_KIND = "Job"

LIST_KIND_SUFFIX = "List"

# Sentinel for integer fields that are absent from the object
MISSING = -1

GENERATION_MISMATCH_REASON = (
    "Controller has not observed the latest change. "
    "Status generation does not match with metadata"
)

SERVICE_NAME = "k8s-readiness"
