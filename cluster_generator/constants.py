# /*
# Copyright 2026 The Grove Authors.
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
# */

"""Constants, dependency loading, and dep_value helper."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_dependencies() -> dict:
    """Load chart coordinates from dependencies.yaml.

    Returns:
        Parsed YAML content as a nested dictionary.
    """
    deps_file = Path(__file__).resolve().parent / "dependencies.yaml"
    with open(deps_file) as f:
        return yaml.safe_load(f)


DEPENDENCIES = load_dependencies()


def dep_value(*keys: str, default: Any = None) -> Any:
    """Safely traverse the DEPENDENCIES dict by key path.

    Args:
        *keys: Sequence of dictionary keys to traverse.
        default: Value to return if any key is missing.

    Returns:
        The value at the nested key path, or *default* if not found.
    """
    node = DEPENDENCIES
    for key in keys:
        if not isinstance(node, dict):
            return default
        node = node.get(key)
        if node is None:
            return default
    return node


# -- Workload naming --
# Namespaces and releases both start with this prefix; the reaper relies on it.
POD_PREFIX = "vcluster"
SYNCER_CONTAINER = "syncer"
KUBECONFIG_READ_COMMAND = ("sh", "-c", "cat /root/.kube/config")
RANDOM_STRING_LENGTH = 8

# -- Helm chart --
VCLUSTER_CHART = dep_value("vcluster", "chart", default="vcluster")
VCLUSTER_REPO_URL = dep_value("vcluster", "repo", default="https://charts.loft.sh")
VCLUSTER_CHART_VERSION = dep_value("vcluster", "version", default="")
HELM_WORK_DIR = "/tmp"

# -- Endpoint --
CLUSTER_API_SCHEME = "https"
CLUSTER_API_PORT = 8443

# -- Cluster record --
CLUSTER_SERVER_NAME = "kubernetes.default.svc"
CLUSTER_SERVER_VERSION = "1.18"
LABEL_GENERATED_BY = "app.kubernetes.io/generated-by"
LABEL_GENERATED_BY_VALUE = "argocd-generator"
GENERATED_LABELS = {LABEL_GENERATED_BY: LABEL_GENERATED_BY_VALUE}
GENERATED_BY_SELECTOR = f"{LABEL_GENERATED_BY}={LABEL_GENERATED_BY_VALUE}"

# -- Argo CD cluster secrets --
LABEL_SECRET_TYPE = "argocd.argoproj.io/secret-type"
SECRET_TYPE_CLUSTER = "cluster"
ANNOTATION_MANAGED_BY = "managed-by"
MANAGED_BY_ARGOCD = "argocd.argoproj.io"
ANNOTATION_SERVER_VERSION = "cluster-generator.argoproj.io/server-version"

# -- Retry --
CREDENTIALS_MAX_ATTEMPTS = 6
ENDPOINT_MAX_ATTEMPTS = 10
RETRY_WAIT_SECONDS = 10

# -- Defaults --
DEFAULT_SAMPLES = 1
DEFAULT_CONCURRENCY = 5
DEFAULT_NAMESPACE_PREFIX = POD_PREFIX
DEFAULT_CLUSTER_NAME_PREFIX = "vcluster"
DEFAULT_DESTINATION_NAMESPACE = "default"
DEFAULT_VALUES_FILE = "vcluster.yaml"
DEFAULT_ARGOCD_NAMESPACE = "argocd"

KUBECTL_TIMEOUT_SECONDS = 60
