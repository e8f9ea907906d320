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

"""API endpoint discovery for a freshly installed vcluster."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from cluster_generator import console, logger
from cluster_generator.constants import CLUSTER_API_PORT, CLUSTER_API_SCHEME
from cluster_generator.errors import KubectlError, ResolutionError
from cluster_generator.kube import KubeClient
from cluster_generator.models import control_pod_name
from cluster_generator.retry import RetryPolicy

UNRESOLVED = ""


def get_cluster_server_uri(client: KubeClient, namespace: str, release_suffix: str) -> str:
    """Derive the API server URI from the control pod's IP.

    Args:
        client: Host cluster client.
        namespace: Namespace the vcluster was installed into.
        release_suffix: Random suffix of the vcluster release.

    Returns:
        URI of the form ``https://<pod-ip>:8443``.

    Raises:
        ResolutionError: If the pod is missing or has no IP yet.
    """
    pod = control_pod_name(release_suffix)
    try:
        pod_ip = client.get_pod_ip(namespace, pod)
    except KubectlError as err:
        raise ResolutionError(f"failed to get pod {namespace}/{pod}: {err}") from err
    if not pod_ip:
        raise ResolutionError(f"pod {namespace}/{pod} has no IP assigned yet")
    # TODO: resolve through a Service once the chart exposes one, pod IPs are not stable
    return f"{CLUSTER_API_SCHEME}://{pod_ip}:{CLUSTER_API_PORT}"


def retrieve_cluster_uri(
    client: KubeClient,
    namespace: str,
    release_suffix: str,
    policy: RetryPolicy,
    degrade: bool = True,
    sleep: Callable[[float], Any] = time.sleep,
) -> str:
    """Resolve the API server URI, retrying while the pod comes up.

    Args:
        client: Host cluster client.
        namespace: Namespace the vcluster was installed into.
        release_suffix: Random suffix of the vcluster release.
        policy: Attempts and delay between them.
        degrade: Return ``UNRESOLVED`` instead of raising once attempts run out.
        sleep: Wait function handed to the retry controller.

    Returns:
        The server URI, or ``UNRESOLVED`` (empty string) when degraded.

    Raises:
        ResolutionError: If every attempt failed and ``degrade`` is False.
    """
    console.print("[yellow]\u2139\ufe0f  Attempting to get cluster uri[/yellow]")
    try:
        return policy.call(get_cluster_server_uri, client, namespace, release_suffix, sleep=sleep)
    except ResolutionError as err:
        if not degrade:
            raise
        logger.warning("Giving up on cluster uri for %s after %d attempts: %s",
                       namespace, policy.max_attempts, err)
        return UNRESOLVED
