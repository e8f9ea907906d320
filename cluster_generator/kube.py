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

"""kubectl-backed client for the host cluster."""

from __future__ import annotations

from cluster_generator.constants import KUBECTL_TIMEOUT_SECONDS
from cluster_generator.errors import KubectlError
from cluster_generator.utils import run_kubectl


class KubeClient:
    """Thin wrapper over kubectl used by the provisioning and cleanup steps.

    Every method raises ``KubectlError`` when kubectl exits non-zero. Each call
    spawns its own process, so one client is safe to share across threads.

    Args:
        context: kubeconfig context to target, or None for the current one.
        timeout: Per-command timeout in seconds.
    """

    def __init__(self, context: str | None = None, timeout: int = KUBECTL_TIMEOUT_SECONDS) -> None:
        self.context = context
        self.timeout = timeout

    def _run(self, args: list[str], input_text: str | None = None) -> str:
        verb = " ".join(args[:2])
        if self.context:
            args = ["--context", self.context, *args]
        ok, stdout, stderr = run_kubectl(args, timeout=self.timeout, input_text=input_text)
        if not ok:
            raise KubectlError(f"kubectl {verb} failed: {stderr.strip()[:500]}")
        return stdout

    def exec_in_pod(self, namespace: str, pod: str, container: str, command: list[str]) -> str:
        """Run a command inside a pod container and return its stdout.

        Args:
            namespace: Namespace of the pod.
            pod: Pod name.
            container: Container to exec into.
            command: Command and arguments to run.

        Returns:
            Captured standard output of the command.
        """
        return self._run(["exec", pod, "-n", namespace, "-c", container, "--", *command])

    def get_pod_ip(self, namespace: str, pod: str) -> str:
        """Return the pod's assigned IP, or an empty string if none yet."""
        return self._run(["get", "pod", pod, "-n", namespace, "-o", "jsonpath={.status.podIP}"]).strip()

    def list_namespaces(self) -> list[str]:
        """Return the names of all namespaces."""
        output = self._run(["get", "namespaces", "-o", "jsonpath={.items[*].metadata.name}"])
        return output.split()

    def delete_namespace(self, name: str) -> None:
        """Request deletion of a namespace without waiting for finalizers."""
        self._run(["delete", "namespace", name, "--wait=false"])

    def delete_secrets(self, namespace: str, label_selector: str) -> None:
        """Delete every secret in ``namespace`` matching ``label_selector``."""
        self._run(["delete", "secrets", "-n", namespace, "-l", label_selector])

    def create_manifest(self, manifest_yaml: str) -> None:
        """Create the resources described by a YAML manifest."""
        self._run(["create", "-f", "-"], input_text=manifest_yaml)
