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

"""vcluster installation via Helm."""

from __future__ import annotations

import sh

from cluster_generator import console
from cluster_generator.constants import (
    HELM_WORK_DIR,
    VCLUSTER_CHART,
    VCLUSTER_CHART_VERSION,
    VCLUSTER_REPO_URL,
)
from cluster_generator.errors import InstallError


class HelmInstaller:
    """Installs one vcluster release per call.

    Args:
        chart: Chart name inside the repository.
        repo_url: Helm repository URL.
        version: Chart version, or empty string for latest.
        work_dir: Working directory for the helm process.
    """

    def __init__(
        self,
        chart: str = VCLUSTER_CHART,
        repo_url: str = VCLUSTER_REPO_URL,
        version: str = VCLUSTER_CHART_VERSION,
        work_dir: str = HELM_WORK_DIR,
    ) -> None:
        self.chart = chart
        self.repo_url = repo_url
        self.version = version
        self.work_dir = work_dir

    def install_args(self, namespace: str, release_name: str, values_file: str) -> list[str]:
        """Build the ``helm`` argument list for an install.

        Args:
            namespace: Namespace to install into; created if missing.
            release_name: Helm release name.
            values_file: Path to the chart values file.

        Returns:
            Arguments for ``helm``.
        """
        helm_args = [
            "upgrade", "--install", release_name, self.chart,
            "--values", values_file,
            "--repo", self.repo_url,
            "--namespace", namespace,
            "--repository-config", "",
            "--create-namespace",
            "--wait",
        ]
        if self.version:
            helm_args += ["--version", self.version]
        return helm_args

    def install(self, namespace: str, release_name: str, values_file: str) -> None:
        """Install (or upgrade) a vcluster release and wait for it.

        Raises:
            InstallError: If helm exits non-zero.
        """
        console.print(f"[yellow]\u2139\ufe0f  helm install {release_name} into {namespace}[/yellow]")
        try:
            sh.helm(*self.install_args(namespace, release_name, values_file), _cwd=self.work_dir)
        except sh.ErrorReturnCode as err:
            stderr = err.stderr.decode(errors="replace") if isinstance(err.stderr, bytes) else str(err.stderr)
            raise InstallError(f"helm install of {release_name} failed: {stderr.strip()[:500]}") from err
