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

"""Provisioning of a single virtual cluster: install, credentials, endpoint, register."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from rich.panel import Panel

from cluster_generator import console, logger
from cluster_generator.config import GenerateOptions, ProvisioningPolicy
from cluster_generator.credentials import extract_credentials
from cluster_generator.endpoint import UNRESOLVED, retrieve_cluster_uri
from cluster_generator.errors import ExtractionError, GeneratorError, InstallError, ResolutionError
from cluster_generator.installer import HelmInstaller
from cluster_generator.kube import KubeClient
from cluster_generator.models import (
    ClusterRecord,
    ExtractedCredentials,
    ProvisioningUnit,
    TLSClientConfig,
    UnitResult,
    UnitState,
)
from cluster_generator.naming import random_string
from cluster_generator.registry import ClusterRegistry


class UnitProvisioner:
    """Runs the provisioning workflow for one unit at a time.

    Instances hold no per-unit state and may be shared by worker threads.

    Args:
        options: Batch options (prefixes, values file, destination namespace).
        client: Host cluster client used for exec and pod lookups.
        installer: Helm installer for the vcluster chart.
        registry: Store that receives the finished cluster record.
        policy: Retry counts and failure policy.
        sleep: Wait function used between retries.
        name_fn: Random name segment generator.
    """

    def __init__(
        self,
        options: GenerateOptions,
        client: KubeClient,
        installer: HelmInstaller,
        registry: ClusterRegistry,
        policy: ProvisioningPolicy | None = None,
        sleep: Callable[[float], Any] = time.sleep,
        name_fn: Callable[[], str] = random_string,
    ) -> None:
        self.options = options
        self.client = client
        self.installer = installer
        self.registry = registry
        self.policy = policy if policy is not None else ProvisioningPolicy()
        self.sleep = sleep
        self.name_fn = name_fn

    def new_unit(self, index: int) -> ProvisioningUnit:
        """Generate the namespace and release suffix for unit ``index``."""
        return ProvisioningUnit(
            index=index,
            namespace=f"{self.options.namespace_prefix}-{self.name_fn()}",
            release_suffix=self.name_fn(),
        )

    def provision(self, index: int) -> UnitResult:
        """Provision and register one virtual cluster.

        Failures never propagate: they are logged and reported through the
        returned result's ``state`` and ``error``.

        Args:
            index: 1-based ordinal of the unit within the batch.

        Returns:
            Result in state ``DONE`` or ``FAILED``.
        """
        unit = self.new_unit(index)
        console.print(Panel.fit(f"Generate cluster #{index} of #{self.options.samples}", style="bold blue"))
        console.print(f"   namespace={unit.namespace} release={unit.release_name}")

        result = UnitResult(index=index, state=UnitState.INSTALLING, unit=unit)
        try:
            self._install(unit)

            result.state = UnitState.EXTRACTING_CREDENTIALS
            credentials = self._extract(unit)

            result.state = UnitState.RESOLVING_ENDPOINT
            result.server = self._resolve(unit)

            result.state = UnitState.REGISTERING
            result.cluster_name = self._register(credentials, result.server)
        except GeneratorError as err:
            logger.error("Cluster #%d failed while %s: %s", index, result.state.value, err)
            result.error = err
            result.state = UnitState.FAILED
            return result

        result.state = UnitState.DONE
        return result

    # ------------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------------

    def _install(self, unit: ProvisioningUnit) -> None:
        try:
            self.installer.install(unit.namespace, unit.release_name, self.options.values_file_path)
        except InstallError as err:
            if not self.policy.continue_on_install_error:
                raise
            # helm can fail on --wait while the release still comes up
            logger.warning("Skip cluster installation due to error: %s", err)

    def _extract(self, unit: ProvisioningUnit) -> ExtractedCredentials:
        console.print("[yellow]\u2139\ufe0f  Get cluster credentials[/yellow]")
        try:
            return self.policy.credentials_retry().call(
                extract_credentials, self.client, unit.namespace, unit.release_suffix, sleep=self.sleep,
            )
        except ExtractionError as err:
            raise ExtractionError(
                f"failed to get credentials for {unit.release_name} after "
                f"{self.policy.credentials_max_attempts} attempts: {err}"
            ) from err

    def _resolve(self, unit: ProvisioningUnit) -> str:
        console.print("[yellow]\u2139\ufe0f  Get cluster server uri[/yellow]")
        try:
            uri = retrieve_cluster_uri(
                self.client,
                unit.namespace,
                unit.release_suffix,
                self.policy.endpoint_retry(),
                degrade=self.policy.degrade_to_unresolved_on_timeout,
                sleep=self.sleep,
            )
        except ResolutionError as err:
            raise ResolutionError(f"cluster uri for {unit.release_name} never resolved: {err}") from err
        if uri == UNRESOLVED:
            # Registration still happens with an empty server.
            logger.warning("Cluster #%d registers without a server uri", unit.index)
        else:
            console.print(f"   Cluster server uri is {uri}")
        return uri

    def _register(self, credentials: ExtractedCredentials, server: str) -> str:
        record = ClusterRecord(
            server=server,
            name=f"{self.options.cluster_name_prefix}-{self.name_fn()}",
            tls_client_config=TLSClientConfig.from_credentials(credentials),
            namespaces=(self.options.destination_namespace,),
        )
        console.print(f"[yellow]\u2139\ufe0f  Create cluster {record.name}[/yellow]")
        self.registry.create_cluster(record)
        return record.name
