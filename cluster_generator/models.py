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

"""Value types passed between the provisioning steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from cluster_generator.constants import (
    CLUSTER_SERVER_NAME,
    CLUSTER_SERVER_VERSION,
    GENERATED_LABELS,
    POD_PREFIX,
)


def release_name_for(release_suffix: str) -> str:
    """Helm release name of the virtual cluster with the given suffix."""
    return f"{POD_PREFIX}-{release_suffix}"


def control_pod_name(release_suffix: str) -> str:
    """Name of the first (and only) pod of the virtual cluster's StatefulSet."""
    return f"{release_name_for(release_suffix)}-0"


class UnitState(str, Enum):
    """Lifecycle of a single provisioning attempt."""

    INSTALLING = "Installing"
    EXTRACTING_CREDENTIALS = "ExtractingCredentials"
    RESOLVING_ENDPOINT = "ResolvingEndpoint"
    REGISTERING = "Registering"
    DONE = "Done"
    FAILED = "Failed"


@dataclass(frozen=True)
class ProvisioningUnit:
    """Names generated for one virtual cluster attempt.

    Attributes:
        index: 1-based ordinal within the batch, used for logging.
        namespace: Namespace the virtual cluster is installed into.
        release_suffix: Random suffix shared by the release and its pods.
    """

    index: int
    namespace: str
    release_suffix: str

    @property
    def release_name(self) -> str:
        return release_name_for(self.release_suffix)

    @property
    def pod_name(self) -> str:
        return control_pod_name(self.release_suffix)


@dataclass(frozen=True)
class ExtractedCredentials:
    """Raw (decoded) TLS material of a virtual cluster's admin user."""

    ca_data: bytes
    cert_data: bytes
    key_data: bytes


@dataclass(frozen=True)
class TLSClientConfig:
    """TLS settings the control plane uses to reach a registered cluster."""

    ca_data: bytes
    cert_data: bytes
    key_data: bytes
    server_name: str = CLUSTER_SERVER_NAME
    insecure: bool = False

    @classmethod
    def from_credentials(cls, credentials: ExtractedCredentials) -> TLSClientConfig:
        return cls(
            ca_data=credentials.ca_data,
            cert_data=credentials.cert_data,
            key_data=credentials.key_data,
        )


@dataclass(frozen=True)
class ClusterRecord:
    """A generated cluster as written to the registry.

    Attributes:
        server: API server URI, empty when the endpoint never resolved.
        name: Display name (cluster name prefix plus a random suffix).
        tls_client_config: Client certificate, key and CA for the server.
        namespaces: Namespaces the control plane may deploy into.
        labels: Labels marking the record as generator-produced.
        server_version: Kubernetes version reported for the cluster.
    """

    server: str
    name: str
    tls_client_config: TLSClientConfig
    namespaces: tuple[str, ...] = ()
    labels: dict[str, str] = field(default_factory=lambda: dict(GENERATED_LABELS))
    server_version: str = CLUSTER_SERVER_VERSION


@dataclass
class UnitResult:
    """Terminal outcome of one provisioning attempt."""

    index: int
    state: UnitState
    unit: ProvisioningUnit | None = None
    cluster_name: str | None = None
    server: str | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.state is UnitState.DONE


@dataclass
class BatchSummary:
    """Aggregated outcome of a ``generate`` run.

    Attributes:
        requested: Number of units the batch was asked to create.
        results: One result per unit, in completion order.
    """

    requested: int
    results: list[UnitResult] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.ok)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded

    @property
    def failures(self) -> list[UnitResult]:
        return sorted((r for r in self.results if not r.ok), key=lambda r: r.index)
