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

"""Reading the admin kubeconfig out of a running vcluster."""

from __future__ import annotations

import base64
import binascii

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cluster_generator.constants import KUBECONFIG_READ_COMMAND, SYNCER_CONTAINER
from cluster_generator.errors import ExtractionError, KubectlError
from cluster_generator.kube import KubeClient
from cluster_generator.models import ExtractedCredentials, control_pod_name


# ============================================================================
# Access config document
# ============================================================================

class _KubeconfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ClusterInfo(_KubeconfigModel):
    server: str = ""
    certificate_authority_data: str = Field(default="", alias="certificate-authority-data")


class NamedCluster(_KubeconfigModel):
    name: str = ""
    cluster: ClusterInfo = Field(default_factory=ClusterInfo)


class AuthInfo(_KubeconfigModel):
    client_certificate_data: str = Field(default="", alias="client-certificate-data")
    client_key_data: str = Field(default="", alias="client-key-data")


class NamedAuthInfo(_KubeconfigModel):
    name: str = ""
    user: AuthInfo = Field(default_factory=AuthInfo)


class AccessConfig(_KubeconfigModel):
    """The subset of a kubeconfig needed to register a cluster."""

    clusters: list[NamedCluster] = Field(default_factory=list)
    users: list[NamedAuthInfo] = Field(default_factory=list)


def parse_access_config(text: str) -> AccessConfig:
    """Parse kubeconfig text into an ``AccessConfig``.

    Args:
        text: Raw YAML as printed by the control pod.

    Returns:
        The validated document.

    Raises:
        ExtractionError: If the text is not YAML or not kubeconfig-shaped.
    """
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise ExtractionError(f"access config is not valid YAML: {err}") from err
    if doc is None:
        doc = {}
    if not isinstance(doc, dict):
        raise ExtractionError(f"access config must be a mapping, got {type(doc).__name__}")
    try:
        return AccessConfig.model_validate(doc)
    except ValidationError as err:
        raise ExtractionError(f"unexpected access config shape: {err}") from err


def _decode(field_name: str, value: str) -> bytes:
    if not value:
        raise ExtractionError(f"{field_name} is missing from the access config")
    try:
        data = base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError) as err:
        raise ExtractionError(f"{field_name} is not valid base64: {err}") from err
    if not data:
        raise ExtractionError(f"{field_name} decoded to an empty value")
    return data


def credentials_from_config(config: AccessConfig) -> ExtractedCredentials:
    """Decode the TLS material of the first cluster and first user.

    Only the first entry of each list is read; vcluster writes a
    single-cluster, single-user kubeconfig.

    Raises:
        ExtractionError: If a list is empty or any field fails to decode.
    """
    if not config.clusters:
        raise ExtractionError("clusters empty")
    if not config.users:
        raise ExtractionError("users empty")

    cluster = config.clusters[0].cluster
    user = config.users[0].user
    return ExtractedCredentials(
        ca_data=_decode("certificate-authority-data", cluster.certificate_authority_data),
        cert_data=_decode("client-certificate-data", user.client_certificate_data),
        key_data=_decode("client-key-data", user.client_key_data),
    )


# ============================================================================
# Extraction
# ============================================================================

def extract_credentials(client: KubeClient, namespace: str, release_suffix: str) -> ExtractedCredentials:
    """Read and decode the admin credentials of a vcluster.

    Args:
        client: Host cluster client.
        namespace: Namespace the vcluster was installed into.
        release_suffix: Random suffix of the vcluster release.

    Returns:
        CA certificate, client certificate and client key bytes.

    Raises:
        ExtractionError: If the exec fails or the kubeconfig is unusable.
    """
    pod = control_pod_name(release_suffix)
    try:
        output = client.exec_in_pod(namespace, pod, SYNCER_CONTAINER, list(KUBECONFIG_READ_COMMAND))
    except KubectlError as err:
        raise ExtractionError(f"failed to read kubeconfig from {namespace}/{pod}: {err}") from err
    return credentials_from_config(parse_access_config(output))
