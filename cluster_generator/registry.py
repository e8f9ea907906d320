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

"""Registering generated clusters as Argo CD declarative cluster secrets."""

from __future__ import annotations

import base64
import json

import yaml

from cluster_generator import console
from cluster_generator.constants import (
    ANNOTATION_MANAGED_BY,
    ANNOTATION_SERVER_VERSION,
    LABEL_SECRET_TYPE,
    MANAGED_BY_ARGOCD,
    SECRET_TYPE_CLUSTER,
)
from cluster_generator.errors import KubectlError, RegistrationError
from cluster_generator.kube import KubeClient
from cluster_generator.models import ClusterRecord


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def cluster_config_json(record: ClusterRecord) -> str:
    """Serialize the connection config the way Argo CD stores it."""
    tls = record.tls_client_config
    return json.dumps({
        "tlsClientConfig": {
            "insecure": tls.insecure,
            "serverName": tls.server_name,
            "caData": _b64(tls.ca_data),
            "certData": _b64(tls.cert_data),
            "keyData": _b64(tls.key_data),
        }
    })


def cluster_secret_manifest(record: ClusterRecord, namespace: str) -> dict:
    """Build the cluster Secret for a record.

    The record's labels are copied onto the Secret so cleanup can select
    generated clusters by label.

    Args:
        record: Cluster to register.
        namespace: Namespace Argo CD watches for cluster secrets.

    Returns:
        Kubernetes Secret resource as a dictionary ready for YAML serialization.
    """
    string_data = {
        "name": record.name,
        "server": record.server,
        "config": cluster_config_json(record),
    }
    if record.namespaces:
        string_data["namespaces"] = ",".join(record.namespaces)
    return {
        "apiVersion": "v1",
        "kind": "Secret",
        "type": "Opaque",
        "metadata": {
            "name": f"cluster-{record.name}",
            "namespace": namespace,
            "labels": {**record.labels, LABEL_SECRET_TYPE: SECRET_TYPE_CLUSTER},
            "annotations": {
                ANNOTATION_MANAGED_BY: MANAGED_BY_ARGOCD,
                ANNOTATION_SERVER_VERSION: record.server_version,
            },
        },
        "stringData": string_data,
    }


class ClusterRegistry:
    """Create-only store of generated cluster records.

    Args:
        client: Host cluster client.
        namespace: Namespace of the Argo CD installation.
    """

    def __init__(self, client: KubeClient, namespace: str) -> None:
        self.client = client
        self.namespace = namespace

    def create_cluster(self, record: ClusterRecord) -> None:
        """Write a new cluster record.

        Raises:
            RegistrationError: If the Secret cannot be created (including when
                one with the same name already exists).
        """
        manifest = yaml.safe_dump(cluster_secret_manifest(record, self.namespace), default_flow_style=False)
        try:
            self.client.create_manifest(manifest)
        except KubectlError as err:
            raise RegistrationError(f"failed to register cluster {record.name}: {err}") from err
        console.print(f"[green]\u2705 Cluster {record.name} registered ({record.server or 'unresolved'})[/green]")
