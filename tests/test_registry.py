from __future__ import annotations

import base64
import json
from unittest.mock import MagicMock

import pytest
import yaml

from cluster_generator.constants import GENERATED_LABELS
from cluster_generator.errors import KubectlError, RegistrationError
from cluster_generator.kube import KubeClient
from cluster_generator.models import ClusterRecord, TLSClientConfig
from cluster_generator.registry import ClusterRegistry, cluster_secret_manifest


@pytest.fixture
def record() -> ClusterRecord:
    return ClusterRecord(
        server="https://10.0.0.5:8443",
        name="perf-abcd1234",
        tls_client_config=TLSClientConfig(ca_data=b"ca", cert_data=b"cert", key_data=b"key"),
        namespaces=("guestbook",),
    )


class TestClusterSecretManifest:
    def test_metadata(self, record) -> None:
        manifest = cluster_secret_manifest(record, "argocd")

        assert manifest["kind"] == "Secret"
        assert manifest["metadata"]["name"] == "cluster-perf-abcd1234"
        assert manifest["metadata"]["namespace"] == "argocd"
        assert manifest["metadata"]["labels"] == {
            **GENERATED_LABELS,
            "argocd.argoproj.io/secret-type": "cluster",
        }
        assert manifest["metadata"]["annotations"]["managed-by"] == "argocd.argoproj.io"

    def test_string_data(self, record) -> None:
        data = cluster_secret_manifest(record, "argocd")["stringData"]

        assert data["name"] == "perf-abcd1234"
        assert data["server"] == "https://10.0.0.5:8443"
        assert data["namespaces"] == "guestbook"
        tls = json.loads(data["config"])["tlsClientConfig"]
        assert tls["insecure"] is False
        assert tls["serverName"] == "kubernetes.default.svc"
        assert base64.b64decode(tls["caData"]) == b"ca"
        assert base64.b64decode(tls["certData"]) == b"cert"
        assert base64.b64decode(tls["keyData"]) == b"key"

    def test_unresolved_server_is_kept_empty(self, record) -> None:
        unresolved = ClusterRecord(server="", name=record.name, tls_client_config=record.tls_client_config)
        data = cluster_secret_manifest(unresolved, "argocd")["stringData"]
        assert data["server"] == ""
        assert "namespaces" not in data


class TestClusterRegistry:
    def test_creates_secret(self, record) -> None:
        client = MagicMock(spec=KubeClient)

        ClusterRegistry(client, "argocd").create_cluster(record)

        manifest = yaml.safe_load(client.create_manifest.call_args.args[0])
        assert manifest == cluster_secret_manifest(record, "argocd")

    def test_create_failure_is_registration_error(self, record) -> None:
        client = MagicMock(spec=KubeClient)
        client.create_manifest.side_effect = KubectlError("AlreadyExists")

        with pytest.raises(RegistrationError, match="AlreadyExists"):
            ClusterRegistry(client, "argocd").create_cluster(record)
