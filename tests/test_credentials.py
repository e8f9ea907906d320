from __future__ import annotations

import pytest

from conftest import b64, make_kubeconfig

from cluster_generator.constants import SYNCER_CONTAINER
from cluster_generator.credentials import (
    AccessConfig,
    credentials_from_config,
    extract_credentials,
    parse_access_config,
)
from cluster_generator.errors import ExtractionError, KubectlError


class TestParseAccessConfig:
    def test_reads_hyphenated_fields(self) -> None:
        config = parse_access_config(make_kubeconfig())
        assert config.clusters[0].name == "my-vcluster"
        assert config.clusters[0].cluster.server == "https://localhost:8443"
        assert config.clusters[0].cluster.certificate_authority_data == b64(b"ca-bytes")
        assert config.users[0].user.client_key_data == b64(b"key-bytes")

    def test_missing_lists_default_to_empty(self) -> None:
        config = parse_access_config("apiVersion: v1\nkind: Config\n")
        assert config.clusters == []
        assert config.users == []

    def test_invalid_yaml(self) -> None:
        with pytest.raises(ExtractionError, match="not valid YAML"):
            parse_access_config("clusters: [unclosed")

    def test_non_mapping_document(self) -> None:
        with pytest.raises(ExtractionError, match="must be a mapping"):
            parse_access_config("- just\n- a list\n")

    def test_wrong_shape(self) -> None:
        with pytest.raises(ExtractionError, match="unexpected access config shape"):
            parse_access_config("clusters: not-a-list\n")


class TestCredentialsFromConfig:
    def test_round_trip_returns_raw_bytes(self) -> None:
        creds = credentials_from_config(parse_access_config(make_kubeconfig()))
        assert creds.ca_data == b"ca-bytes"
        assert creds.cert_data == b"cert-bytes"
        assert creds.key_data == b"key-bytes"

    def test_empty_cluster_list_fails(self) -> None:
        with pytest.raises(ExtractionError, match="clusters empty"):
            credentials_from_config(parse_access_config(make_kubeconfig(clusters=[])))

    def test_empty_user_list_fails(self) -> None:
        with pytest.raises(ExtractionError, match="users empty"):
            credentials_from_config(parse_access_config(make_kubeconfig(users=[])))

    def test_missing_key_data_fails(self) -> None:
        users = [{"name": "u", "user": {"client-certificate-data": b64(b"cert-bytes")}}]
        with pytest.raises(ExtractionError, match="client-key-data is missing"):
            credentials_from_config(parse_access_config(make_kubeconfig(users=users)))

    def test_invalid_base64_fails(self) -> None:
        clusters = [{"name": "c", "cluster": {"certificate-authority-data": "%%%not base64%%%"}}]
        with pytest.raises(ExtractionError, match="not valid base64"):
            credentials_from_config(parse_access_config(make_kubeconfig(clusters=clusters)))

    def test_uses_first_entries_only(self) -> None:
        config = AccessConfig.model_validate({
            "clusters": [
                {"name": "a", "cluster": {"certificate-authority-data": b64(b"first-ca")}},
                {"name": "b", "cluster": {"certificate-authority-data": b64(b"second-ca")}},
            ],
            "users": [
                {"name": "a", "user": {"client-certificate-data": b64(b"c1"), "client-key-data": b64(b"k1")}},
                {"name": "b", "user": {"client-certificate-data": b64(b"c2"), "client-key-data": b64(b"k2")}},
            ],
        })
        creds = credentials_from_config(config)
        assert (creds.ca_data, creds.cert_data, creds.key_data) == (b"first-ca", b"c1", b"k1")


class TestExtractCredentials:
    def test_execs_into_control_pod(self, kube) -> None:
        creds = extract_credentials(kube, "vcluster-ns1", "abc123")

        kube.exec_in_pod.assert_called_once_with(
            "vcluster-ns1", "vcluster-abc123-0", SYNCER_CONTAINER, ["sh", "-c", "cat /root/.kube/config"]
        )
        assert creds.ca_data == b"ca-bytes"

    def test_exec_failure_is_extraction_error(self, kube) -> None:
        kube.exec_in_pod.side_effect = KubectlError("container not found")

        with pytest.raises(ExtractionError, match="container not found"):
            extract_credentials(kube, "vcluster-ns1", "abc123")

    def test_empty_output_is_extraction_error(self, kube) -> None:
        kube.exec_in_pod.return_value = ""

        with pytest.raises(ExtractionError, match="clusters empty"):
            extract_credentials(kube, "vcluster-ns1", "abc123")
