from __future__ import annotations

import pytest

from cluster_generator.endpoint import UNRESOLVED, get_cluster_server_uri, retrieve_cluster_uri
from cluster_generator.errors import KubectlError, ResolutionError
from cluster_generator.retry import RetryPolicy

POLICY = RetryPolicy(max_attempts=10, delay_seconds=10, retry_on=(ResolutionError,))


class TestGetClusterServerUri:
    def test_builds_uri_from_pod_ip(self, kube) -> None:
        assert get_cluster_server_uri(kube, "vcluster-ns1", "abc123") == "https://10.0.0.5:8443"
        kube.get_pod_ip.assert_called_once_with("vcluster-ns1", "vcluster-abc123-0")

    def test_no_ip_yet(self, kube) -> None:
        kube.get_pod_ip.return_value = ""
        with pytest.raises(ResolutionError, match="no IP"):
            get_cluster_server_uri(kube, "vcluster-ns1", "abc123")

    def test_pod_not_found(self, kube) -> None:
        kube.get_pod_ip.side_effect = KubectlError('pods "vcluster-abc123-0" not found')
        with pytest.raises(ResolutionError, match="not found"):
            get_cluster_server_uri(kube, "vcluster-ns1", "abc123")


class TestRetrieveClusterUri:
    def test_resolves_after_pod_gets_ip(self, kube, sleep) -> None:
        kube.get_pod_ip.side_effect = ["", "", "10.1.2.3"]

        uri = retrieve_cluster_uri(kube, "ns", "abc", POLICY, sleep=sleep)

        assert uri == "https://10.1.2.3:8443"
        assert sleep.calls == [10, 10]

    def test_degrades_to_unresolved_after_ten_attempts(self, kube, sleep) -> None:
        kube.get_pod_ip.return_value = ""

        uri = retrieve_cluster_uri(kube, "ns", "abc", POLICY, sleep=sleep)

        assert uri == UNRESOLVED == ""
        assert kube.get_pod_ip.call_count == 10
        assert len(sleep.calls) == 9

    def test_raises_when_degrade_disabled(self, kube, sleep) -> None:
        kube.get_pod_ip.return_value = ""

        with pytest.raises(ResolutionError):
            retrieve_cluster_uri(kube, "ns", "abc", POLICY, degrade=False, sleep=sleep)
        assert kube.get_pod_ip.call_count == 10
