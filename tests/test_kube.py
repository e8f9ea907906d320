from __future__ import annotations

from unittest.mock import patch

import pytest

from cluster_generator.errors import KubectlError
from cluster_generator.kube import KubeClient


@pytest.fixture
def run_kubectl():
    with patch("cluster_generator.kube.run_kubectl") as mock:
        mock.return_value = (True, "", "")
        yield mock


class TestKubeClient:
    def test_exec_in_pod(self, run_kubectl) -> None:
        run_kubectl.return_value = (True, "apiVersion: v1\n", "")

        out = KubeClient().exec_in_pod("ns", "vcluster-abc-0", "syncer", ["sh", "-c", "cat /root/.kube/config"])

        assert out == "apiVersion: v1\n"
        args = run_kubectl.call_args.args[0]
        assert args == ["exec", "vcluster-abc-0", "-n", "ns", "-c", "syncer", "--",
                        "sh", "-c", "cat /root/.kube/config"]

    def test_get_pod_ip_strips_output(self, run_kubectl) -> None:
        run_kubectl.return_value = (True, "10.0.0.7\n", "")
        assert KubeClient().get_pod_ip("ns", "pod-0") == "10.0.0.7"

    def test_list_namespaces(self, run_kubectl) -> None:
        run_kubectl.return_value = (True, "default kube-system vcluster-ab12", "")
        assert KubeClient().list_namespaces() == ["default", "kube-system", "vcluster-ab12"]

    def test_delete_secrets_uses_selector(self, run_kubectl) -> None:
        KubeClient().delete_secrets("argocd", "app=x")
        assert run_kubectl.call_args.args[0] == ["delete", "secrets", "-n", "argocd", "-l", "app=x"]

    def test_create_manifest_passes_stdin(self, run_kubectl) -> None:
        KubeClient().create_manifest("kind: Secret\n")
        assert run_kubectl.call_args.args[0] == ["create", "-f", "-"]
        assert run_kubectl.call_args.kwargs["input_text"] == "kind: Secret\n"

    def test_context_is_prepended(self, run_kubectl) -> None:
        KubeClient(context="kind-host").delete_namespace("vcluster-x")
        assert run_kubectl.call_args.args[0] == [
            "--context", "kind-host", "delete", "namespace", "vcluster-x", "--wait=false",
        ]

    def test_failure_raises_with_stderr(self, run_kubectl) -> None:
        run_kubectl.return_value = (False, "", 'Error from server (NotFound): namespaces "x" not found')

        with pytest.raises(KubectlError, match="NotFound"):
            KubeClient().delete_namespace("x")
