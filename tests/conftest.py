"""Shared fixtures for cluster_generator tests.

kubectl and helm are never invoked: the host cluster client, installer and
registry are replaced with mocks, and retry waits with a recording no-op.
"""

from __future__ import annotations

import base64
from unittest.mock import MagicMock

import pytest
import yaml

from cluster_generator.config import GenerateOptions, ProvisioningPolicy
from cluster_generator.installer import HelmInstaller
from cluster_generator.kube import KubeClient
from cluster_generator.registry import ClusterRegistry


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def make_kubeconfig(
    ca: bytes = b"ca-bytes",
    cert: bytes = b"cert-bytes",
    key: bytes = b"key-bytes",
    clusters: list | None = None,
    users: list | None = None,
) -> str:
    """Render a vcluster-style admin kubeconfig."""
    if clusters is None:
        clusters = [{
            "name": "my-vcluster",
            "cluster": {"server": "https://localhost:8443", "certificate-authority-data": b64(ca)},
        }]
    if users is None:
        users = [{
            "name": "my-vcluster",
            "user": {"client-certificate-data": b64(cert), "client-key-data": b64(key)},
        }]
    return yaml.safe_dump({
        "apiVersion": "v1",
        "kind": "Config",
        "clusters": clusters,
        "users": users,
        "contexts": [{"name": "my-vcluster", "context": {"cluster": "my-vcluster", "user": "my-vcluster"}}],
        "current-context": "my-vcluster",
    })


class SleepRecorder:
    """Stand-in for time.sleep that records requested delays."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def kube() -> MagicMock:
    client = MagicMock(spec=KubeClient)
    client.exec_in_pod.return_value = make_kubeconfig()
    client.get_pod_ip.return_value = "10.0.0.5"
    return client


@pytest.fixture
def installer() -> MagicMock:
    return MagicMock(spec=HelmInstaller)


@pytest.fixture
def registry() -> MagicMock:
    return MagicMock(spec=ClusterRegistry)


@pytest.fixture
def options() -> GenerateOptions:
    return GenerateOptions(
        samples=3,
        concurrency=2,
        namespace_prefix="vcluster",
        cluster_name_prefix="perf",
        destination_namespace="guestbook",
        values_file_path="values.yaml",
        namespace="argocd",
    )


@pytest.fixture
def policy() -> ProvisioningPolicy:
    return ProvisioningPolicy()
