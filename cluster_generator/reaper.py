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

"""Cleanup of everything the generator created, found by naming convention."""

from __future__ import annotations

from rich.panel import Panel

from cluster_generator import console, logger
from cluster_generator.config import GenerateOptions
from cluster_generator.constants import GENERATED_BY_SELECTOR, POD_PREFIX
from cluster_generator.errors import CleanupError, KubectlError
from cluster_generator.kube import KubeClient


def delete_generated_namespaces(client: KubeClient, prefix: str = POD_PREFIX) -> list[str]:
    """Delete every namespace whose name starts with ``prefix``.

    Failures are logged and skipped; the namespace is left for a later sweep.

    Args:
        client: Host cluster client.
        prefix: Namespace name prefix to match.

    Returns:
        Names of the namespaces whose deletion was accepted.
    """
    try:
        namespaces = client.list_namespaces()
    except KubectlError as err:
        logger.error("Failed to list namespaces: %s", err)
        return []

    deleted: list[str] = []
    for name in namespaces:
        if not name.startswith(prefix):
            continue
        console.print(f"[yellow]\u2139\ufe0f  Delete namespace {name}[/yellow]")
        try:
            client.delete_namespace(name)
        except KubectlError as err:
            logger.error("Delete namespace %s failed due to: %s", name, err)
            continue
        deleted.append(name)
    return deleted


def delete_generated_secrets(client: KubeClient, namespace: str) -> None:
    """Delete the generator's cluster secrets in one collection request.

    Raises:
        CleanupError: If the delete request fails.
    """
    console.print(f"[yellow]\u2139\ufe0f  Delete secrets in {namespace} matching {GENERATED_BY_SELECTOR}[/yellow]")
    try:
        client.delete_secrets(namespace, GENERATED_BY_SELECTOR)
    except KubectlError as err:
        raise CleanupError(f"failed to delete generated secrets in {namespace}: {err}") from err


def clean(options: GenerateOptions, client: KubeClient | None = None) -> None:
    """Remove all generated namespaces and registered cluster secrets.

    Namespace deletion is best-effort; only the secret deletion's failure is
    raised, and it is attempted even when namespace listing failed.

    Args:
        options: Options carrying the control namespace.
        client: Host cluster client, or None for the current kubeconfig context.

    Raises:
        CleanupError: If the secret collection delete fails.
    """
    client = client if client is not None else KubeClient()
    console.print(Panel.fit("Clean clusters", style="bold blue"))
    deleted = delete_generated_namespaces(client)
    delete_generated_secrets(client, options.namespace)
    console.print(f"[green]\u2705 Deleted {len(deleted)} namespaces and generated cluster secrets[/green]")
