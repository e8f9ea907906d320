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

"""Orchestration functions that run provisioning units as a batch."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed

from rich.panel import Panel

from cluster_generator import console, logger
from cluster_generator.config import GenerateOptions, ProvisioningPolicy
from cluster_generator.errors import BatchError
from cluster_generator.installer import HelmInstaller
from cluster_generator.kube import KubeClient
from cluster_generator.models import BatchSummary, UnitResult, UnitState
from cluster_generator.provisioner import UnitProvisioner
from cluster_generator.registry import ClusterRegistry


# ============================================================================
# Internal helpers
# ============================================================================

def _run_unit(provisioner: UnitProvisioner, index: int) -> tuple[UnitResult, str]:
    """Provision one unit with its console output captured as a block.

    Args:
        provisioner: Shared provisioner.
        index: 1-based ordinal of the unit.

    Returns:
        Tuple of (result, buffered console output).
    """
    with console.buffered() as buf:
        try:
            result = provisioner.provision(index)
        except Exception as e:
            logger.exception("Cluster #%d failed unexpectedly", index)
            result = UnitResult(index=index, state=UnitState.FAILED, error=e)
    return result, buf.getvalue()


def _print_summary(summary: BatchSummary) -> None:
    """Print the per-batch outcome and each failure with its ordinal."""
    if summary.failed:
        console.print(f"[yellow]\u26a0\ufe0f  {summary.failed} of {summary.requested} clusters failed[/yellow]")
        for result in summary.failures:
            console.print(f"[red]\u2717 cluster #{result.index} - {result.error}[/red]")
    console.print(f"[green]\u2705 Generated {summary.succeeded} of {summary.requested} clusters[/green]")


# ============================================================================
# Public API
# ============================================================================

def run_batch(provisioner: UnitProvisioner, samples: int, concurrency: int) -> BatchSummary:
    """Provision ``samples`` units with at most ``concurrency`` in flight.

    Units run on a fixed-size thread pool; queued units wait for a free worker.
    A failing unit never cancels its siblings. Returns once every unit is
    terminal.

    Args:
        provisioner: Provisioner shared by all workers.
        samples: Number of units to provision.
        concurrency: Pool size.

    Returns:
        Summary with one result per unit.
    """
    summary = BatchSummary(requested=samples)
    if samples <= 0:
        return summary

    logger.info("Execute in parallel with %d workers", concurrency)
    with ThreadPoolExecutor(max_workers=concurrency, thread_name_prefix="cluster-gen") as executor:
        futures = {
            executor.submit(_run_unit, provisioner, index): index
            for index in range(1, samples + 1)
        }
        for future in as_completed(futures):
            result, output = future.result()
            if output:
                console.print(output, end="", markup=False, highlight=False)
            if not result.ok:
                logger.error("Failed to generate cluster #%d due to: %s", futures[future], result.error)
            summary.results.append(result)
    return summary


def generate(
    options: GenerateOptions,
    policy: ProvisioningPolicy | None = None,
    client: KubeClient | None = None,
    installer: HelmInstaller | None = None,
    registry: ClusterRegistry | None = None,
    provisioner: UnitProvisioner | None = None,
) -> BatchSummary:
    """Generate ``options.samples`` virtual clusters and register them.

    Args:
        options: Batch options.
        policy: Failure and retry policy, or None for defaults from env.
        client: Host cluster client, or None for the current kubeconfig context.
        installer: Helm installer, or None for the packaged chart coordinates.
        registry: Cluster registry, or None for Argo CD secrets in ``options.namespace``.
        provisioner: Fully built provisioner; overrides the collaborators above.

    Returns:
        Summary of the batch.

    Raises:
        BatchError: If ``policy.strict`` is set and any unit failed.
    """
    if policy is None:
        policy = ProvisioningPolicy()
    if provisioner is None:
        client = client if client is not None else KubeClient()
        provisioner = UnitProvisioner(
            options,
            client,
            installer if installer is not None else HelmInstaller(),
            registry if registry is not None else ClusterRegistry(client, options.namespace),
            policy=policy,
        )

    console.print(Panel.fit(f"Generating {options.samples} clusters", style="bold blue"))
    summary = run_batch(provisioner, options.samples, options.concurrency)
    _print_summary(summary)

    if policy.strict and summary.failed:
        raise BatchError(summary.failed, summary.requested)
    return summary
