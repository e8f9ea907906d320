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

"""Generate subcommands (clusters)."""

from __future__ import annotations

import typer
from rich.panel import Panel

from cluster_generator import console
from cluster_generator.config import GenerateOptions, ProvisioningPolicy
from cluster_generator.orchestrator import generate
from cluster_generator.utils import require_command

app = typer.Typer(help="Generate test resources.")


@app.command()
def clusters(
    samples: int | None = typer.Option(None, "--samples", "-s", help="Number of clusters to generate"),
    concurrency: int | None = typer.Option(None, "--concurrency", "-c", help="Clusters provisioned in parallel"),
    namespace_prefix: str | None = typer.Option(
        None, "--namespace-prefix", help="Prefix of generated vcluster namespaces"),
    cluster_name_prefix: str | None = typer.Option(
        None, "--cluster-name-prefix", help="Prefix of registered cluster names"),
    destination_namespace: str | None = typer.Option(
        None, "--destination-namespace", help="Destination namespace recorded on each cluster"),
    values_file: str | None = typer.Option(None, "--values-file", help="Helm values file for vcluster"),
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Argo CD namespace"),
    strict: bool = typer.Option(False, "--strict", help="Exit non-zero when any cluster fails"),
) -> None:
    """Install vclusters and register them as Argo CD clusters."""
    overrides: dict = {
        key: value
        for key, value in {
            "samples": samples,
            "concurrency": concurrency,
            "namespace_prefix": namespace_prefix,
            "cluster_name_prefix": cluster_name_prefix,
            "destination_namespace": destination_namespace,
            "values_file_path": values_file,
            "namespace": namespace,
        }.items()
        if value is not None
    }
    options = GenerateOptions(**overrides)
    policy = ProvisioningPolicy()
    if strict:
        policy = policy.model_copy(update={"strict": True})

    console.print(Panel.fit("Checking prerequisites", style="bold blue"))
    for cmd in ("helm", "kubectl"):
        require_command(cmd)
    console.print("[green]\u2705 All required tools are available[/green]")

    generate(options, policy)
