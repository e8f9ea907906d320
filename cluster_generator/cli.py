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

"""
cli.py - Unified CLI for generating vcluster fixtures.

Subcommands:
    generate   Create resources (clusters)
    clean      Delete everything the generator created (clusters)

Environment Variables:
    Options can also be set via CLUSTER_GEN_* environment variables:
    - CLUSTER_GEN_SAMPLES (default: 1)
    - CLUSTER_GEN_CONCURRENCY (default: 5)
    - CLUSTER_GEN_NAMESPACE (default: argocd)
    - CLUSTER_GEN_CONTINUE_ON_INSTALL_ERROR (default: true)
    - And more (see config classes for full list)

Examples:
    # Register 50 vclusters, 10 at a time
    cluster-generator generate clusters --samples 50 --concurrency 10 --values-file vcluster.yaml

    # Remove them again
    cluster-generator clean clusters
"""

from __future__ import annotations

import logging
import sys

import typer

from cluster_generator import console
from cluster_generator.commands import clean_cmd, generate_cmd

app = typer.Typer(
    help="Generate vclusters registered in Argo CD for scale testing.",
    no_args_is_help=True,
)


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all subcommands."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%H:%M:%S",
    )


app.add_typer(generate_cmd.app, name="generate")
app.add_typer(clean_cmd.app, name="clean")


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except Exception as e:
        console.print(f"[red]\u274c {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
