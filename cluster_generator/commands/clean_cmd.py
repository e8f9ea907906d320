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

"""Clean subcommands (clusters)."""

from __future__ import annotations

import typer

from cluster_generator.config import GenerateOptions
from cluster_generator.reaper import clean

app = typer.Typer(help="Clean up generated test resources.")


@app.command()
def clusters(
    namespace: str | None = typer.Option(None, "--namespace", "-n", help="Argo CD namespace"),
) -> None:
    """Delete generated vcluster namespaces and their cluster secrets."""
    options = GenerateOptions()
    if namespace is not None:
        options = options.model_copy(update={"namespace": namespace})
    clean(options)
