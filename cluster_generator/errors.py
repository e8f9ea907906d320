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

"""Error types raised by the provisioning and cleanup workflows."""

from __future__ import annotations


class GeneratorError(RuntimeError):
    """Base class for cluster generator failures."""


class KubectlError(GeneratorError):
    """A kubectl invocation failed or returned unusable output."""


class InstallError(GeneratorError):
    """The Helm install of a virtual cluster failed."""


class ExtractionError(GeneratorError):
    """Credentials could not be read from the virtual cluster's control pod."""


class ResolutionError(GeneratorError):
    """The control pod has no reachable address yet."""


class RegistrationError(GeneratorError):
    """The cluster record could not be written to the registry."""


class CleanupError(GeneratorError):
    """A cleanup request failed."""


class BatchError(GeneratorError):
    """One or more units failed while strict mode was enabled."""

    def __init__(self, failed: int, total: int) -> None:
        super().__init__(f"{failed} of {total} clusters failed to generate")
        self.failed = failed
        self.total = total
