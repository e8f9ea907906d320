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

"""Configuration classes for cluster generation and cleanup."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from cluster_generator.constants import (
    CREDENTIALS_MAX_ATTEMPTS,
    DEFAULT_ARGOCD_NAMESPACE,
    DEFAULT_CLUSTER_NAME_PREFIX,
    DEFAULT_CONCURRENCY,
    DEFAULT_DESTINATION_NAMESPACE,
    DEFAULT_NAMESPACE_PREFIX,
    DEFAULT_SAMPLES,
    DEFAULT_VALUES_FILE,
    ENDPOINT_MAX_ATTEMPTS,
    RETRY_WAIT_SECONDS,
)
from cluster_generator.errors import ExtractionError, ResolutionError
from cluster_generator.retry import RetryPolicy

_DNS_LABEL = r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$"


# ============================================================================
# Configuration classes
# ============================================================================

class GenerateOptions(BaseSettings):
    """Batch generation options, auto-loaded from CLUSTER_GEN_* env vars.

    Attributes:
        samples: Number of virtual clusters to create.
        concurrency: Maximum number of units provisioned at the same time.
        namespace_prefix: Prefix of each generated workload namespace.
        cluster_name_prefix: Prefix of each registered cluster's display name.
        destination_namespace: Namespace recorded as the cluster's only destination.
        values_file_path: Helm values file passed to the vcluster install.
        namespace: Control namespace holding the registry's cluster secrets.
    """

    model_config = SettingsConfigDict(env_prefix="CLUSTER_GEN_", extra="ignore")

    samples: int = Field(default=DEFAULT_SAMPLES, ge=0)
    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    namespace_prefix: str = Field(default=DEFAULT_NAMESPACE_PREFIX, pattern=_DNS_LABEL)
    cluster_name_prefix: str = Field(default=DEFAULT_CLUSTER_NAME_PREFIX, pattern=_DNS_LABEL)
    destination_namespace: str = DEFAULT_DESTINATION_NAMESPACE
    values_file_path: str = DEFAULT_VALUES_FILE
    namespace: str = DEFAULT_ARGOCD_NAMESPACE


class ProvisioningPolicy(BaseSettings):
    """Per-unit failure policy, auto-loaded from CLUSTER_GEN_* env vars.

    Attributes:
        continue_on_install_error: Proceed to credential extraction when helm fails.
        degrade_to_unresolved_on_timeout: Register with an empty server URI when
            the endpoint never resolves instead of failing the unit.
        strict: Fail the batch when any unit failed.
        credentials_max_attempts: Credential extraction attempts, first included.
        endpoint_max_attempts: Endpoint resolution attempts, first included.
        retry_delay_seconds: Fixed delay between attempts.
    """

    model_config = SettingsConfigDict(env_prefix="CLUSTER_GEN_", extra="ignore")

    continue_on_install_error: bool = True
    degrade_to_unresolved_on_timeout: bool = True
    strict: bool = False
    credentials_max_attempts: int = Field(default=CREDENTIALS_MAX_ATTEMPTS, ge=1)
    endpoint_max_attempts: int = Field(default=ENDPOINT_MAX_ATTEMPTS, ge=1)
    retry_delay_seconds: float = Field(default=RETRY_WAIT_SECONDS, ge=0)

    def credentials_retry(self) -> RetryPolicy:
        """Retry policy for credential extraction."""
        return RetryPolicy(
            max_attempts=self.credentials_max_attempts,
            delay_seconds=self.retry_delay_seconds,
            retry_on=(ExtractionError,),
        )

    def endpoint_retry(self) -> RetryPolicy:
        """Retry policy for endpoint resolution."""
        return RetryPolicy(
            max_attempts=self.endpoint_max_attempts,
            delay_seconds=self.retry_delay_seconds,
            retry_on=(ResolutionError,),
        )
