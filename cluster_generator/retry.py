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

"""Fixed-delay retry policies built on tenacity."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_fixed

from cluster_generator import logger

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    """How often and how patiently to retry a failing step.

    Attributes:
        max_attempts: Total attempts, the first one included.
        delay_seconds: Fixed wait between attempts.
        retry_on: Exception types that trigger another attempt; anything else
            propagates immediately.
    """

    max_attempts: int
    delay_seconds: float
    retry_on: tuple[type[BaseException], ...] = (Exception,)

    def retrying(self, sleep: Callable[[float], Any] = time.sleep) -> Retrying:
        """Build a tenacity controller for this policy.

        Args:
            sleep: Function used to wait between attempts; tests pass a no-op.

        Returns:
            A ``Retrying`` instance that re-raises the last error once exhausted.
        """
        return Retrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.delay_seconds),
            retry=retry_if_exception_type(self.retry_on),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            sleep=sleep,
            reraise=True,
        )

    def call(self, fn: Callable[..., T], *args: Any, sleep: Callable[[float], Any] = time.sleep, **kwargs: Any) -> T:
        """Run ``fn`` under this policy and return its result."""
        return self.retrying(sleep)(fn, *args, **kwargs)
