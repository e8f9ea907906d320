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

"""Random name segments for namespaces, releases, and cluster names."""

from __future__ import annotations

import secrets
import string

from cluster_generator.constants import RANDOM_STRING_LENGTH

_ALPHABET = string.ascii_lowercase + string.digits


def random_string(length: int = RANDOM_STRING_LENGTH) -> str:
    """Return a random lowercase alphanumeric string usable in a DNS label."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))
