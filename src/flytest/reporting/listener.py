# Copyright 2026 Firefly Software Solutions Inc.
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
"""TestListener — the events a test run reports to a printer."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class TestListener(Protocol):
    """Receives the lifecycle and outcome events of a test run.

    A test is bracketed by ``start_test``/``end_test``; any ``add_*``
    event in between marks its outcome. Suites may nest; only the end
    of the outermost suite closes the run.
    """

    def start_suite(self, name: str) -> None: ...
    def end_suite(self, name: str) -> None: ...
    def start_test(self, description: str) -> None: ...
    def end_test(self, description: str, output: str = "") -> None: ...
    def add_error(self, description: str, exc: BaseException) -> None: ...
    def add_failure(self, description: str, exc: BaseException) -> None: ...
    def add_warning(self, description: str, message: str) -> None: ...
    def add_skipped(self, description: str, reason: str = "") -> None: ...
    def add_incomplete(self, description: str, reason: str = "") -> None: ...
    def add_risky(self, description: str, reason: str = "") -> None: ...
