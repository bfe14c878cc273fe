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
"""Container exceptions — unknown services and rejected mock overrides."""

from __future__ import annotations

from flytest.kernel.exceptions import (
    ConflictException,
    InvalidRequestException,
)


class NoSuchServiceError(InvalidRequestException):
    """No service is registered under the requested id."""

    def __init__(self, service_id: str, suggestions: list[str] | None = None) -> None:
        self.service_id = service_id
        self.suggestions = suggestions or []

        lines = [f'NoSuchServiceError: No service named "{service_id}" is registered']
        if self.suggestions:
            lines.append("")
            lines.append(f"  Similar registered services: {', '.join(self.suggestions)}")

        super().__init__(
            message="\n".join(lines),
            code="SERVICE_NOT_FOUND",
            context={"service_id": service_id},
        )


class InvalidOverrideError(InvalidRequestException):
    """A mock was requested for a service the wrapped locator does not know."""

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(
            message=f'Cannot mock unexisting service: "{service_id}"',
            code="MOCK_INVALID_OVERRIDE",
            context={"service_id": service_id},
        )


class DuplicateOverrideError(ConflictException):
    """A mock was requested for a service that is already mocked.

    Call ``unmock()`` or ``clear_mocks()`` before mocking it again.
    """

    def __init__(self, service_id: str) -> None:
        self.service_id = service_id
        super().__init__(
            message=f'Service "{service_id}" is already mocked',
            code="MOCK_DUPLICATE_OVERRIDE",
            context={"service_id": service_id},
        )
