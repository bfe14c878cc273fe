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
"""MockableContainer — swap individual services for test doubles.

The override table lives outside the container so that every container
handle sharing it sees the same mocks. Containers built without an explicit
table share :data:`DEFAULT_MOCK_TABLE`, which lives for the whole test
process. Execution is assumed to be single-threaded: the table is not
locked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping, MutableMapping
from types import MappingProxyType
from typing import Any

from flytest.container.exceptions import DuplicateOverrideError, InvalidOverrideError
from flytest.container.locator import ServiceLocator

logger = logging.getLogger(__name__)


class MockTable(MutableMapping[str, Any]):
    """Mapping of service id to the substitute object a test supplied."""

    def __init__(self) -> None:
        self._entries: dict[str, Any] = {}

    def __getitem__(self, service_id: str) -> Any:
        return self._entries[service_id]

    def __setitem__(self, service_id: str, substitute: Any) -> None:
        self._entries[service_id] = substitute

    def __delitem__(self, service_id: str) -> None:
        del self._entries[service_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"MockTable({sorted(self._entries)!r})"

    def snapshot(self) -> Mapping[str, Any]:
        """Return a read-only copy of the current entries."""
        return MappingProxyType(dict(self._entries))


DEFAULT_MOCK_TABLE = MockTable()


class MockableContainer:
    """Decorates a :class:`ServiceLocator` with a mock-override layer.

    A mocked id resolves to its substitute without consulting the wrapped
    locator, so the real service is never constructed. Ids without a mock
    fall through to the wrapped locator unchanged, including its errors.
    Attributes not defined here are delegated to the wrapped locator.

    Usage::

        container = MockableContainer(app_container)
        fake = container.mock("mailer", FakeMailer())
        assert container.resolve("mailer") is fake
        container.clear_mocks()
    """

    def __init__(self, locator: ServiceLocator, mocks: MockTable | None = None) -> None:
        self._locator = locator
        self._mocks = DEFAULT_MOCK_TABLE if mocks is None else mocks

    @property
    def locator(self) -> ServiceLocator:
        """The wrapped service locator."""
        return self._locator

    @property
    def mocks(self) -> MockTable:
        """The (possibly shared) table holding active mocks."""
        return self._mocks

    def mock(self, service_id: str, substitute: Any) -> Any:
        """Substitute *substitute* for the service *service_id*.

        Returns the substitute unchanged.

        Raises:
            InvalidOverrideError: The wrapped locator does not know *service_id*.
            DuplicateOverrideError: *service_id* is already mocked.
        """
        if not self._locator.exists(service_id):
            raise InvalidOverrideError(service_id)

        if self.has_mock(service_id):
            raise DuplicateOverrideError(service_id)

        self._mocks[service_id] = substitute
        logger.debug("Mocked service %r with %s", service_id, type(substitute).__name__)
        return substitute

    def unmock(self, service_id: str) -> None:
        """Remove the mock for *service_id*; does nothing if it is not mocked."""
        if service_id in self._mocks:
            del self._mocks[service_id]
            logger.debug("Unmocked service %r", service_id)

    def clear_mocks(self) -> None:
        """Remove every active mock."""
        count = len(self._mocks)
        self._mocks.clear()
        logger.debug("Cleared %d mocks", count)

    def has(self, service_id: str) -> bool:
        """Check if *service_id* is mocked or known to the wrapped locator."""
        return self.has_mock(service_id) or self._locator.exists(service_id)

    exists = has

    def has_mock(self, service_id: str) -> bool:
        """Check if *service_id* currently has an active mock."""
        return service_id in self._mocks

    def resolve(self, service_id: str) -> Any:
        """Return the mock for *service_id* if any, else the real service."""
        if self.has_mock(service_id):
            return self._mocks[service_id]
        return self._locator.resolve(service_id)

    def list_mocks(self) -> Mapping[str, Any]:
        """Return a read-only snapshot of the active mocks."""
        return self._mocks.snapshot()

    def __getattr__(self, name: str) -> Any:
        # Only reached for names not defined on MockableContainer.
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self._locator, name)
