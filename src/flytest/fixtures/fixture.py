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
"""Fixture base class and the reference repository shared between fixtures."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from sqlalchemy.orm import Session

from flytest.fixtures.exceptions import FixtureError


class ReferenceRepository:
    """Named objects that fixtures publish for later fixtures to reuse."""

    def __init__(self) -> None:
        self._references: dict[str, Any] = {}

    def set_reference(self, name: str, obj: Any) -> None:
        """Store *obj* under *name*, replacing any previous reference."""
        self._references[name] = obj

    def add_reference(self, name: str, obj: Any) -> None:
        """Store *obj* under *name*; the name must not be taken yet."""
        if name in self._references:
            raise FixtureError(
                f'Reference to "{name}" already exists, use set_reference() to override it',
                code="FIXTURE_REFERENCE_EXISTS",
            )
        self._references[name] = obj

    def get_reference(self, name: str) -> Any:
        if name not in self._references:
            raise FixtureError(
                f'Reference to "{name}" does not exist',
                code="FIXTURE_REFERENCE_MISSING",
            )
        return self._references[name]

    def has_reference(self, name: str) -> bool:
        return name in self._references

    def names(self) -> list[str]:
        return list(self._references)


class Fixture(ABC):
    """A predefined set of rows written to the database before a test.

    Subclasses implement :meth:`load`. ``order`` sorts independent
    fixtures (lower first); ``dependencies`` lists fixture classes that
    must be loaded before this one.

    Usage::

        class UserFixture(Fixture):
            def load(self, session: Session) -> None:
                admin = User(name="admin")
                session.add(admin)
                self.add_reference("admin-user", admin)
    """

    order: ClassVar[int] = 0
    dependencies: ClassVar[tuple[type[Fixture], ...]] = ()

    reference_repository: ReferenceRepository | None = None

    @abstractmethod
    def load(self, session: Session) -> None:
        """Add this fixture's rows to *session*."""

    def _references(self) -> ReferenceRepository:
        if self.reference_repository is None:
            raise FixtureError(
                f"{type(self).__name__} has no reference repository; load it through a FixtureExecutor",
                code="FIXTURE_NO_REFERENCES",
            )
        return self.reference_repository

    def add_reference(self, name: str, obj: Any) -> None:
        self._references().add_reference(name, obj)

    def set_reference(self, name: str, obj: Any) -> None:
        self._references().set_reference(name, obj)

    def get_reference(self, name: str) -> Any:
        return self._references().get_reference(name)

    def has_reference(self, name: str) -> bool:
        return self._references().has_reference(name)
