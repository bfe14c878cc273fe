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
"""FixtureLoader — collects fixtures and orders them for execution."""

from __future__ import annotations

import inspect
import logging
from types import ModuleType

from flytest.fixtures.exceptions import FixtureDependencyError
from flytest.fixtures.fixture import Fixture

logger = logging.getLogger(__name__)


class FixtureLoader:
    """Holds one fixture instance per fixture class.

    Adding a fixture also adds (instantiates) the fixtures it depends on.
    :meth:`get_fixtures` returns them with dependencies first, otherwise
    by ascending ``order`` and then insertion order.
    """

    def __init__(self) -> None:
        self._fixtures: dict[type[Fixture], Fixture] = {}

    def add_fixture(self, fixture: Fixture) -> None:
        fixture_type = type(fixture)
        if fixture_type in self._fixtures:
            return

        for dependency in fixture.dependencies:
            if not (isinstance(dependency, type) and issubclass(dependency, Fixture)):
                raise FixtureDependencyError(
                    f"{fixture_type.__name__} depends on {dependency!r}, which is not a Fixture class",
                    code="FIXTURE_INVALID_DEPENDENCY",
                )

        self._fixtures[fixture_type] = fixture
        logger.debug("Added fixture %s", fixture_type.__name__)

        for dependency in fixture.dependencies:
            if dependency not in self._fixtures:
                self.add_fixture(dependency())

    def has_fixture(self, fixture: Fixture | type[Fixture]) -> bool:
        fixture_type = fixture if isinstance(fixture, type) else type(fixture)
        return fixture_type in self._fixtures

    def load_from_module(self, module: ModuleType) -> list[Fixture]:
        """Add an instance of every concrete Fixture class defined in *module*."""
        added: list[Fixture] = []
        for _, obj in inspect.getmembers(module, inspect.isclass):
            if (
                issubclass(obj, Fixture)
                and obj.__module__ == module.__name__
                and not inspect.isabstract(obj)
                and obj not in self._fixtures
            ):
                fixture = obj()
                self.add_fixture(fixture)
                added.append(fixture)
        return added

    def get_fixtures(self) -> list[Fixture]:
        ordered = sorted(self._fixtures.values(), key=lambda f: f.order)
        result: list[Fixture] = []
        done: set[type[Fixture]] = set()
        visiting: list[type[Fixture]] = []

        def visit(fixture: Fixture) -> None:
            fixture_type = type(fixture)
            if fixture_type in done:
                return
            if fixture_type in visiting:
                chain = " -> ".join(t.__name__ for t in [*visiting, fixture_type])
                raise FixtureDependencyError(
                    f"Circular fixture dependency: {chain}",
                    code="FIXTURE_CIRCULAR_DEPENDENCY",
                )
            visiting.append(fixture_type)
            for dependency in fixture.dependencies:
                visit(self._fixtures[dependency])
            visiting.pop()
            done.add(fixture_type)
            result.append(fixture)

        for fixture in ordered:
            visit(fixture)
        return result
