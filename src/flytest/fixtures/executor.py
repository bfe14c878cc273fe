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
"""FixtureExecutor — purges the database and loads fixtures in one transaction."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from flytest.fixtures.exceptions import FixtureError
from flytest.fixtures.fixture import Fixture, ReferenceRepository
from flytest.fixtures.purger import Purger

logger = logging.getLogger(__name__)


class FixtureExecutor:
    """Executes fixtures against a SQLAlchemy session.

    Fixtures loaded by the same executor share one
    :class:`ReferenceRepository`. The whole run is committed at the end,
    or rolled back if any fixture fails.
    """

    def __init__(self, session: Session, purger: Purger | None = None) -> None:
        self.session = session
        self.purger = purger
        self.reference_repository = ReferenceRepository()

    def execute(self, fixtures: Iterable[Fixture], append: bool = False) -> None:
        """Load *fixtures*, purging the database first unless *append*."""
        try:
            if not append:
                if self.purger is None:
                    raise FixtureError(
                        "Cannot purge before loading fixtures: no purger configured",
                        code="FIXTURE_NO_PURGER",
                    )
                self.purger.purge()

            for fixture in fixtures:
                self.load(fixture)

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def load(self, fixture: Fixture) -> None:
        """Load a single fixture and flush it."""
        logger.debug("Loading fixture %s", type(fixture).__name__)
        fixture.reference_repository = self.reference_repository
        fixture.load(self.session)
        self.session.flush()
