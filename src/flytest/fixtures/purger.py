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
"""Purger — empties every table of the database behind a session."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum

from sqlalchemy import MetaData, text
from sqlalchemy.orm import Session

logger = logging.getLogger(__name__)


class PurgeMode(Enum):
    """How table contents are removed."""

    DELETE = "delete"
    TRUNCATE = "truncate"


class Purger:
    """Removes all rows from all tables reachable through *session*.

    The schema is reflected from the live database, so tables created
    outside the ORM are purged too. Tables are emptied children first
    to respect foreign keys. Changes are not committed.
    """

    def __init__(
        self,
        session: Session,
        purge_mode: PurgeMode = PurgeMode.DELETE,
        excluded: Iterable[str] = (),
    ) -> None:
        self.session = session
        self.purge_mode = purge_mode
        self.excluded = frozenset(excluded)

    def purge(self) -> list[str]:
        """Empty the tables and return their names in purge order."""
        connection = self.session.connection()
        metadata = MetaData()
        metadata.reflect(bind=connection)

        tables = [t for t in reversed(metadata.sorted_tables) if t.name not in self.excluded]
        preparer = connection.dialect.identifier_preparer

        for table in tables:
            if self.purge_mode is PurgeMode.TRUNCATE:
                self.session.execute(text(f"TRUNCATE TABLE {preparer.format_table(table)}"))
            else:
                self.session.execute(table.delete())

        self.session.expunge_all()
        logger.debug("Purged %d tables (%s)", len(tables), self.purge_mode.value)
        return [t.name for t in tables]
