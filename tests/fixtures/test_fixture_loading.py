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
"""Tests for fixture loading, ordering, references and purging on SQLite."""

import sys

import pytest
from sqlalchemy import ForeignKey, String, create_engine, func, select, text
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column

from flytest.fixtures import (
    Fixture,
    FixtureDependencyError,
    FixtureError,
    FixtureExecutor,
    FixtureLoader,
    PurgeMode,
    Purger,
    ReferenceRepository,
)


class Base(DeclarativeBase):
    pass


class Author(Base):
    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100))


class Book(Base):
    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(100))
    author_id: Mapped[int] = mapped_column(ForeignKey("authors.id"))


class AuthorFixture(Fixture):
    def load(self, session: Session) -> None:
        author = Author(name="Ursula")
        session.add(author)
        session.flush()
        self.add_reference("author-ursula", author)


class BookFixture(Fixture):
    dependencies = (AuthorFixture,)

    def load(self, session: Session) -> None:
        author = self.get_reference("author-ursula")
        session.add(Book(title="The Dispossessed", author_id=author.id))


class LateFixture(Fixture):
    order = 10

    def load(self, session: Session) -> None:
        session.add(Author(name="Late"))


class EarlyFixture(Fixture):
    order = -5

    def load(self, session: Session) -> None:
        session.add(Author(name="Early"))


class BrokenFixture(Fixture):
    def load(self, session: Session) -> None:
        session.add(Author(name="Half"))
        raise RuntimeError("fixture exploded")


class CycleA(Fixture):
    def load(self, session: Session) -> None:
        pass


class CycleB(Fixture):
    dependencies = (CycleA,)

    def load(self, session: Session) -> None:
        pass


CycleA.dependencies = (CycleB,)


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    engine.dispose()


def count(session: Session, model: type) -> int:
    return session.scalar(select(func.count()).select_from(model))


class TestFixtureLoader:
    def test_dependencies_are_added_and_ordered_first(self):
        loader = FixtureLoader()
        loader.add_fixture(BookFixture())
        fixtures = loader.get_fixtures()
        assert [type(f) for f in fixtures] == [AuthorFixture, BookFixture]

    def test_duplicate_fixture_class_is_ignored(self):
        loader = FixtureLoader()
        first = AuthorFixture()
        loader.add_fixture(first)
        loader.add_fixture(AuthorFixture())
        assert loader.get_fixtures() == [first]

    def test_order_sorts_independent_fixtures(self):
        loader = FixtureLoader()
        loader.add_fixture(LateFixture())
        loader.add_fixture(AuthorFixture())
        loader.add_fixture(EarlyFixture())
        assert [type(f) for f in loader.get_fixtures()] == [EarlyFixture, AuthorFixture, LateFixture]

    def test_circular_dependencies_raise(self):
        loader = FixtureLoader()
        loader.add_fixture(CycleA())
        with pytest.raises(FixtureDependencyError, match="Circular fixture dependency"):
            loader.get_fixtures()

    def test_invalid_dependency_raises(self):
        class NotAFixtureDependent(Fixture):
            dependencies = (str,)  # type: ignore[assignment]

            def load(self, session: Session) -> None:
                pass

        with pytest.raises(FixtureDependencyError, match="not a Fixture class"):
            FixtureLoader().add_fixture(NotAFixtureDependent())

    def test_load_from_module(self):
        loader = FixtureLoader()
        added = loader.load_from_module(sys.modules[__name__])
        added_types = {type(f) for f in added}
        assert {AuthorFixture, BookFixture, EarlyFixture, LateFixture} <= added_types
        assert loader.has_fixture(BookFixture)


class TestReferenceRepository:
    def test_add_and_get(self):
        refs = ReferenceRepository()
        refs.add_reference("admin", "alice")
        assert refs.has_reference("admin")
        assert refs.get_reference("admin") == "alice"
        assert refs.names() == ["admin"]

    def test_add_existing_raises_but_set_overrides(self):
        refs = ReferenceRepository()
        refs.add_reference("admin", "alice")
        with pytest.raises(FixtureError, match="already exists"):
            refs.add_reference("admin", "bob")
        refs.set_reference("admin", "bob")
        assert refs.get_reference("admin") == "bob"

    def test_missing_reference_raises(self):
        with pytest.raises(FixtureError, match='Reference to "ghost" does not exist'):
            ReferenceRepository().get_reference("ghost")

    def test_fixture_without_repository_raises(self):
        with pytest.raises(FixtureError, match="no reference repository"):
            AuthorFixture().get_reference("author-ursula")


class TestPurger:
    def test_purge_empties_tables_children_first(self, session: Session):
        session.add(Author(id=1, name="A"))
        session.flush()
        session.add(Book(title="B", author_id=1))
        session.commit()

        purged = Purger(session).purge()
        session.commit()

        assert purged == ["books", "authors"]
        assert count(session, Author) == 0
        assert count(session, Book) == 0

    def test_excluded_tables_are_kept(self, session: Session):
        session.add(Author(name="Kept"))
        session.commit()

        purged = Purger(session, excluded=["authors"]).purge()
        session.commit()

        assert purged == ["books"]
        assert count(session, Author) == 1

    def test_purges_tables_outside_the_orm(self, session: Session):
        session.execute(text("CREATE TABLE audit_log (id INTEGER PRIMARY KEY, line TEXT)"))
        session.execute(text("INSERT INTO audit_log (line) VALUES ('x')"))
        session.commit()

        assert "audit_log" in Purger(session).purge()
        assert session.scalar(text("SELECT COUNT(*) FROM audit_log")) == 0

    def test_purge_mode_defaults_to_delete(self, session: Session):
        assert Purger(session).purge_mode is PurgeMode.DELETE


class TestFixtureExecutor:
    def test_execute_purges_then_loads(self, session: Session):
        session.add(Author(name="Stale"))
        session.commit()

        loader = FixtureLoader()
        loader.add_fixture(BookFixture())
        FixtureExecutor(session, Purger(session)).execute(loader.get_fixtures())

        assert session.scalars(select(Author.name)).all() == ["Ursula"]
        assert session.scalars(select(Book.title)).all() == ["The Dispossessed"]

    def test_append_keeps_existing_rows(self, session: Session):
        session.add(Author(name="Existing"))
        session.commit()

        FixtureExecutor(session).execute([AuthorFixture()], append=True)

        assert sorted(session.scalars(select(Author.name)).all()) == ["Existing", "Ursula"]

    def test_references_are_shared_between_fixtures(self, session: Session):
        executor = FixtureExecutor(session)
        executor.execute([AuthorFixture(), BookFixture()], append=True)
        assert executor.reference_repository.has_reference("author-ursula")

    def test_purge_without_purger_raises(self, session: Session):
        with pytest.raises(FixtureError, match="no purger configured"):
            FixtureExecutor(session).execute([AuthorFixture()])

    def test_failure_rolls_back(self, session: Session):
        with pytest.raises(RuntimeError, match="fixture exploded"):
            FixtureExecutor(session).execute([AuthorFixture(), BrokenFixture()], append=True)
        assert count(session, Author) == 0
