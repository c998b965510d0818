import pytest
from catalogue.search.lookups import MemoryLiteralContains, SQLLiteralContains, escape_like
from sqlalchemy import Column, Integer, String, create_engine, select
from sqlalchemy.orm import DeclarativeBase, Session

NAMES = [
    "100% Wool Socks",
    "Wool Socks",
    "snake_case mug",
    "snakecase poster",
    "Rain Jacket",
    "C:\\drive sticker",
]


class Base(DeclarativeBase):
    pass


class Row(Base):
    __tablename__ = "rows"

    id = Column(Integer, primary_key=True)
    name = Column(String(100))


@pytest.fixture()
def session():
    engine = create_engine("sqlite://")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(Row(name=name) for name in NAMES)
        session.commit()
        yield session
    engine.dispose()


def _sql_matches(session, term):
    expression = SQLLiteralContains("name", term, database_model_cls=Row).as_expression()
    return sorted(session.scalars(select(Row.name).where(expression)))


class TestEscapeLike:
    def test_wildcards_and_escape_are_escaped(self):
        assert escape_like("100%_a\\b") == "100\\%\\_a\\\\b"

    def test_plain_text_is_unchanged(self):
        assert escape_like("wool socks") == "wool socks"


class TestSQLLiteralContains:
    def test_percent_is_literal(self, session):
        assert _sql_matches(session, "%") == ["100% Wool Socks"]

    def test_underscore_is_literal(self, session):
        assert _sql_matches(session, "_") == ["snake_case mug"]

    def test_backslash_is_literal(self, session):
        assert _sql_matches(session, "\\") == ["C:\\drive sticker"]

    def test_match_is_case_insensitive(self, session):
        assert _sql_matches(session, "WOOL") == ["100% Wool Socks", "Wool Socks"]


class TestMemoryLiteralContains:
    @pytest.mark.parametrize(
        "source, term, expected",
        [
            ("100% Wool Socks", "%", True),
            ("Wool Socks", "%", False),
            ("snake_case mug", "_", True),
            ("snakecase poster", "_", False),
            ("Rain Jacket", "JACK", True),
            ("A.C adapter", "a.c", True),
            ("abc", "a.c", False),
            ("Rain Jacket", ".*", False),
        ],
    )
    def test_evaluate(self, source, term, expected):
        assert MemoryLiteralContains(source, term).evaluate() is expected
