"""Tests for declarative filters, pagination clamping and SQL compilation."""

from datetime import UTC, date, datetime

import pytest
from sqlmodel import Session, col, create_engine, select

from src.core.domain.filters import (
    FilterOperator,
    FilterQuery,
    FilterRule,
    clamp_pagination,
    start_of_day,
    wildcard,
)
from src.core.infrastructure.database.filters import compile_filter
from src.modules.applications.infrastructure.models import ApplicationModel
from src.modules.users.application.queries import UserQuery
from src.modules.users.infrastructure.models import UserModel


class TestClampPagination:
    def test_defaults(self) -> None:
        pagination = clamp_pagination()
        assert pagination.offset == 0
        assert pagination.limit == 10

    @pytest.mark.parametrize(
        ("limit", "expected"),
        [(0, 1), (-5, 1), (1, 1), (50, 50), (9999, 9999), (100000, 9999)],
    )
    def test_limit_is_clamped(self, limit: int, expected: int) -> None:
        assert clamp_pagination(limit=limit).limit == expected

    def test_negative_offset_floors_at_zero(self) -> None:
        assert clamp_pagination(offset=-3).offset == 0

    def test_query_model_pagination(self) -> None:
        pagination = UserQuery(offset=20, limit=100000).pagination()
        assert (pagination.offset, pagination.limit) == (20, 9999)


class TestActiveFilters:
    def test_empty_query_has_no_filters(self) -> None:
        assert UserQuery().active_filters() == []
        assert compile_filter(UserQuery(), UserModel) == []

    def test_pagination_fields_are_not_filters(self) -> None:
        assert UserQuery(offset=5, limit=5).active_filters() == []

    def test_transform_is_applied(self) -> None:
        active = UserQuery(name="ali").active_filters()
        assert len(active) == 1
        rule, value = active[0]
        assert rule.operator == FilterOperator.LIKE
        assert value == "%ali%"

    def test_unknown_query_field_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            UserQuery(nickname="x")

    def test_helpers(self) -> None:
        assert wildcard("a") == "%a%"
        assert start_of_day(date(2024, 3, 1)) == datetime(2024, 3, 1, tzinfo=UTC)


class _BadQuery(FilterQuery):
    filter_rules = (FilterRule("nickname"),)

    nickname: str | None = None


def test_missing_column_is_a_configuration_error() -> None:
    with pytest.raises(ValueError, match="nickname"):
        compile_filter(_BadQuery(nickname="x"), UserModel)


def test_same_query_compiles_against_another_table() -> None:
    clauses = compile_filter(UserQuery(name="bill"), ApplicationModel)
    assert len(clauses) == 1
    assert "applications.name" in str(clauses[0])


@pytest.fixture
def session():
    engine = create_engine("sqlite://")
    UserModel.__table__.create(engine)
    with Session(engine) as session:
        for name, email, created in [
            ("alice", "alice@example.com", datetime(2024, 1, 10, 12, tzinfo=UTC)),
            ("alicia", "alicia@example.com", datetime(2024, 2, 1, 0, tzinfo=UTC)),
            ("bob", "bob@example.com", datetime(2024, 2, 15, 8, tzinfo=UTC)),
        ]:
            session.add(
                UserModel(
                    name=name,
                    email=email,
                    password_hash="x",
                    created_at=created,
                    updated_at=created,
                )
            )
        session.commit()
        yield session
    engine.dispose()


def _names(session: Session, query: UserQuery) -> list[str]:
    statement = (
        select(UserModel.name)
        .where(*compile_filter(query, UserModel))
        .order_by(col(UserModel.name))
    )
    return list(session.exec(statement).all())


class TestCompiledFiltersAgainstDatabase:
    def test_no_filters_returns_everything(self, session: Session) -> None:
        assert _names(session, UserQuery()) == ["alice", "alicia", "bob"]

    def test_name_substring(self, session: Session) -> None:
        assert _names(session, UserQuery(name="ali")) == ["alice", "alicia"]

    def test_created_range_is_half_open(self, session: Session) -> None:
        query = UserQuery(created_start=date(2024, 2, 1), created_end=date(2024, 2, 15))
        assert _names(session, query) == ["alicia"]

    def test_filters_are_combined_with_and(self, session: Session) -> None:
        query = UserQuery(name="ali", created_start=date(2024, 1, 15))
        assert _names(session, query) == ["alicia"]

    def test_exact_id(self, session: Session) -> None:
        user_id = session.exec(
            select(UserModel.id).where(UserModel.name == "bob")
        ).one()
        assert _names(session, UserQuery(id=user_id)) == ["bob"]
