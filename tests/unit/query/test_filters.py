import pytest
from hypothesis import given
from hypothesis import strategies as st
from sqlalchemy import ClauseElement

from datasource_sdk.dto.query import Filter, FilterCondition, RecordsQuery
from datasource_sdk.query.filters import (
    build_count_query,
    build_primary_keys_clause,
    build_query,
    build_record_query,
    get_condition,
    get_value,
    is_number,
)
from datasource_sdk.test_utils.hypothesis.strategies.query.filters import (
    filter_payload_strategy,
    non_numeric_bound_strategy,
    pagination_strategy,
    unknown_condition_strategy,
)


def to_sql(statement: ClauseElement) -> str:
    return " ".join(
        str(statement.compile(compile_kwargs={"literal_binds": True})).split()
    )


class TestFilterTranslation:
    @pytest.mark.parametrize(
        "condition,operator,value",
        [
            ("is", "=", "Ada"),
            ("is_not", "!=", "Ada"),
            ("contains", "LIKE", "%Ada%"),
            ("not_contains", "NOT LIKE", "%Ada%"),
            ("starts_with", "LIKE", "Ada%"),
            ("ends_with", "LIKE", "%Ada"),
            ("is_empty", "LIKE", ""),
            ("is_not_empty", "LIKE", ""),
            (">", ">", "Ada"),
            (">=", ">=", "Ada"),
            ("<", "<", "Ada"),
            ("<=", "<=", "Ada"),
        ],
    )
    def test_condition_table(self, condition: str, operator: str, value: str) -> None:
        filter = {"columnName": "name", "condition": condition, "value": "Ada"}

        assert get_condition(filter) == operator
        assert get_value(filter) == value

    def test_accepts_enum_conditions(self) -> None:
        filter = Filter(column_name="name", condition=FilterCondition.CONTAINS, value="x")

        assert get_condition(filter) == "LIKE"
        assert get_value(filter) == "%x%"

    def test_condition_defaults_to_is(self) -> None:
        assert get_condition({"columnName": "name", "value": "Ada"}) == "="

    @given(condition=unknown_condition_strategy)
    def test_unknown_conditions_fall_back_to_equality(self, condition: str) -> None:
        filter = {"columnName": "name", "condition": condition, "value": "Ada"}

        assert get_condition(filter) == "="
        assert get_value(filter) == "Ada"

    @given(payload=filter_payload_strategy)
    def test_like_values_keep_the_raw_value(self, payload: dict) -> None:
        value = get_value(payload)

        if payload["condition"] in ("is_empty", "is_not_empty"):
            assert value == ""
        else:
            assert value.strip("%") == payload["value"]

    def test_is_number(self) -> None:
        assert is_number(0)
        assert is_number(2.5)
        assert not is_number(True)
        assert not is_number("10")
        assert not is_number(None)


class TestBuildQuery:
    def test_contains_filter(self) -> None:
        statement = build_query(
            "users",
            filters=[{"columnName": "name", "condition": "contains", "value": "an"}],
        )

        assert to_sql(statement) == "SELECT * FROM users WHERE name LIKE '%an%'"

    def test_filters_are_anded_in_order(self) -> None:
        statement = build_query(
            "users",
            filters=[
                {"columnName": "age", "condition": ">", "value": 18},
                {"columnName": "name", "condition": "is_not_empty"},
            ],
        )

        assert (
            to_sql(statement)
            == "SELECT * FROM users WHERE age > 18 AND name LIKE ''"
        )

    def test_pagination_with_select(self) -> None:
        statement = build_query(
            "users",
            RecordsQuery(limit=24, offset=48, select=["id", "email"]),
        )

        assert to_sql(statement) == "SELECT id, email FROM users LIMIT 24 OFFSET 48"

    def test_limit_without_offset_is_unpaginated(self) -> None:
        statement = build_query("users", limit=10, select=["id"])

        assert to_sql(statement) == "SELECT * FROM users"

    @given(limit=non_numeric_bound_strategy, offset=st.integers(min_value=0))
    def test_non_numeric_limit_disables_pagination(self, limit, offset: int) -> None:
        sql = to_sql(build_query("users", limit=limit, offset=offset))

        assert "LIMIT" not in sql
        assert "OFFSET" not in sql

    @given(bounds=pagination_strategy)
    def test_numeric_bounds_paginate(self, bounds: tuple) -> None:
        limit, offset = bounds
        sql = to_sql(build_query("users", limit=limit, offset=offset))

        assert sql.endswith(f"LIMIT {limit} OFFSET {offset}")

    def test_order_by(self) -> None:
        ascending = build_query("users", orderBy="email")
        descending = build_query("users", order_by="email", order_direction="DESC")

        assert to_sql(ascending) == "SELECT * FROM users ORDER BY users.email ASC"
        assert to_sql(descending) == "SELECT * FROM users ORDER BY users.email DESC"

    def test_schema_qualified_table(self) -> None:
        statement = build_query("users", schema="crm")

        assert to_sql(statement) == "SELECT * FROM crm.users"


class TestOtherStatements:
    def test_count_query(self) -> None:
        assert to_sql(build_count_query("users")) == "SELECT count(*) AS count FROM users"

    def test_count_query_with_filters(self) -> None:
        statement = build_count_query(
            "users", [{"columnName": "name", "condition": "starts_with", "value": "A"}]
        )

        assert (
            to_sql(statement)
            == "SELECT count(*) AS count FROM users WHERE name LIKE 'A%'"
        )

    def test_record_query(self) -> None:
        statement = build_record_query("users", "id", 7, columns=["email"])

        assert to_sql(statement) == "SELECT email FROM users WHERE id = 7"

    def test_primary_keys_clause(self) -> None:
        assert to_sql(build_primary_keys_clause("id", [1, 2, 3])) == "id IN (1, 2, 3)"
