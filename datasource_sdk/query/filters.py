"""
Translation of declarative filter/sort/pagination requests into SQLAlchemy
statements.

Statements are built from lightweight ``table()``/``column()`` constructs so no
reflection is needed and filter columns render unqualified
(``WHERE name LIKE '%an%'``).
"""

import operator
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from sqlalchemy import (
    ColumnElement,
    Select,
    TableClause,
    column,
    func,
    literal_column,
    select,
    table,
)

from datasource_sdk.dto.query import Filter, FilterCondition, OrderDirection, RecordsQuery

FilterLike = Union[Filter, Dict[str, Any]]

OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "LIKE": lambda col, value: col.like(value),
    "NOT LIKE": lambda col, value: col.not_like(value),
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}

_CONDITION_OPERATORS = {
    FilterCondition.IS.value: "=",
    FilterCondition.IS_NOT.value: "!=",
    FilterCondition.CONTAINS.value: "LIKE",
    FilterCondition.NOT_CONTAINS.value: "NOT LIKE",
    FilterCondition.STARTS_WITH.value: "LIKE",
    FilterCondition.ENDS_WITH.value: "LIKE",
    FilterCondition.IS_EMPTY.value: "LIKE",
    FilterCondition.IS_NOT_EMPTY.value: "LIKE",
    FilterCondition.GT.value: ">",
    FilterCondition.GTE.value: ">=",
    FilterCondition.LT.value: "<",
    FilterCondition.LTE.value: "<=",
}


def _condition(filter: Filter) -> str:
    condition = filter.condition
    return condition.value if isinstance(condition, Enum) else str(condition)


def to_filter(filter: FilterLike) -> Filter:
    return filter if isinstance(filter, Filter) else Filter.model_validate(filter)


def get_condition(filter: FilterLike) -> str:
    """SQL operator of a filter. Unknown conditions fall back to equality."""
    return _CONDITION_OPERATORS.get(_condition(to_filter(filter)), "=")


def get_value(filter: FilterLike) -> Any:
    """
    Value of a filter, transformed for its operator.

    ``is_empty``/``is_not_empty`` compare against the empty string with LIKE,
    they don't test for NULL.
    """
    filter = to_filter(filter)
    condition = _condition(filter)

    if condition in (
        FilterCondition.CONTAINS.value,
        FilterCondition.NOT_CONTAINS.value,
    ):
        return f"%{filter.value}%"
    if condition == FilterCondition.STARTS_WITH.value:
        return f"{filter.value}%"
    if condition == FilterCondition.ENDS_WITH.value:
        return f"%{filter.value}"
    if condition in (
        FilterCondition.IS_EMPTY.value,
        FilterCondition.IS_NOT_EMPTY.value,
    ):
        return ""

    return filter.value


def get_filter_clause(filter: FilterLike) -> ColumnElement:
    filter = to_filter(filter)
    return OPERATORS[get_condition(filter)](column(filter.column_name), get_value(filter))


def add_filter_to_query(statement: Select, filter: FilterLike) -> Select:
    return statement.where(get_filter_clause(filter))


def apply_filters(statement: Select, filters: Optional[Iterable[FilterLike]]) -> Select:
    """AND every filter onto the statement, in the given order."""
    for filter in filters or []:
        statement = add_filter_to_query(statement, filter)
    return statement


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def get_table(table_name: str, *columns: str, schema: Optional[str] = None) -> TableClause:
    return table(table_name, *(column(name) for name in columns), schema=schema)


def build_query(
    table_name: str,
    query: Optional[RecordsQuery] = None,
    schema: Optional[str] = None,
    **kwargs: Any,
) -> Select:
    """
    Compile a records request into a SELECT statement.

    Pagination (LIMIT, OFFSET and the ``select`` projection) only applies when
    both ``limit`` and ``offset`` are numbers, otherwise every column of every
    matching row is selected.

    Args:
        table_name: The table to read.
        query: The request; keyword arguments build one when omitted.
        schema: Optional schema the table lives in.

    Returns:
        Select: The executable statement.
    """
    if query is None:
        query = RecordsQuery.model_validate(kwargs)

    source = get_table(table_name, schema=schema)
    paginate = is_number(query.limit) and is_number(query.offset)

    if paginate and query.select:
        statement = select(*(column(name) for name in query.select)).select_from(source)
    else:
        statement = select(literal_column("*")).select_from(source)

    if paginate:
        statement = statement.limit(int(query.limit)).offset(int(query.offset))

    statement = apply_filters(statement, query.filters)

    if query.order_by:
        order_column = get_table(table_name, query.order_by, schema=schema).c[
            query.order_by
        ]
        direction = (query.order_direction or "").lower()
        statement = statement.order_by(
            order_column.desc()
            if direction == OrderDirection.DESC.value
            else order_column.asc()
        )

    return statement


def build_count_query(
    table_name: str,
    filters: Optional[List[FilterLike]] = None,
    schema: Optional[str] = None,
) -> Select:
    statement = select(func.count().label("count")).select_from(
        get_table(table_name, schema=schema)
    )
    return apply_filters(statement, filters)


def build_primary_key_clause(primary_key: str, record_id: Any) -> ColumnElement:
    return column(primary_key) == record_id


def build_record_query(
    table_name: str,
    primary_key: str,
    record_id: Any,
    columns: Optional[List[str]] = None,
    schema: Optional[str] = None,
) -> Select:
    """SELECT a single row by primary key, projected on ``columns`` when given."""
    projection = [column(name) for name in columns] if columns else [literal_column("*")]
    return (
        select(*projection)
        .select_from(get_table(table_name, schema=schema))
        .where(build_primary_key_clause(primary_key, record_id))
    )


def build_primary_keys_clause(primary_key: str, record_ids: Iterable[Any]) -> ColumnElement:
    return column(primary_key).in_(list(record_ids))


__all__ = [
    "OPERATORS",
    "add_filter_to_query",
    "apply_filters",
    "build_count_query",
    "build_primary_key_clause",
    "build_primary_keys_clause",
    "build_query",
    "build_record_query",
    "get_condition",
    "get_filter_clause",
    "get_table",
    "get_value",
    "is_number",
    "to_filter",
]
