from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FilterCondition(str, Enum):
    IS = "is"
    IS_NOT = "is_not"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="


class OrderDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class Filter(BaseModel):
    """
    A single declarative filter condition.

    ``condition`` is kept as a plain string so conditions outside
    FilterCondition reach the translator, which falls back to equality.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    column_name: str
    condition: str = FilterCondition.IS.value
    value: Any = None


class RecordsQuery(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    filters: List[Filter] = Field(default_factory=list)
    order_by: Optional[str] = None
    order_direction: Optional[str] = None
    limit: Optional[Any] = None
    offset: Optional[Any] = None
    select: List[str] = Field(default_factory=list)
