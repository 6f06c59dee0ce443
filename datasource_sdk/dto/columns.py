from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FieldType(str, Enum):
    """Semantic UI/validation category of a column."""

    ID = "Id"
    TEXT = "Text"
    NUMBER = "Number"
    BOOLEAN = "Boolean"
    DATETIME = "DateTime"
    SELECT = "Select"
    TEXTAREA = "Textarea"
    JSON = "Json"
    ASSOCIATION = "Association"


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, use_enum_values=False
    )


class ForeignKeyInfo(CamelModel):
    """One outgoing reference edge, many-to-one from column_name to the foreign column."""

    constraint_name: Optional[str] = None
    table_name: str
    column_name: str
    foreign_table_name: str
    foreign_column_name: Optional[str] = None
    foreign_table_schema: Optional[str] = None
    on_update: Optional[str] = None
    on_delete: Optional[str] = None


class TableInfo(CamelModel):
    name: str
    schema_name: Optional[str] = Field(default=None, alias="schema")
    comment: Optional[str] = None


class StoredColumn(CamelModel):
    """
    Admin authored overrides persisted independently of the live schema.

    ``field_type`` keeps unknown names as plain strings, they are dropped when
    the column is resolved.
    """

    field_type: Optional[Union[FieldType, str]] = None
    label: Optional[str] = None
    base_options: Optional[Dict[str, Any]] = None
    field_options: Optional[Dict[str, Any]] = None


class Column(CamelModel):
    name: str
    label: str
    primary_key: bool = False
    data_source_info: Dict[str, Any] = Field(default_factory=dict)
    foreign_key_info: Optional[ForeignKeyInfo] = None
    field_type: FieldType
    base_options: Dict[str, Any] = Field(default_factory=dict)
    field_options: Dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with camelCase keys and plain string enums."""
        return self.model_dump(by_alias=True, mode="json")
