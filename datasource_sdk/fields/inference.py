"""
Field type inference and column assembly.

The functions here are shared by every engine. Engine specific knowledge is
limited to the native type lookup table handed in by the SQL client.
"""

import asyncio
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union

from datasource_sdk.common.utils import humanize
from datasource_sdk.dto.columns import Column, FieldType, ForeignKeyInfo, StoredColumn
from datasource_sdk.fields import get_base_options, is_id_column
from datasource_sdk.fields.registry import FieldOptionsRegistry, default_registry
from datasource_sdk.observability.logger_adaptor import get_logger

logger = get_logger(__name__)

FieldTypeMap = Mapping[str, FieldType]
NativeInference = Callable[[str, str], FieldType]
StoredColumns = Union[
    Mapping[str, Union[StoredColumn, Dict[str, Any]]],
    Sequence[Dict[str, Any]],
]


def infer_field_type(
    native_type: Optional[str],
    has_foreign_key: bool,
    column_name: str,
    field_type_map: FieldTypeMap,
) -> FieldType:
    """
    Infer the field type of a column from its native type.

    Foreign keys win over everything. Native types missing from the map are
    Text. Numeric types (mapped to Number) become Id for id-like column names.

    Args:
        native_type: Normalized native type name (e.g. ``"character varying"``).
        has_foreign_key: Whether a foreign key originates from the column.
        column_name: The column name, used for the id naming convention.
        field_type_map: The engine's native type -> field type table.

    Returns:
        FieldType: The inferred field type.
    """
    if has_foreign_key:
        return FieldType.ASSOCIATION

    field_type = field_type_map.get((native_type or "").lower(), FieldType.TEXT)

    if field_type == FieldType.NUMBER and is_id_column(column_name):
        return FieldType.ID

    return field_type


def resolve_field_type(
    column_name: str,
    native_type: Optional[str],
    foreign_key_info: Optional[ForeignKeyInfo],
    stored_column: Optional[StoredColumn],
    infer_from_native: NativeInference,
    log=logger,
) -> FieldType:
    """
    Stored field type first, then native inference; a foreign key always forces Association.

    A stored field type that isn't a known FieldType is logged and ignored.
    """
    if foreign_key_info is not None:
        return FieldType.ASSOCIATION

    if stored_column is not None and stored_column.field_type:
        try:
            return FieldType(stored_column.field_type)
        except ValueError:
            log.warning(
                f"Unknown stored field type '{stored_column.field_type}' for "
                f"'{column_name}' field, inferring it from the native type."
            )

    return infer_from_native(native_type or "", column_name)


def merge_options(
    defaults: Optional[Dict[str, Any]], stored: Optional[Dict[str, Any]]
) -> Dict[str, Any]:
    """Shallow merge, stored keys replace default keys wholesale."""
    return {**(defaults or {}), **(stored or {})}


def get_column_label(
    name: str,
    stored_label: Optional[str] = None,
    native_label: Optional[str] = None,
) -> str:
    if stored_label:
        return stored_label
    if native_label:
        return native_label
    if name == "id":
        return "ID"

    return humanize(name)


def normalize_stored_columns(
    stored_columns: Optional[StoredColumns],
) -> Dict[str, StoredColumn]:
    """Accept a name -> config mapping or a list of configs carrying a ``name`` key."""
    if not stored_columns:
        return {}

    if isinstance(stored_columns, Mapping):
        items = stored_columns.items()
    else:
        items = [
            (entry["name"], entry) for entry in stored_columns if entry.get("name")
        ]

    normalized: Dict[str, StoredColumn] = {}
    for name, value in items:
        if value is None:
            continue
        normalized[name] = (
            value
            if isinstance(value, StoredColumn)
            else StoredColumn.model_validate(value)
        )
    return normalized


async def get_default_field_options_for_fields(
    columns: List[Dict[str, Any]],
    registry: FieldOptionsRegistry = default_registry,
    log=logger,
) -> Dict[str, Dict[str, Any]]:
    """
    Look up the default field options of every column concurrently.

    A registry miss or a failing provider leaves the column without options.
    """

    async def lookup(column: Dict[str, Any]):
        field_type = column["field_type"]
        try:
            options = await registry.get_options(field_type)
        except Exception as e:
            log.warning(
                f"Can't get the field options for '{column['name']}' field: {e}"
            )
            return None

        if options is None:
            log.warning(
                f"No field options registered for field type '{FieldType(field_type).value}' "
                f"('{column['name']}' field)."
            )
            return None

        return column["name"], options

    results = await asyncio.gather(*(lookup(column) for column in columns))

    return dict(result for result in results if result is not None)


async def build_columns(
    raw_columns: List[Dict[str, Any]],
    primary_keys: Sequence[str],
    foreign_keys: Sequence[ForeignKeyInfo],
    infer_from_native: NativeInference,
    stored_columns: Optional[StoredColumns] = None,
    registry: FieldOptionsRegistry = default_registry,
    log=logger,
) -> List[Column]:
    """
    Assemble the column model of a table.

    Every stage runs over all columns before the next one starts: source info,
    foreign keys, base options, field type, default field options, stored
    options and finally the label.
    """
    stored = normalize_stored_columns(stored_columns)
    foreign_keys_by_column_name = {fk.column_name: fk for fk in foreign_keys}
    primary_key_set = set(primary_keys)

    columns: List[Dict[str, Any]] = [
        {
            "name": raw["name"],
            "data_source_info": raw,
            "primary_key": raw["name"] in primary_key_set,
        }
        for raw in raw_columns
    ]

    for column in columns:
        column["foreign_key_info"] = foreign_keys_by_column_name.get(column["name"])

    base_options = get_base_options()
    for column in columns:
        column["base_options"] = dict(base_options)

    for column in columns:
        column["field_type"] = resolve_field_type(
            column["name"],
            column["data_source_info"].get("type"),
            column["foreign_key_info"],
            stored.get(column["name"]),
            infer_from_native,
            log=log,
        )

    field_options_by_field_name = await get_default_field_options_for_fields(
        columns, registry=registry, log=log
    )
    for column in columns:
        column["field_options"] = field_options_by_field_name.get(column["name"], {})

    for column in columns:
        stored_column = stored.get(column["name"])
        if stored_column is None:
            continue
        column["base_options"] = merge_options(
            column["base_options"], stored_column.base_options
        )
        column["field_options"] = merge_options(
            column["field_options"], stored_column.field_options
        )

    result: List[Column] = []
    for column in columns:
        stored_column = stored.get(column["name"])
        column["label"] = get_column_label(
            column["name"],
            stored_label=stored_column.label if stored_column else None,
            native_label=column["data_source_info"].get("label"),
        )
        result.append(Column(**column))

    return result
