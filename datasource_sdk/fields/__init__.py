from typing import Any, Dict

from datasource_sdk.constants import ID_COLUMN_SUFFIX, ID_COLUMNS
from datasource_sdk.dto.columns import FieldType

__all__ = ["FieldType", "get_base_options", "is_id_column"]


def get_base_options() -> Dict[str, Any]:
    """Options every field carries regardless of its field type.

    A new dict is returned on every call so callers can mutate it.
    """
    return {
        "visibility": ["index", "show", "edit", "new"],
        "required": False,
        "nullable": False,
        "nullValues": [],
        "readonly": False,
        "placeholder": "",
        "help": "",
        "label": "",
        "disconnected": False,
        "defaultValue": "",
        "computed": False,
    }


def is_id_column(name: str) -> bool:
    """Whether a column name follows the id naming convention (``id``, ``_id``, ``*_id``)."""
    lowered = name.lower()
    return lowered in ID_COLUMNS or lowered.endswith(ID_COLUMN_SUFFIX)
