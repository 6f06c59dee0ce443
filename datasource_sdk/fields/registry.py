"""
Static registry of the default field options of each field type.

Not every field type defines options; a lookup for such a type is a normal
miss and returns None.
"""

import copy
import inspect
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from datasource_sdk.dto.columns import FieldType

FieldOptions = Dict[str, Any]
FieldOptionsProvider = Union[
    FieldOptions,
    Callable[[], FieldOptions],
    Callable[[], Awaitable[FieldOptions]],
]

DEFAULT_FIELD_OPTIONS: Dict[FieldType, FieldOptions] = {
    FieldType.SELECT: {"options": ""},
    FieldType.ASSOCIATION: {"nameColumn": None},
    FieldType.DATETIME: {"showDate": True, "showTime": True},
    FieldType.NUMBER: {"displayAs": "number"},
    FieldType.TEXTAREA: {"rows": 5},
    FieldType.JSON: {"displayAs": "code"},
    FieldType.BOOLEAN: {"trueLabel": "Yes", "falseLabel": "No"},
}


class FieldOptionsRegistry:
    """Maps a field type to the provider of its default field options."""

    def __init__(self, providers: Optional[Dict[FieldType, FieldOptionsProvider]] = None):
        self._providers: Dict[FieldType, FieldOptionsProvider] = dict(
            DEFAULT_FIELD_OPTIONS if providers is None else providers
        )

    def register(self, field_type: FieldType, provider: FieldOptionsProvider) -> None:
        """
        Register the options provider of a field type.

        Args:
            field_type (FieldType): The field type.
            provider: A dict of options, or a sync/async callable returning one.
        """
        self._providers[FieldType(field_type)] = provider

    def unregister(self, field_type: FieldType) -> None:
        self._providers.pop(FieldType(field_type), None)

    def has(self, field_type: FieldType) -> bool:
        return FieldType(field_type) in self._providers

    async def get_options(self, field_type: FieldType) -> Optional[FieldOptions]:
        """
        Resolve the default options of a field type.

        Returns:
            A fresh copy of the options, or None when the type has no provider.
        """
        provider = self._providers.get(FieldType(field_type))
        if provider is None:
            return None

        if callable(provider):
            options = provider()
            if inspect.isawaitable(options):
                options = await options
        else:
            options = provider

        return copy.deepcopy(options) if options else {}


default_registry = FieldOptionsRegistry()
