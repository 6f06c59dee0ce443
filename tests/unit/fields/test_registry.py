import pytest

from datasource_sdk.dto.columns import FieldType
from datasource_sdk.fields.registry import DEFAULT_FIELD_OPTIONS, FieldOptionsRegistry


class TestFieldOptionsRegistry:
    @pytest.mark.asyncio
    async def test_default_options(self) -> None:
        registry = FieldOptionsRegistry()

        assert await registry.get_options(FieldType.BOOLEAN) == {
            "trueLabel": "Yes",
            "falseLabel": "No",
        }
        assert await registry.get_options("Select") == {"options": ""}

    @pytest.mark.asyncio
    async def test_miss_returns_none(self) -> None:
        registry = FieldOptionsRegistry()

        assert not registry.has(FieldType.TEXT)
        assert await registry.get_options(FieldType.TEXT) is None

    @pytest.mark.asyncio
    async def test_returned_options_are_copies(self) -> None:
        registry = FieldOptionsRegistry()

        options = await registry.get_options(FieldType.DATETIME)
        options["showTime"] = False

        assert DEFAULT_FIELD_OPTIONS[FieldType.DATETIME]["showTime"] is True
        assert (await registry.get_options(FieldType.DATETIME))["showTime"] is True

    @pytest.mark.asyncio
    async def test_callable_providers(self) -> None:
        async def select_options():
            return {"options": "draft,published"}

        registry = FieldOptionsRegistry({})
        registry.register(FieldType.SELECT, select_options)
        registry.register(FieldType.TEXT, lambda: {"maxLength": 10})

        assert await registry.get_options(FieldType.SELECT) == {
            "options": "draft,published"
        }
        assert await registry.get_options(FieldType.TEXT) == {"maxLength": 10}

    @pytest.mark.asyncio
    async def test_unregister(self) -> None:
        registry = FieldOptionsRegistry()
        registry.unregister(FieldType.NUMBER)

        assert await registry.get_options(FieldType.NUMBER) is None
