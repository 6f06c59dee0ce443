from unittest.mock import Mock

import pytest
from hypothesis import given

from datasource_sdk.clients.mysql import MySQLClient
from datasource_sdk.clients.postgresql import PostgreSQLClient
from datasource_sdk.clients.sqlite import SQLiteClient
from datasource_sdk.common.utils import humanize
from datasource_sdk.dto.columns import FieldType, ForeignKeyInfo, StoredColumn
from datasource_sdk.fields import get_base_options, is_id_column
from datasource_sdk.fields.inference import (
    build_columns,
    get_column_label,
    get_default_field_options_for_fields,
    infer_field_type,
    merge_options,
    normalize_stored_columns,
    resolve_field_type,
)
from datasource_sdk.fields.registry import FieldOptionsRegistry
from datasource_sdk.test_utils.hypothesis.strategies.fields.inference import (
    id_column_name_strategy,
    plain_column_name_strategy,
    unknown_native_type_strategy,
)

TYPE_MAP = SQLiteClient.FIELD_TYPE_MAP

ENGINE_NATIVE_TYPES = [
    pytest.param(
        client.FIELD_TYPE_MAP,
        native_type,
        field_type,
        id=f"{client.__name__}-{native_type}",
    )
    for client in (PostgreSQLClient, MySQLClient, SQLiteClient)
    for native_type, field_type in client.FIELD_TYPE_MAP.items()
]


class TestInferFieldType:
    def test_foreign_key_wins(self) -> None:
        assert infer_field_type("text", True, "bio", TYPE_MAP) == FieldType.ASSOCIATION

    @pytest.mark.parametrize(
        "native_type,expected",
        [
            ("varchar", FieldType.TEXT),
            ("text", FieldType.TEXTAREA),
            ("boolean", FieldType.BOOLEAN),
            ("datetime", FieldType.DATETIME),
            ("json", FieldType.JSON),
            ("integer", FieldType.NUMBER),
            ("INTEGER", FieldType.NUMBER),
        ],
    )
    def test_native_types(self, native_type: str, expected: FieldType) -> None:
        assert infer_field_type(native_type, False, "value", TYPE_MAP) == expected

    @given(native_type=unknown_native_type_strategy)
    def test_unknown_native_types_are_text(self, native_type: str) -> None:
        assert infer_field_type(native_type, False, "id", TYPE_MAP) == FieldType.TEXT

    @given(name=id_column_name_strategy)
    def test_numeric_id_columns_are_ids(self, name: str) -> None:
        assert is_id_column(name)
        assert infer_field_type("integer", False, name, TYPE_MAP) == FieldType.ID

    @given(name=plain_column_name_strategy)
    def test_numeric_plain_columns_are_numbers(self, name: str) -> None:
        assert infer_field_type("integer", False, name, TYPE_MAP) == FieldType.NUMBER

    def test_textual_id_columns_stay_text(self) -> None:
        assert infer_field_type("varchar", False, "external_id", TYPE_MAP) == FieldType.TEXT

    @pytest.mark.parametrize("field_type_map,native_type,field_type", ENGINE_NATIVE_TYPES)
    def test_engine_native_types(
        self, field_type_map, native_type: str, field_type: FieldType
    ) -> None:
        assert infer_field_type(native_type, False, "value", field_type_map) == field_type
        assert (
            infer_field_type(native_type.upper(), False, "value", field_type_map)
            == field_type
        )
        assert infer_field_type(native_type, False, "owner_id", field_type_map) == (
            FieldType.ID if field_type == FieldType.NUMBER else field_type
        )
        assert (
            infer_field_type(native_type, True, "owner_id", field_type_map)
            == FieldType.ASSOCIATION
        )


class TestResolveFieldType:
    def setup_method(self) -> None:
        self.infer = Mock(return_value=FieldType.NUMBER)
        self.foreign_key = ForeignKeyInfo(
            table_name="users",
            column_name="team_id",
            foreign_table_name="teams",
            foreign_column_name="id",
        )

    def test_foreign_key_overrides_stored_type(self) -> None:
        stored = StoredColumn(field_type=FieldType.TEXT)

        result = resolve_field_type("team_id", "integer", self.foreign_key, stored, self.infer)

        assert result == FieldType.ASSOCIATION
        self.infer.assert_not_called()

    def test_stored_type_overrides_inference(self) -> None:
        stored = StoredColumn(field_type=FieldType.SELECT)

        assert resolve_field_type("status", "varchar", None, stored, self.infer) == FieldType.SELECT
        self.infer.assert_not_called()

    def test_unknown_stored_type_falls_back_to_inference(self) -> None:
        log = Mock()
        stored = StoredColumn.model_validate({"fieldType": "Hidden"})

        assert stored.field_type == "Hidden"
        assert (
            resolve_field_type("age", "integer", None, stored, self.infer, log=log)
            == FieldType.NUMBER
        )
        self.infer.assert_called_once_with("integer", "age")
        log.warning.assert_called_once()
        assert "Hidden" in log.warning.call_args.args[0]

    def test_falls_back_to_native_inference(self) -> None:
        assert resolve_field_type("age", "integer", None, StoredColumn(), self.infer) == FieldType.NUMBER
        self.infer.assert_called_once_with("integer", "age")


class TestLabels:
    @pytest.mark.parametrize(
        "name,label",
        [
            ("first_name", "First name"),
            ("manager_id", "Manager"),
            ("createdAt", "Created at"),
            ("updated-at", "Updated at"),
            ("email", "Email"),
        ],
    )
    def test_humanize(self, name: str, label: str) -> None:
        assert humanize(name) == label

    def test_label_precedence(self) -> None:
        assert get_column_label("id") == "ID"
        assert get_column_label("id", native_label="Identifier") == "Identifier"
        assert get_column_label("id", stored_label="Key", native_label="Identifier") == "Key"


class TestOptions:
    def test_base_options_are_fresh(self) -> None:
        options = get_base_options()
        options["visibility"].append("hidden")

        assert get_base_options()["visibility"] == ["index", "show", "edit", "new"]

    def test_merge_is_shallow(self) -> None:
        merged = merge_options(
            {"displayAs": "number", "format": {"decimals": 2, "prefix": "$"}},
            {"format": {"decimals": 0}},
        )

        assert merged == {"displayAs": "number", "format": {"decimals": 0}}

    def test_normalize_stored_columns_from_a_list(self) -> None:
        stored = normalize_stored_columns(
            [{"name": "email", "fieldType": "Textarea"}, {"label": "no name"}]
        )

        assert list(stored) == ["email"]
        assert stored["email"].field_type == FieldType.TEXTAREA

    def test_normalize_stored_columns_skips_empty_entries(self) -> None:
        assert normalize_stored_columns({"email": None}) == {}
        assert normalize_stored_columns(None) == {}

    @pytest.mark.asyncio
    async def test_failing_provider_leaves_the_column_without_options(self) -> None:
        def broken():
            raise RuntimeError("boom")

        registry = FieldOptionsRegistry(
            {FieldType.NUMBER: {"displayAs": "number"}, FieldType.JSON: broken}
        )
        log = Mock()

        options = await get_default_field_options_for_fields(
            [
                {"name": "age", "field_type": FieldType.NUMBER},
                {"name": "payload", "field_type": FieldType.JSON},
                {"name": "email", "field_type": FieldType.TEXT},
            ],
            registry=registry,
            log=log,
        )

        assert options == {"age": {"displayAs": "number"}}
        assert log.warning.call_count == 2


class TestBuildColumns:
    @pytest.mark.asyncio
    async def test_build_columns(self) -> None:
        raw_columns = [
            {"name": "id", "type": "integer"},
            {"name": "team_id", "type": "integer"},
            {"name": "score", "type": "integer", "label": "Points"},
        ]
        foreign_keys = [
            ForeignKeyInfo(
                table_name="players",
                column_name="team_id",
                foreign_table_name="teams",
                foreign_column_name="id",
            )
        ]
        infer = SQLiteClient().infer_field_type_from_native

        columns = await build_columns(
            raw_columns,
            ["id"],
            foreign_keys,
            infer,
            stored_columns={"score": {"fieldOptions": {"displayAs": "progress"}}},
        )

        assert [column.name for column in columns] == ["id", "team_id", "score"]
        assert [column.field_type for column in columns] == [
            FieldType.ID,
            FieldType.ASSOCIATION,
            FieldType.NUMBER,
        ]
        assert [column.primary_key for column in columns] == [True, False, False]
        assert [column.label for column in columns] == ["ID", "Team", "Points"]
        assert columns[1].foreign_key_info.foreign_table_name == "teams"
        assert columns[2].field_options == {"displayAs": "progress"}
        assert columns[2].data_source_info == raw_columns[2]

    @pytest.mark.asyncio
    async def test_serialized_column_uses_camel_case(self) -> None:
        columns = await build_columns(
            [{"name": "created_at", "type": "datetime"}],
            [],
            [],
            SQLiteClient().infer_field_type_from_native,
        )

        serialized = columns[0].to_dict()
        assert serialized["fieldType"] == "DateTime"
        assert serialized["primaryKey"] is False
        assert serialized["fieldOptions"] == {"showDate": True, "showTime": True}
        assert serialized["baseOptions"]["nullValues"] == []
