from hypothesis import strategies as st

from datasource_sdk.dto.columns import FieldType

# Strategy for generating identifiers that never follow the id naming convention
plain_column_name_strategy = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("Ll",)),
).filter(lambda name: name not in ("id",))

# Strategy for generating id-like column names
id_column_name_strategy = st.one_of(
    st.sampled_from(["id", "_id", "ID"]),
    st.builds(lambda name: f"{name}_id", plain_column_name_strategy),
)

# Strategy for generating native type names missing from every type table
unknown_native_type_strategy = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(whitelist_categories=("Ll",)),
).map(lambda name: f"x_{name}")

# Strategy for generating stored column overrides
stored_column_strategy = st.fixed_dictionaries(
    {
        "fieldType": st.sampled_from([field_type.value for field_type in FieldType]),
    },
    optional={
        "label": st.text(min_size=1, max_size=20),
        "baseOptions": st.dictionaries(
            st.sampled_from(["required", "nullable", "readonly"]),
            st.booleans(),
            max_size=3,
        ),
    },
)
