from hypothesis import strategies as st

from datasource_sdk.dto.query import FilterCondition

# Strategy for generating column names
column_name_strategy = st.text(
    min_size=1,
    max_size=30,
    alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"),  # Only letters and numbers
        blacklist_characters=[" ", "\t", "\n", "\r", '"', "'", "`", "%", "_"],
    ),
)

# Strategy for generating filter values that are safe inside a LIKE pattern
filter_value_strategy = st.text(
    min_size=1,
    max_size=20,
    alphabet=st.characters(
        whitelist_categories=("Lu", "Ll", "Nd"),
        blacklist_characters=["%", "_"],
    ),
)

# Strategy for generating known filter conditions
condition_strategy = st.sampled_from([condition.value for condition in FilterCondition])

# Strategy for generating conditions outside the known set
unknown_condition_strategy = st.text(min_size=1, max_size=15).filter(
    lambda value: value not in {condition.value for condition in FilterCondition}
)

# Strategy for generating filter payloads as received from a client
filter_payload_strategy = st.fixed_dictionaries(
    {
        "columnName": column_name_strategy,
        "condition": condition_strategy,
        "value": filter_value_strategy,
    }
)

# Strategy for generating lists of filter payloads
filter_list_strategy = st.lists(filter_payload_strategy, min_size=0, max_size=5)

# Strategy for generating pagination bounds
pagination_strategy = st.tuples(
    st.integers(min_value=1, max_value=500), st.integers(min_value=0, max_value=10_000)
)

# Strategy for generating values that don't count as a page bound
non_numeric_bound_strategy = st.one_of(
    st.none(), st.booleans(), st.text(max_size=5)
)
