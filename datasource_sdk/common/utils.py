import re

# Splits camelCase and PascalCase boundaries ("createdAt" -> "created At")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def humanize(value: str) -> str:
    """
    Turn a column name into a display label.

    ``"first_name"`` -> ``"First name"``, ``"createdAt"`` -> ``"Created at"``.
    A trailing ``_id`` is dropped the same way Rails-style humanizers do it.
    """
    if not value:
        return value

    result = _CAMEL_BOUNDARY.sub(" ", value)
    result = re.sub(r"_id$", "", result) or result
    result = re.sub(r"[_\-\s]+", " ", result).strip().lower()

    if not result:
        return value

    return result[0].upper() + result[1:]
