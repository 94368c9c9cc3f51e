"""
SQL fragment helpers.
"""

from typing import Any, List, Mapping, Optional, Tuple

from .errors import ValidationError


def build_set_clause(
    fields: Mapping[str, Any],
    name_map: Optional[Mapping[str, str]] = None,
) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of a partial UPDATE.

    Args:
        fields: Field name -> new value, only the fields to change
        name_map: Field name -> column name, for fields whose column differs

    Returns:
        Tuple of (set_cols, values), e.g. for {"firstName": "Aliya", "age": 32}
        and {"firstName": "first_name"}:
        ('"first_name"=$1, "age"=$2', ["Aliya", 32])

    Raises:
        ValidationError: If fields is empty

    Column names are interpolated as-is, so field names must come from a
    fixed, known set.
    """
    if not fields:
        raise ValidationError("No data supplied")

    name_map = name_map or {}
    cols: List[str] = []
    values: List[Any] = []
    for idx, (key, value) in enumerate(fields.items(), start=1):
        cols.append(f'"{name_map.get(key, key)}"=${idx}')
        values.append(value)

    return ", ".join(cols), values
