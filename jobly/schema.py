"""
Input checks for job payloads.

Validators return a list of error messages; an empty list means valid.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping

UPDATABLE_JOB_FIELDS = ["title", "salary", "equity"]
JOB_FILTER_FIELDS = ["title", "minSalary", "hasEquity"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _is_non_negative_int(v: Any) -> bool:
    # bool is an int subclass; True is not a salary
    return isinstance(v, int) and not isinstance(v, bool) and v >= 0


def _valid_equity(v: Any) -> bool:
    if not isinstance(v, str):
        return False
    try:
        d = Decimal(v)
    except InvalidOperation:
        return False
    return d.is_finite() and Decimal(0) <= d <= Decimal(1)


def _unknown_fields(data: Mapping[str, Any], allowed: List[str]) -> List[str]:
    return [f"Unknown field: {k}" for k in data if k not in allowed]


def validate_job_update(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages. Empty list means valid.
    An empty dict is valid here; "nothing to update" is reported by
    build_set_clause.
    """
    errors = _unknown_fields(data, UPDATABLE_JOB_FIELDS)

    if "title" in data and not _is_non_empty_str(data["title"]):
        errors.append("Field 'title' must be a non-empty string")

    if "salary" in data and data["salary"] is not None:
        if not _is_non_negative_int(data["salary"]):
            errors.append("Field 'salary' must be a non-negative integer")

    # Equity travels as text so the store keeps it exact
    if "equity" in data and data["equity"] is not None:
        if not _valid_equity(data["equity"]):
            errors.append("Field 'equity' must be a decimal string between 0 and 1")

    return errors


def validate_job_filters(filters: Dict[str, Any]) -> List[str]:
    """
    Only filter names are checked. Values go to the store as given:
    hasEquity applies when truthy, minSalary is bound as-is.
    """
    return _unknown_fields(filters, JOB_FILTER_FIELDS)
