from typing import Any, Dict, List, Mapping, Optional, Tuple

# Request field -> column, per entity. Only these columns can be changed
# through a partial update.
TASK_UPDATE_COLUMNS: Dict[str, str] = {
    "category": "category",
    "task_name": "task_name",
    "description": "description",
    "expected_start_date": "expected_start_date",
    "expected_working_hours": "expected_working_hours",
    "hourly_rate_offered": "hourly_rate_offered",
    "rate_currency": "rate_currency",
}

SKILL_UPDATE_COLUMNS: Dict[str, str] = {
    "category": "category",
    "experience": "experience",
    "nature_of_work": "nature_of_work",
    "hourly_rate": "hourly_rate",
    "rate_currency": "rate_currency",
}


def build_set_clause(
    columns: Mapping[str, str], fields: Mapping[str, Any]
) -> Optional[Tuple[str, List[Any]]]:
    """Build the ``SET`` part of a partial update.

    Fields that are absent, ``None`` or not in ``columns`` are skipped.
    Returns ``None`` when nothing is left to update; otherwise the clause
    (always touching ``updated_at``) and its parameters in order.
    """
    set_clauses = []
    params = []
    for field, column in columns.items():
        value = fields.get(field)
        if value is None:
            continue
        set_clauses.append(f"{column} = %s")
        params.append(value)

    if not set_clauses:
        return None

    set_clauses.append("updated_at = NOW()")
    return ", ".join(set_clauses), params
