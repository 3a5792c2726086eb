import textwrap
from typing import Any, Dict, List, Optional

from ..db.pool import fetch_all, fetch_one
from .updates import TASK_UPDATE_COLUMNS, build_set_clause


async def create_task(user_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    query = textwrap.dedent("""
        INSERT INTO tasks (
            user_id, category, task_name, description, expected_start_date,
            expected_working_hours, hourly_rate_offered, rate_currency
        ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING *
    """)
    return await fetch_one(
        query,
        (
            user_id,
            data["category"],
            data["task_name"],
            data.get("description"),
            data["expected_start_date"],
            data["expected_working_hours"],
            data["hourly_rate_offered"],
            data["rate_currency"],
        ),
    )


async def find_task_by_id(task_id: Any) -> Optional[Dict[str, Any]]:
    return await fetch_one("SELECT * FROM tasks WHERE id = %s", (task_id,))


async def update_task(task_id: Any, user_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply a partial update to an open task owned by ``user_id``."""
    built = build_set_clause(TASK_UPDATE_COLUMNS, fields)
    if built is None:
        return None
    set_clause, params = built

    query = textwrap.dedent(f"""
        UPDATE tasks
        SET {set_clause}
        WHERE id = %s AND user_id = %s AND status = 'open'
        RETURNING *
    """)
    return await fetch_one(query, [*params, task_id, user_id])


async def update_task_status(task_id: Any, new_status: str, expected_status: str) -> Optional[Dict[str, Any]]:
    """Move a task from ``expected_status`` to ``new_status``.

    Returns ``None`` if the task is no longer in ``expected_status``.
    """
    query = textwrap.dedent("""
        UPDATE tasks
        SET status = %s, updated_at = NOW()
        WHERE id = %s AND status = %s
        RETURNING *
    """)
    return await fetch_one(query, (new_status, task_id, expected_status))


async def find_tasks_by_user_id(user_id: Any) -> List[Dict[str, Any]]:
    return await fetch_all(
        "SELECT * FROM tasks WHERE user_id = %s ORDER BY created_at DESC",
        (user_id,),
    )


async def find_all_tasks(status: Optional[str] = None) -> List[Dict[str, Any]]:
    if status:
        return await fetch_all(
            "SELECT * FROM tasks WHERE status = %s ORDER BY created_at DESC",
            (status,),
        )
    return await fetch_all("SELECT * FROM tasks ORDER BY created_at DESC")


async def find_all_open_tasks() -> List[Dict[str, Any]]:
    return await find_all_tasks("open")


async def find_accepted_tasks_for_provider(provider_id: Any) -> List[Dict[str, Any]]:
    query = textwrap.dedent("""
        SELECT t.*
        FROM tasks t
        JOIN offers o ON t.id = o.task_id
        WHERE o.provider_id = %s AND o.offer_status = 'accepted'
        ORDER BY t.created_at DESC
    """)
    return await fetch_all(query, (provider_id,))


async def add_task_progress(task_id: Any, provider_id: Any, description: str) -> Dict[str, Any]:
    query = textwrap.dedent("""
        INSERT INTO task_progress (task_id, provider_id, description)
        VALUES (%s, %s, %s)
        RETURNING *
    """)
    return await fetch_one(query, (task_id, provider_id, description))


async def find_task_progress_by_task_id(task_id: Any) -> List[Dict[str, Any]]:
    return await fetch_all(
        "SELECT * FROM task_progress WHERE task_id = %s ORDER BY progress_timestamp ASC",
        (task_id,),
    )
