import textwrap
from typing import Any, Dict, List, Optional

from ..db.pool import execute, fetch_all, fetch_one
from .updates import SKILL_UPDATE_COLUMNS, build_set_clause


async def create_skill(provider_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    query = textwrap.dedent("""
        INSERT INTO skills (provider_id, category, experience, nature_of_work, hourly_rate, rate_currency)
        VALUES (%s, %s, %s, %s, %s, %s)
        RETURNING *
    """)
    return await fetch_one(
        query,
        (
            provider_id,
            data["category"],
            data.get("experience"),
            data["nature_of_work"],
            data["hourly_rate"],
            data["rate_currency"],
        ),
    )


async def find_skill_by_id(skill_id: Any) -> Optional[Dict[str, Any]]:
    return await fetch_one("SELECT * FROM skills WHERE id = %s", (skill_id,))


async def find_skills_by_provider_id(provider_id: Any) -> List[Dict[str, Any]]:
    return await fetch_all(
        "SELECT * FROM skills WHERE provider_id = %s ORDER BY created_at DESC",
        (provider_id,),
    )


async def update_skill(skill_id: Any, provider_id: Any, fields: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Apply a partial update; ``None`` when there is nothing to update or no owned row."""
    built = build_set_clause(SKILL_UPDATE_COLUMNS, fields)
    if built is None:
        return None
    set_clause, params = built

    query = textwrap.dedent(f"""
        UPDATE skills
        SET {set_clause}
        WHERE id = %s AND provider_id = %s
        RETURNING *
    """)
    return await fetch_one(query, [*params, skill_id, provider_id])


async def delete_skill(skill_id: Any, provider_id: Any) -> int:
    return await execute(
        "DELETE FROM skills WHERE id = %s AND provider_id = %s",
        (skill_id, provider_id),
    )
