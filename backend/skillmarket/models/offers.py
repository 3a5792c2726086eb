import textwrap
from typing import Any, Dict, List, Optional, Tuple

from psycopg import Rollback

from ..db.pool import fetch_all, fetch_one, transaction


async def create_offer(task_id: Any, provider_id: Any, data: Dict[str, Any]) -> Dict[str, Any]:
    """Insert a pending offer.

    Raises ``psycopg.errors.UniqueViolation`` if the provider already has an
    offer on the task.
    """
    query = textwrap.dedent("""
        INSERT INTO offers (task_id, provider_id, offered_hourly_rate, offered_rate_currency, message)
        VALUES (%s, %s, %s, %s, %s)
        RETURNING *
    """)
    return await fetch_one(
        query,
        (
            task_id,
            provider_id,
            data["offered_hourly_rate"],
            data["offered_rate_currency"],
            data.get("message"),
        ),
    )


async def find_offer_by_id(offer_id: Any) -> Optional[Dict[str, Any]]:
    return await fetch_one("SELECT * FROM offers WHERE id = %s", (offer_id,))


async def update_offer_status(offer_id: Any, new_status: str, expected_status: str) -> Optional[Dict[str, Any]]:
    query = textwrap.dedent("""
        UPDATE offers
        SET offer_status = %s, updated_at = NOW()
        WHERE id = %s AND offer_status = %s
        RETURNING *
    """)
    return await fetch_one(query, (new_status, offer_id, expected_status))


async def find_offers_with_provider_details_by_task_id(task_id: Any) -> List[Dict[str, Any]]:
    query = textwrap.dedent("""
        SELECT
            o.*,
            u.role AS provider_role,
            u.user_type AS provider_user_type,
            u.email AS provider_email,
            u.first_name AS provider_first_name,
            u.last_name AS provider_last_name,
            u.company_name AS provider_company_name
        FROM offers o
        JOIN users u ON o.provider_id = u.id
        WHERE o.task_id = %s
        ORDER BY o.created_at DESC
    """)
    return await fetch_all(query, (task_id,))


async def find_offer_by_provider_and_task(
    provider_id: Any, task_id: Any, status: Optional[str] = None
) -> Optional[Dict[str, Any]]:
    if status:
        return await fetch_one(
            "SELECT * FROM offers WHERE provider_id = %s AND task_id = %s AND offer_status = %s",
            (provider_id, task_id, status),
        )
    return await fetch_one(
        "SELECT * FROM offers WHERE provider_id = %s AND task_id = %s",
        (provider_id, task_id),
    )


async def find_accepted_offer_for_task(task_id: Any) -> Optional[Dict[str, Any]]:
    return await fetch_one(
        "SELECT * FROM offers WHERE task_id = %s AND offer_status = 'accepted'",
        (task_id,),
    )


async def accept_offer(offer_id: Any, task_id: Any, provider_id: Any) -> Optional[Tuple[Dict[str, Any], Dict[str, Any]]]:
    """Accept one pending offer and start its task, all or nothing.

    Inside a single transaction: lock the task row, require it to be open,
    reject every other pending offer on it, accept the target offer and move
    the task to ``in_progress`` assigned to ``provider_id``. Returns
    ``(offer, task)``, or ``None`` when the task or offer changed state first.
    """
    result = None
    async with transaction() as cur:
        await cur.execute(
            "SELECT id, status FROM tasks WHERE id = %s FOR UPDATE",
            (task_id,),
        )
        locked = await cur.fetchone()
        if locked is None or locked["status"] != "open":
            raise Rollback()

        await cur.execute(
            textwrap.dedent("""
                UPDATE offers
                SET offer_status = 'rejected', updated_at = NOW()
                WHERE task_id = %s AND id <> %s AND offer_status = 'pending'
            """),
            (task_id, offer_id),
        )
        await cur.execute(
            textwrap.dedent("""
                UPDATE offers
                SET offer_status = 'accepted', updated_at = NOW()
                WHERE id = %s AND task_id = %s AND offer_status = 'pending'
                RETURNING *
            """),
            (offer_id, task_id),
        )
        offer = await cur.fetchone()
        if offer is None:
            raise Rollback()

        await cur.execute(
            textwrap.dedent("""
                UPDATE tasks
                SET status = 'in_progress', provider_id = %s, updated_at = NOW()
                WHERE id = %s
                RETURNING *
            """),
            (provider_id, task_id),
        )
        task = await cur.fetchone()
        result = (offer, task)

    return result
