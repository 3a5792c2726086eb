import textwrap
from typing import Any, Dict, Optional

from ..db.pool import fetch_one, transaction


async def create_user(data: Dict[str, Any], password_hash: str) -> Dict[str, Any]:
    """Insert a user row inside its own transaction and return it.

    ``data`` carries the snake_case signup fields; ``address`` is a nested
    mapping. Company-only columns are stored for company users only.
    """
    is_company = data["user_type"] == "company"
    address = data.get("address") or {}

    query = textwrap.dedent("""
        INSERT INTO users (
            role, user_type, email, password_hash,
            first_name, last_name, company_name, phone_number, business_tax_number,
            street_number, street_name, city_suburb, state, post_code
        ) VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
        RETURNING *
    """)
    params = [
        data["role"],
        data["user_type"],
        data["email"],
        password_hash,
        data.get("first_name") or None,
        data.get("last_name") or None,
        (data.get("company_name") or None) if is_company else None,
        data.get("phone_number") or None,
        (data.get("business_tax_number") or None) if is_company else None,
        address.get("street_number") or None,
        address.get("street_name") or None,
        address.get("city_suburb") or None,
        address.get("state") or None,
        address.get("post_code") or None,
    ]

    async with transaction() as cur:
        await cur.execute(query, params)
        return await cur.fetchone()


async def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    return await fetch_one("SELECT * FROM users WHERE email = %s", (email,))


async def find_user_by_id(user_id: Any) -> Optional[Dict[str, Any]]:
    return await fetch_one("SELECT * FROM users WHERE id = %s", (user_id,))
