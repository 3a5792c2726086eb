"""Storage rows (snake_case, numeric columns) to API objects (camelCase)."""

from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

Row = Mapping[str, Any]

ADDRESS_COLUMNS = {
    "street_number": "streetNumber",
    "street_name": "streetName",
    "city_suburb": "citySuburb",
    "state": "state",
    "post_code": "postCode",
}


def to_number(value: Union[Decimal, str, int, float, None]) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


def _optional(target: Dict[str, Any], key: str, value: Any) -> None:
    # None and empty strings are left out of the API object
    if value is None or value == "":
        return
    target[key] = value


def map_address(row: Row) -> Optional[Dict[str, str]]:
    address: Dict[str, str] = {}
    for column, key in ADDRESS_COLUMNS.items():
        _optional(address, key, row.get(column))
    return address or None


def map_user(row: Row) -> Dict[str, Any]:
    user: Dict[str, Any] = {
        "id": row["id"],
        "role": row["role"],
        "userType": row["user_type"],
        "email": row["email"],
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }
    _optional(user, "phoneNumber", row.get("phone_number"))
    # company users keep first/last name for their representative
    _optional(user, "firstName", row.get("first_name"))
    _optional(user, "lastName", row.get("last_name"))
    if row["user_type"] == "company":
        _optional(user, "companyName", row.get("company_name"))
        _optional(user, "businessTaxNumber", row.get("business_tax_number"))
    _optional(user, "address", map_address(row))
    return user


def map_task(row: Row) -> Dict[str, Any]:
    task: Dict[str, Any] = {
        "id": row["id"],
        "userId": row["user_id"],
        "category": row["category"],
        "taskName": row["task_name"],
        "expectedStartDate": row["expected_start_date"],
        "expectedWorkingHours": to_number(row["expected_working_hours"]),
        "hourlyRateOffered": to_number(row["hourly_rate_offered"]),
        "rateCurrency": row["rate_currency"],
        "status": row["status"],
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }
    _optional(task, "providerId", row.get("provider_id"))
    _optional(task, "description", row.get("description"))
    return task


def map_skill(row: Row) -> Dict[str, Any]:
    skill: Dict[str, Any] = {
        "id": row["id"],
        "providerId": row["provider_id"],
        "category": row["category"],
        "natureOfWork": row["nature_of_work"],
        "hourlyRate": to_number(row["hourly_rate"]),
        "rateCurrency": row["rate_currency"],
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }
    _optional(skill, "experience", row.get("experience"))
    return skill


def map_offer(row: Row) -> Dict[str, Any]:
    offer: Dict[str, Any] = {
        "id": row["id"],
        "taskId": row["task_id"],
        "providerId": row["provider_id"],
        "offeredHourlyRate": to_number(row["offered_hourly_rate"]),
        "offeredRateCurrency": row["offered_rate_currency"],
        "offerStatus": row["offer_status"],
        "createdAt": row.get("created_at"),
        "updatedAt": row.get("updated_at"),
    }
    _optional(offer, "message", row.get("message"))
    return offer


def map_offer_with_provider(row: Row) -> Dict[str, Any]:
    """Offer joined with the public details of its provider (``provider_*`` columns)."""
    offer = map_offer(row)
    if row.get("provider_email") is None:
        return offer

    details: Dict[str, Any] = {
        "id": row["provider_id"],
        "role": row.get("provider_role"),
        "userType": row.get("provider_user_type"),
        "email": row["provider_email"],
    }
    _optional(details, "firstName", row.get("provider_first_name"))
    _optional(details, "lastName", row.get("provider_last_name"))
    _optional(details, "companyName", row.get("provider_company_name"))
    offer["providerDetails"] = details
    return offer


def map_task_progress(row: Row) -> Dict[str, Any]:
    return {
        "id": row["id"],
        "taskId": row["task_id"],
        "providerId": row["provider_id"],
        "description": row["description"],
        "progressTimestamp": row.get("progress_timestamp"),
        "createdAt": row.get("created_at"),
    }


def map_rows(rows: Iterable[Row], mapper) -> List[Dict[str, Any]]:
    return [mapper(row) for row in rows]
