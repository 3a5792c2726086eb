"""Shared request helpers for route tests."""

from skillmarket.core.security import create_access_token

API = "/api/v1"

TASK_BODY = {
    "category": "Tutoring",
    "taskName": "Algebra tutoring",
    "description": "Two sessions a week",
    "expectedStartDate": "2024-03-01",
    "expectedWorkingHours": 10,
    "hourlyRateOffered": 45.5,
    "rateCurrency": "USD",
}


def auth_headers(user):
    return {"Authorization": f"Bearer {create_access_token(user)}"}


def make_offer(client, provider, task_id, rate=50, currency="USD", **extra):
    return client.post(
        f"{API}/tasks/{task_id}/offers",
        json={"offeredHourlyRate": rate, "offeredRateCurrency": currency, **extra},
        headers=auth_headers(provider),
    )


def accept_offer(client, requester, offer_id):
    return client.put(f"{API}/tasks/offers/{offer_id}/accept", headers=auth_headers(requester))
