import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from psycopg.errors import UniqueViolation

from ..core.security import ensure_owner, get_current_user, require_roles
from ..models import offers as offers_model
from ..schemas.tasks import OfferCreate
from ..utils.mapper import map_offer, map_offer_with_provider, map_rows, map_task
from .tasks import get_task_or_404

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["offers"])

DUPLICATE_OFFER = "You have already made an offer on this task."


async def get_offer_or_404(offer_id: UUID):
    offer = await offers_model.find_offer_by_id(offer_id)
    if not offer:
        raise HTTPException(status_code=404, detail="Offer not found.")
    return offer


# ------------------------------------------------------------
# MAKE OFFER
# ------------------------------------------------------------
@router.post("/{task_id}/offers", status_code=status.HTTP_201_CREATED)
async def make_offer(task_id: UUID, payload: OfferCreate, current_user=Depends(require_roles(["provider"]))):
    task = await get_task_or_404(task_id)
    if task["status"] != "open":
        raise HTTPException(status_code=400, detail="Cannot make an offer on this task, it is not open.")

    if await offers_model.find_offer_by_provider_and_task(current_user["id"], task_id):
        raise HTTPException(status_code=409, detail=DUPLICATE_OFFER)

    try:
        row = await offers_model.create_offer(task_id, current_user["id"], payload.model_dump())
    except UniqueViolation:
        # lost the race against a concurrent offer by the same provider
        raise HTTPException(status_code=409, detail=DUPLICATE_OFFER)
    return map_offer(row)


# ------------------------------------------------------------
# LIST OFFERS FOR A TASK (owner only)
# ------------------------------------------------------------
@router.get("/{task_id}/offers")
async def get_task_offers(task_id: UUID, current_user=Depends(get_current_user)):
    task = await get_task_or_404(task_id)
    ensure_owner(task["user_id"], current_user, "task")

    rows = await offers_model.find_offers_with_provider_details_by_task_id(task_id)
    return map_rows(rows, map_offer_with_provider)


# ------------------------------------------------------------
# ACCEPT / REJECT OFFER
# ------------------------------------------------------------
@router.put("/offers/{offer_id}/accept")
async def accept_offer(offer_id: UUID, current_user=Depends(require_roles(["requester"]))):
    offer = await get_offer_or_404(offer_id)
    task = await get_task_or_404(offer["task_id"])
    ensure_owner(task["user_id"], current_user, "task")

    if task["status"] != "open":
        raise HTTPException(
            status_code=400,
            detail=f"Cannot accept offer: Task status is '{task['status']}'. Only 'open' tasks can have offers accepted.",
        )
    if offer["offer_status"] != "pending":
        raise HTTPException(
            status_code=400,
            detail=f"Cannot accept an offer that is currently '{offer['offer_status']}'.",
        )
    if await offers_model.find_accepted_offer_for_task(task["id"]):
        raise HTTPException(status_code=400, detail="An offer for this task has already been accepted.")

    accepted = await offers_model.accept_offer(offer["id"], task["id"], offer["provider_id"])
    if accepted is None:
        raise HTTPException(status_code=400, detail="Task or offer changed state, offer not accepted.")

    accepted_offer, updated_task = accepted
    logger.info("Accepted offer %s on task %s", offer["id"], task["id"])
    return {
        "message": "Offer accepted and task status updated.",
        "offer": map_offer(accepted_offer),
        "task": map_task(updated_task),
    }


@router.put("/offers/{offer_id}/reject")
async def reject_offer(offer_id: UUID, current_user=Depends(require_roles(["requester"]))):
    offer = await get_offer_or_404(offer_id)
    task = await get_task_or_404(offer["task_id"])
    ensure_owner(task["user_id"], current_user, "task")

    if offer["offer_status"] != "pending":
        raise HTTPException(
            status_code=400,
            detail=f"Cannot reject an offer that is currently '{offer['offer_status']}'. Only 'pending' offers can be rejected.",
        )

    rejected = await offers_model.update_offer_status(offer["id"], "rejected", "pending")
    if not rejected:
        raise HTTPException(status_code=400, detail="Offer changed state, not rejected.")
    return {"message": "Offer rejected.", "offer": map_offer(rejected)}
