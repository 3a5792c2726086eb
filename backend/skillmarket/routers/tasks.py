import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.security import ensure_owner, get_current_user, require_roles
from ..models import offers as offers_model
from ..models import tasks as tasks_model
from ..schemas.base import TaskStatus
from ..schemas.tasks import ProgressCreate, TaskCreate, TaskUpdate
from ..utils.mapper import map_rows, map_task, map_task_progress

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tasks", tags=["tasks"])


async def get_task_or_404(task_id: UUID):
    task = await tasks_model.find_task_by_id(task_id)
    if not task:
        raise HTTPException(status_code=404, detail="Task not found.")
    return task


async def ensure_accepted_provider(task_id: UUID, provider_id) -> None:
    accepted = await offers_model.find_accepted_offer_for_task(task_id)
    if not accepted or accepted["provider_id"] != provider_id:
        raise HTTPException(status_code=403, detail="Forbidden: You are not the accepted provider for this task.")


def ensure_status(task, expected: str, action: str) -> None:
    if task["status"] != expected:
        raise HTTPException(
            status_code=400,
            detail=f"Task status is '{task['status']}'. Only '{expected}' tasks can {action}.",
        )


async def transition(task, new_status: str, expected: str):
    """Persist a status change, failing if the task moved on in the meantime."""
    updated = await tasks_model.update_task_status(task["id"], new_status, expected)
    if not updated:
        raise HTTPException(status_code=400, detail="Task status changed, please retry.")
    logger.info("Task %s: %s -> %s", task["id"], expected, new_status)
    return updated


# ------------------------------------------------------------
# CREATE / LIST TASKS
# ------------------------------------------------------------
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_task(payload: TaskCreate, current_user=Depends(require_roles(["requester"]))):
    row = await tasks_model.create_task(current_user["id"], payload.model_dump())
    return map_task(row)


@router.get("")
async def list_tasks(status: Optional[TaskStatus] = None, current_user=Depends(get_current_user)):
    rows = await tasks_model.find_all_tasks(status)
    return map_rows(rows, map_task)


@router.get("/me")
async def get_my_posted_tasks(current_user=Depends(require_roles(["requester"]))):
    rows = await tasks_model.find_tasks_by_user_id(current_user["id"])
    return map_rows(rows, map_task)


@router.get("/open")
async def get_open_tasks(current_user=Depends(get_current_user)):
    rows = await tasks_model.find_all_open_tasks()
    return map_rows(rows, map_task)


@router.get("/providers/me/accepted-tasks")
async def get_provider_accepted_tasks(current_user=Depends(require_roles(["provider"]))):
    rows = await tasks_model.find_accepted_tasks_for_provider(current_user["id"])
    return map_rows(rows, map_task)


# ------------------------------------------------------------
# SINGLE TASK
# ------------------------------------------------------------
@router.get("/{task_id}")
async def get_task(task_id: UUID, current_user=Depends(get_current_user)):
    return map_task(await get_task_or_404(task_id))


@router.put("/{task_id}")
async def update_task(task_id: UUID, payload: TaskUpdate, current_user=Depends(require_roles(["requester"]))):
    task = await get_task_or_404(task_id)
    ensure_owner(task["user_id"], current_user, "task")
    if task["status"] != "open":
        raise HTTPException(status_code=400, detail='Cannot update a task that is not in "open" status.')

    fields = payload.model_dump(exclude_unset=True)
    if not any(value is not None for value in fields.values()):
        raise HTTPException(status_code=400, detail="No valid fields to update.")

    updated = await tasks_model.update_task(task_id, current_user["id"], fields)
    if not updated:
        raise HTTPException(status_code=400, detail='Cannot update a task that is not in "open" status.')
    return map_task(updated)


# ------------------------------------------------------------
# PROGRESS
# ------------------------------------------------------------
@router.post("/{task_id}/progress", status_code=status.HTTP_201_CREATED)
async def add_task_progress(task_id: UUID, payload: ProgressCreate, current_user=Depends(require_roles(["provider"]))):
    task = await get_task_or_404(task_id)

    accepted = await offers_model.find_offer_by_provider_and_task(current_user["id"], task_id, "accepted")
    if not accepted:
        raise HTTPException(status_code=403, detail="You are not the accepted provider for this task.")
    if task["status"] != "in_progress":
        raise HTTPException(status_code=400, detail="Task is not in progress. Cannot add progress update.")

    row = await tasks_model.add_task_progress(task_id, current_user["id"], payload.description)
    return {"message": "Progress update added successfully.", "progress": map_task_progress(row)}


@router.get("/{task_id}/progress")
async def get_task_progress(task_id: UUID, current_user=Depends(get_current_user)):
    task = await get_task_or_404(task_id)

    if task["user_id"] != current_user["id"]:
        accepted = await offers_model.find_offer_by_provider_and_task(current_user["id"], task_id, "accepted")
        if not accepted:
            raise HTTPException(status_code=403, detail="You are not authorized to view progress updates for this task.")

    rows = await tasks_model.find_task_progress_by_task_id(task_id)
    return map_rows(rows, map_task_progress)


# ------------------------------------------------------------
# COMPLETION
# ------------------------------------------------------------
@router.put("/{task_id}/complete")
async def mark_task_completed(task_id: UUID, current_user=Depends(require_roles(["provider"]))):
    task = await get_task_or_404(task_id)
    await ensure_accepted_provider(task_id, current_user["id"])
    ensure_status(task, "in_progress", "be marked as completed")

    updated = await transition(task, "completed_pending_review", "in_progress")
    return {"message": "Task marked as completed, pending review.", "task": map_task(updated)}


@router.put("/{task_id}/accept-completion")
async def accept_task_completion(task_id: UUID, current_user=Depends(require_roles(["requester"]))):
    task = await get_task_or_404(task_id)
    ensure_owner(task["user_id"], current_user, "task")
    ensure_status(task, "completed_pending_review", "have their completion accepted")

    updated = await transition(task, "closed", "completed_pending_review")
    return {"message": "Task completion accepted. Task closed.", "task": map_task(updated)}


@router.put("/{task_id}/reject-completion")
async def reject_task_completion(task_id: UUID, current_user=Depends(require_roles(["requester"]))):
    task = await get_task_or_404(task_id)
    ensure_owner(task["user_id"], current_user, "task")
    ensure_status(task, "completed_pending_review", "have their completion rejected")

    updated = await transition(task, "in_progress", "completed_pending_review")
    return {"message": "Task completion rejected. Task is back in progress.", "task": map_task(updated)}
