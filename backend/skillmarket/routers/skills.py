import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ..core.security import ensure_owner, get_current_user, require_roles
from ..models import skills as skills_model
from ..schemas.skills import SkillCreate, SkillUpdate
from ..utils.mapper import map_rows, map_skill

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/skills", tags=["skills"])


# ------------------------------------------------------------
# CREATE SKILL
# ------------------------------------------------------------
@router.post("", status_code=status.HTTP_201_CREATED)
async def create_skill(payload: SkillCreate, current_user=Depends(require_roles(["provider"]))):
    row = await skills_model.create_skill(current_user["id"], payload.model_dump())
    return map_skill(row)


# ------------------------------------------------------------
# MY SKILLS
# ------------------------------------------------------------
@router.get("/my-posted-skills")
async def get_my_skills(current_user=Depends(require_roles(["provider"]))):
    rows = await skills_model.find_skills_by_provider_id(current_user["id"])
    return map_rows(rows, map_skill)


# ------------------------------------------------------------
# GET SKILL
# ------------------------------------------------------------
@router.get("/{skill_id}")
async def get_skill(skill_id: UUID, current_user=Depends(get_current_user)):
    row = await skills_model.find_skill_by_id(skill_id)
    if not row:
        raise HTTPException(status_code=404, detail="Skill not found.")
    return map_skill(row)


# ------------------------------------------------------------
# UPDATE SKILL
# ------------------------------------------------------------
@router.put("/{skill_id}")
async def update_skill(skill_id: UUID, payload: SkillUpdate, current_user=Depends(require_roles(["provider"]))):
    existing = await skills_model.find_skill_by_id(skill_id)
    if not existing:
        raise HTTPException(status_code=404, detail="Skill not found.")
    ensure_owner(existing["provider_id"], current_user, "skill")

    updated = await skills_model.update_skill(skill_id, current_user["id"], payload.model_dump(exclude_unset=True))
    if not updated:
        raise HTTPException(status_code=400, detail="No valid fields to update.")
    return map_skill(updated)


# ------------------------------------------------------------
# DELETE SKILL
# ------------------------------------------------------------
@router.delete("/{skill_id}")
async def delete_skill(skill_id: UUID, current_user=Depends(require_roles(["provider"]))):
    deleted = await skills_model.delete_skill(skill_id, current_user["id"])
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Skill not found or not authorized to delete.")

    logger.info("Provider %s deleted skill %s", current_user["id"], skill_id)
    return {"message": "Skill deleted successfully."}
