import logging

from fastapi import APIRouter, HTTPException, Depends, status
from psycopg.errors import UniqueViolation

from ..schemas.auth import SignUpRequest, LoginRequest
from ..core.security import (
    MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
    create_access_token,
    get_current_user,
)
from ..models import users as users_model
from ..utils.mapper import map_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

INDIVIDUAL_REQUIRED = {
    "first_name": "first name",
    "last_name": "last name",
    "address": "address",
}
COMPANY_REQUIRED = {
    "company_name": "company name",
    "business_tax_number": "business tax number",
    "first_name": "representative first name",
    "last_name": "representative last name",
}


def _missing_profile_fields(payload: SignUpRequest):
    required = INDIVIDUAL_REQUIRED if payload.user_type == "individual" else COMPANY_REQUIRED
    missing = []
    for field, label in required.items():
        value = getattr(payload, field)
        if field == "address":
            value = value and value.model_dump(exclude_none=True)
        if not value:
            missing.append(label)
    return missing


def _check_password_length(password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail=f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes")


# ==============================
# SIGNUP
# ==============================
@router.post("/signup", status_code=status.HTTP_201_CREATED)
async def signup(payload: SignUpRequest):
    missing = _missing_profile_fields(payload)
    if missing:
        raise HTTPException(
            status_code=400,
            detail=f"For {payload.user_type} users, {', '.join(missing)} are mandatory.",
        )
    _check_password_length(payload.password)

    if await users_model.find_user_by_email(payload.email):
        raise HTTPException(status_code=400, detail="User with this email already exists")

    try:
        created = await users_model.create_user(
            payload.model_dump(exclude={"password"}),
            hash_password(payload.password),
        )
    except UniqueViolation:
        raise HTTPException(status_code=409, detail="User with this email already exists")

    logger.info("Registered %s %s user %s", payload.user_type, payload.role, created["id"])
    return {"token": create_access_token(created), "user": map_user(created)}


# ==============================
# LOGIN
# ==============================
@router.post("/login")
async def login(payload: LoginRequest):
    _check_password_length(payload.password)

    user = await users_model.find_user_by_email(payload.email)
    if not user or not verify_password(payload.password, user["password_hash"]):
        raise HTTPException(status_code=400, detail="Invalid credentials")

    return {"token": create_access_token(user), "user": map_user(user)}


# ==============================
# CURRENT USER
# ==============================
@router.get("/me")
async def me(current_user=Depends(get_current_user)):
    user = await users_model.find_user_by_id(current_user["id"])
    if not user:
        raise HTTPException(status_code=404, detail="User profile not found.")
    return map_user(user)
