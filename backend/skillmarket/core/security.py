from datetime import datetime, timedelta, timezone
from typing import Optional, List, Dict, Any

import jwt
from fastapi import HTTPException, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from passlib.context import CryptContext

from ..core.config import settings
from ..models import users as users_model

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
bearer_scheme = HTTPBearer(auto_error=False)

ALLOWED_ROLES = [
    "requester",
    "provider",
]

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def create_access_token(user: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Sign a token carrying the caller identity ``{id, role, userType, email}``."""
    now = datetime.now(tz=timezone.utc)
    expire = now + (expires_delta or settings.access_token_expires)
    to_encode = {
        "id": str(user["id"]),
        "role": user["role"],
        "userType": user["user_type"],
        "email": user["email"],
        "exp": expire,
        "iat": now,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)

async def get_current_user(credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme)) -> Dict[str, Any]:
    if not credentials:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, no token")
    token = credentials.credentials
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.PyJWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, token failed")

    user_id = payload.get("id")
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = await users_model.find_user_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authorized, user not found")
    return {
        "id": user["id"],
        "role": user["role"],
        "user_type": user["user_type"],
        "email": user["email"],
    }

def require_roles(roles: List[str]):
    invalid = [r for r in roles if r not in ALLOWED_ROLES]
    if invalid:
        raise ValueError(f"Invalid roles: {invalid}")

    async def _dep(user = Depends(get_current_user)):
        if user["role"] not in roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden, insufficient role")
        return user
    return _dep

def ensure_owner(owner_id: Any, user: Dict[str, Any], what: str = "resource") -> None:
    if owner_id != user["id"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Forbidden, you do not own this {what}")
