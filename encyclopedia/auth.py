from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from fastapi import Depends, Header, HTTPException
from jose import JWTError, jwt

from encyclopedia.config import settings


# ============================================================
# ROLES
# ============================================================

class Role(str, Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


@dataclass(frozen=True)
class Actor:
    id: str
    role: Role


# ============================================================
# TOKEN CREATION
# ============================================================

def create_access_token(actor_id: str, role: Role | str, expires_minutes: Optional[int] = None) -> str:
    expire = datetime.utcnow() + timedelta(
        minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES
    )
    to_encode = {
        "sub": str(actor_id),
        "role": Role(role).value,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


# ============================================================
# CURRENT ACTOR
# ============================================================

def get_current_actor(authorization: str = Header(None)) -> Actor:
    if not authorization:
        raise HTTPException(status_code=401, detail="Access token required")

    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid auth header")

    token = authorization.replace("Bearer ", "", 1)

    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    actor_id = payload.get("sub")
    if actor_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")

    try:
        role = Role(payload.get("role", Role.VIEWER.value))
    except ValueError:
        raise HTTPException(status_code=401, detail="Invalid token role")

    return Actor(id=str(actor_id), role=role)


# ============================================================
# ROLE GATES
# ============================================================

def require_editor(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role not in (Role.EDITOR, Role.ADMIN):
        raise HTTPException(status_code=403, detail="Editor access required")
    return actor


def require_admin(actor: Actor = Depends(get_current_actor)) -> Actor:
    if actor.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return actor
