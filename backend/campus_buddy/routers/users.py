"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from campus_buddy.config import settings
from campus_buddy.database import get_db
from campus_buddy.dependencies import require_identity
from campus_buddy.routers.common import unwrap
from campus_buddy.schemas.session import Identity
from campus_buddy.schemas.user import UserOut, UserUpdate
from campus_buddy.services import user_service

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/search/{query}", response_model=list[UserOut])
def search_users(query: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Search users by name, e-mail, interests or hobbies."""
    return user_service.search_users(db, query)


@router.patch("/me", response_model=UserOut)
def update_me(payload: UserUpdate, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Update the caller's own profile (partial update)."""
    return unwrap(user_service.update_profile(db, identity, payload.model_dump(exclude_unset=True)))


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db), identity: Identity = Depends(require_identity)):
    """Fetch a single user's public profile."""
    user = user_service.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.delete("/{user_id}")
def delete_user(
    user_id: str,
    response: Response,
    db: Session = Depends(get_db),
    identity: Identity = Depends(require_identity),
):
    """Delete the caller's own account together with everything it owns."""
    unwrap(user_service.delete_user(db, user_id, identity))
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"status": "deleted"}
