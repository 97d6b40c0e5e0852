# eventhost/api/v1/endpoints/users.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from eventhost.api import deps
from eventhost.crud import crud_user
from eventhost.db.session import get_db
from eventhost.schemas.token import TokenPayload
from eventhost.schemas.user import User, UserUpdate

router = APIRouter(tags=["Users"])


@router.get("/users/me", response_model=User)
def read_current_user(
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    user = crud_user.user.get(db, id=current_user.sub)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return user


@router.put("/users/me", response_model=User)
def upsert_current_user(
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    current_user: TokenPayload = Depends(deps.get_current_user),
):
    """Creates or updates the host profile used to address host notifications."""
    return crud_user.user.upsert(db, id=current_user.sub, obj_in=user_in)
