from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from database import get_session
from schemas.user import UserRead
from services.user_service import get_user

router = APIRouter()

@router.get("/api/users/{user_id}", response_model=UserRead)
def get_user_profile(user_id: int, session: Session = Depends(get_session)):
    rows = get_user(session, user_id)
    if not rows:
        raise HTTPException(status_code=404, detail="User not found.")

    return rows[0]
