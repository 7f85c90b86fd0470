from typing import List
from sqlmodel import Session, select

from models.user import User


def get_user(session: Session, user_id: int) -> List[User]:
    """Parameterized lookup by primary key; returns every matching row (zero or one)."""
    return list(session.exec(select(User).where(User.id == user_id)).all())
