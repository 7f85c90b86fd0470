from typing import Optional
from sqlmodel import Field, SQLModel
from datetime import datetime, timezone

__all__ = ["UserBase", "User"]


class UserBase(SQLModel):
    name: str = Field(min_length=3, max_length=100)
    email: str = Field(unique=True, index=True, max_length=100)

class User(UserBase, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc), nullable=False)
