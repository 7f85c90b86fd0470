from pydantic import BaseModel
from datetime import datetime

class UserRead(BaseModel):
    id: int
    name: str
    email: str
    created_at: datetime

    class Config:
        from_attributes = True
