from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):

    userId: Optional[str] = None
    customUserId: Optional[str] = None


class UserCreated(BaseModel):

    userId: str
    message: str = "User created successfully"
