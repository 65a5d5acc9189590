from typing import Annotated, Optional
from pydantic import BaseModel, EmailStr, Field, ConfigDict

from .common import BlankToNone

class UserCreate(BaseModel):
    username: str = Field(min_length=3, max_length=50)
    password: str = Field(min_length=6, max_length=72)
    email: Annotated[Optional[EmailStr], BlankToNone] = None
    name: Optional[str] = None
    phone: Optional[str] = None

class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    username: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
