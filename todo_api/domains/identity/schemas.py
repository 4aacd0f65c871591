from typing import Optional

from pydantic import BaseModel


class UserCreate(BaseModel):
    """Account creation payload"""
    email: Optional[str] = None
    password: Optional[str] = None


class UserLogin(BaseModel):
    """Login payload"""
    email: Optional[str] = None
    password: Optional[str] = None
