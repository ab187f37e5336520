#pakli/schemas/user.py
from typing import Optional
from pydantic import EmailStr, Field

from pakli.schemas.outage import CamelModel

class UserOut(CamelModel):
    id: str
    email: EmailStr
    name: str = ""
    address: str = ""
    city: str = ""
    district: str = ""
    notifications: bool = False
    email_notifications: bool = False

class ProfileUpdate(CamelModel):
    """Partial profile edit; unset fields are left alone."""
    name: Optional[str] = Field(default=None, min_length=2, max_length=120)
    address: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    notifications: Optional[bool] = None
    email_notifications: Optional[bool] = None
