# File: pakli/schemas/auth.py

from pydantic import BaseModel, EmailStr, Field

class RegisterIn(BaseModel):
    name: str = Field(min_length=2, max_length=120)
    email: EmailStr
    password: str = Field(min_length=8, max_length=512)
    address: str = ""
    city: str = ""
    district: str = ""
    notifications: bool = False
    email_notifications: bool = Field(default=False, alias="emailNotifications")

    model_config = {"populate_by_name": True}

class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=512)

class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    expires_in: int
