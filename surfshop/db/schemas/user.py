from datetime import datetime
from pydantic import BaseModel, EmailStr


class Owner(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class User(Owner):
    is_admin: bool
    auth_provider: str
    last_login_at: datetime | None = None
    created_at: datetime | None = None


class RegisterRequest(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class ProfileUpdate(BaseModel):
    name: str | None = None
    email: EmailStr | None = None
    password: str | None = None


class AuthResponse(BaseModel):
    user: User
    token: str
