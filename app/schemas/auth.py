"""
Gestão de OS - Auth Schemas
"""
from pydantic import BaseModel, EmailStr, Field
from typing import Optional


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=255)
    email: EmailStr
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    message: str = "Login bem-sucedido"
    access_token: str
    token_type: str = "bearer"
    user: dict


class UsuarioResponse(BaseModel):
    id: str
    name: Optional[str] = None
    email: str
    is_active: bool
    last_login_at: Optional[str] = None
    created_at: Optional[str] = None

    class Config:
        from_attributes = True
