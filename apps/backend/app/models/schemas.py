"""Pydantic models used for request and response bodies."""
from typing import List, Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    role: str = Field(default="user")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class UserOut(BaseModel):
    id: int
    email: EmailStr
    role: str = "user"


class TokenPair(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthResponse(BaseModel):
    user: UserOut
    tokens: TokenPair


class RefreshRequest(BaseModel):
    refresh_token: str


class SweetCreate(BaseModel):
    """
    Payload for creating or fully replacing a sweet:
        {
            "name": "Chocolate Truffle",
            "category": "chocolate",
            "price": 2.5,
            "quantity": 40
        }
    """
    name: str = Field(min_length=1, max_length=120)
    category: str = Field(min_length=1, max_length=60)
    price: float = Field(ge=0)
    quantity: int = Field(default=0, ge=0)


class SweetUpdate(BaseModel):
    """Partial update; only the fields that are sent get changed."""
    name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    category: Optional[str] = Field(default=None, min_length=1, max_length=60)
    price: Optional[float] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)


class SweetOut(BaseModel):
    id: int
    name: str
    category: str
    price: float
    quantity: int
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class SweetList(BaseModel):
    sweets: List[SweetOut]

