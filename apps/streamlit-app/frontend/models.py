"""Pydantic models shared across the Streamlit app."""
from pydantic import BaseModel, EmailStr


class User(BaseModel):
    id: int
    email: EmailStr
    role: str = "user"


class Sweet(BaseModel):
    id: int
    name: str
    category: str
    price: float
    quantity: int
