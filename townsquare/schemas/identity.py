"""Identity Schemas — registration and login payloads.

Invariants:
    - Format rules (email, phone, zipcode) live in core/enforce_profile, not here
"""

from datetime import date

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=100)
    password: str = Field(min_length=1)
    email: str
    dob: date
    phone: str
    zipcode: str


class LoginRequest(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    username: str
    result: str = "success"
