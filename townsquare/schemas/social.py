"""Social Schemas — following sets and profile fields."""

from pydantic import BaseModel, Field


class FollowingResponse(BaseModel):
    username: str
    following: list[str]


class HeadlineUpdate(BaseModel):
    headline: str = Field(min_length=1, max_length=500)


class HeadlineResponse(BaseModel):
    username: str
    headline: str


class EmailUpdate(BaseModel):
    email: str


class EmailResponse(BaseModel):
    username: str
    email: str


class PasswordUpdate(BaseModel):
    password: str = Field(min_length=1)
