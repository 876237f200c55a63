from pydantic import BaseModel, Field


class UserSignup(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")


class UserResponse(BaseModel):
    """The caller's own profile. Only ever returned to the user it describes."""

    id: str
    name: str
    email: str


class UserSummary(BaseModel):
    id: str
    name: str
