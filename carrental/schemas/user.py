# carrental/schemas/user.py
from typing import Optional
from pydantic import BaseModel, EmailStr


class UserBase(BaseModel):
    id: int
    name: str
    email: EmailStr
    role: str
    image: Optional[str] = None

    # Pydantic v2 style (replaces orm_mode = True)
    model_config = {"from_attributes": True}


class UserOut(UserBase):
    pass


class Actor(BaseModel):
    """
    Authenticated caller handed to every core operation.
    Built by the API layer from the identity provider's token.
    """
    id: int
    role: str

    model_config = {"from_attributes": True, "frozen": True}
