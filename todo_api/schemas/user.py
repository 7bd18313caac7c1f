from pydantic import BaseModel, ConfigDict
from typing import Optional


class UserCredentials(BaseModel):
    # Both optional so a missing field surfaces as our own 400 message
    email: Optional[str] = None
    password: Optional[str] = None


class UserOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str


class RegisterResponse(BaseModel):
    message: str
    user: UserOut


class LoginResponse(BaseModel):
    message: str
    accessToken: str
    user: UserOut


class VerifyResponse(BaseModel):
    message: str
    user: UserOut
