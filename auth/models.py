from datetime import datetime
from typing import Literal

from pydantic import BaseModel, constr

from auth.constants import WALLET_ADDRESS_MIN_LENGTH


class SignInRequest(BaseModel):
    wallet_address: constr(strip_whitespace=True, min_length=WALLET_ADDRESS_MIN_LENGTH)


class SignUpRequest(SignInRequest):
    role: Literal["USER", "ORGANIZER"]


class UserResponse(BaseModel):

    class Config:
        from_attributes = True

    id: str
    wallet_address: str
    role: str
    created_at: datetime


class SignUpResponse(BaseModel):
    message: str
    user_id: str
    user: UserResponse


class Token(BaseModel):
    message: str
    access_token: str
    token_type: str = "bearer"
    user: UserResponse


class MeResponse(BaseModel):
    user: UserResponse
