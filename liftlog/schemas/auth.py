from pydantic import EmailStr, Field

from liftlog.schemas.common import CamelModel, RequestModel


class LoginRequest(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class RegisterRequest(RequestModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=72)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: EmailStr


class TokenResponse(CamelModel):
    token: str
