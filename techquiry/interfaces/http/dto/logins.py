from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CredentialsRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=False, extra="ignore")

    # Username format errors are reported by the use cases, not here.
    username: str
    password: str = Field(min_length=1, max_length=128)


class CreateLoginRequestDTO(CredentialsRequestDTO):
    password: str = Field(min_length=8, max_length=128)


class UpdateLoginRequestDTO(CreateLoginRequestDTO):
    pass


class AuthenticateRequestDTO(CredentialsRequestDTO):
    pass


class LoginCreatedDTO(BaseModel):
    id: int


class LoginDTO(BaseModel):
    id: int
    username: str


class OkDTO(BaseModel):
    ok: bool = True
