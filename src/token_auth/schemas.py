from typing import Any, Literal

from pydantic import Field

from src.core.schemas import Base


class IssueTokenModel(Base):
    claims: dict[str, Any] = Field(default_factory=dict)


class TokenResponse(Base):
    token: str
    token_type: Literal["bearer"] = "bearer"
    expires_in: int


class ClaimsResponse(Base):
    issuer: str
    audience: str
    jti: str
    iat: int
    nbf: int
    expire: int
    payload: dict[str, Any]
