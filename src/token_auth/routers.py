from fastapi import APIRouter, Depends

from src.core.schemas import SuccessResponse
from src.token_auth.claims import Claims
from src.token_auth.dependencies import (
    get_current_claims,
    get_token_engine,
    require_issuer_key,
)
from src.token_auth.engine import TokenEngine
from src.token_auth.exceptions import MissingSubjectKeyException
from src.token_auth.schemas import ClaimsResponse, IssueTokenModel, TokenResponse

router = APIRouter()


@router.post(
    "/",
    response_model=TokenResponse,
    status_code=201,
    dependencies=[Depends(require_issuer_key)],
)
async def issue_token(
    data: IssueTokenModel,
    engine: TokenEngine = Depends(get_token_engine),
) -> TokenResponse:
    """Issue a signed token for the given claims."""
    token = await engine.issue(data.claims)
    return TokenResponse(token=token, expires_in=engine.settings.ttl)


@router.get("/me", response_model=ClaimsResponse)
async def read_current_claims(
    claims: Claims = Depends(get_current_claims),
) -> ClaimsResponse:
    """Return the verified claims of the bearer token."""
    return ClaimsResponse(
        issuer=claims.issuer,
        audience=claims.audience,
        jti=claims.jti,
        iat=claims.issued_at,
        nbf=claims.not_before,
        expire=claims.expire,
        payload=claims.payload,
    )


@router.delete("/me", response_model=SuccessResponse)
async def revoke_current_session(
    claims: Claims = Depends(get_current_claims),
    engine: TokenEngine = Depends(get_token_engine),
) -> SuccessResponse:
    """Revoke the session of the bearer token's subject."""
    if not claims.audience:
        raise MissingSubjectKeyException("Token has no subject to revoke")
    await engine.revoke(claims.audience)
    return SuccessResponse(success=True)
