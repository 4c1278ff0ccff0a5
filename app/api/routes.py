from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..domain.store import TokenStore
from ..logging_conf import get_logger
from ..service import token_service
from ..service.token_service import get_token_store
from .models import CreateTokenRequest, TokenResponse

router = APIRouter(prefix="/api")
logger = get_logger("api")


@router.post(
    "/tokens",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Issue a bearer token",
)
async def issue_token(
    req: CreateTokenRequest,
    store: TokenStore = Depends(get_token_store),
) -> TokenResponse:
    """Issue a token for `userId` with the given scopes and lifetime."""
    out = token_service.create_token(
        user_id=req.user_id,
        scopes=req.scopes,
        expires_in_minutes=req.expires_in_minutes,
        store=store,
    )
    return TokenResponse(**out)


@router.get(
    "/tokens",
    response_model=list[TokenResponse],
    summary="List a user's active tokens",
)
async def list_tokens(
    user_id: str | None = Query(None, alias="userId"),
    store: TokenStore = Depends(get_token_store),
) -> list[TokenResponse]:
    """Return the user's unexpired tokens, oldest first."""
    if user_id is None or not user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error_code": "malformed_request",
                "error_message": (
                    "Query parameter 'userId' is required and must be a non-empty string."
                ),
            },
        )
    items = token_service.list_active_tokens_for_user(user_id=user_id.strip(), store=store)
    return [TokenResponse(**it) for it in items]
