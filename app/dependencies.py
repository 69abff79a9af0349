from typing import Optional

from fastapi import Depends, Header, Request

from app.errors import InvalidToken, Unidentified
from app.utils.tokens import TokenIdentity, TokenService


def _extract_token(authorization: Optional[str], token_query: Optional[str]) -> Optional[str]:
    """Pick the session token a request presents, or None if it presents none.

    A well-formed ``Authorization: Bearer <jwt>`` header wins; otherwise the
    ``?token=`` query parameter is used, for clients that cannot set headers.
    """
    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]
    return token_query


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_current_identity(
    authorization: Optional[str] = Header(None),
    token: Optional[str] = None,
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    raw = _extract_token(authorization, token)
    if not raw:
        raise Unidentified()
    identity = tokens.validate(raw)
    if identity is None:
        raise InvalidToken()
    return identity
