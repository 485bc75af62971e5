"""
Wardrobe Backend — FastAPI Dependencies
========================================

What:  Request-scoped accessors for the per-application objects built by
       create_app(), plus the bearer-token gate.

    get_settings       → Settings stored on app.state
    get_token_service  → TokenService stored on app.state
    require_principal  → Principal decoded from `Authorization: Bearer <token>`

require_principal raises AuthenticationError (401) before the route body runs
when the header is missing, not a bearer token, or fails verification.
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from wardrobe.config import Settings
from wardrobe.exceptions import AuthenticationError
from wardrobe.services.auth_service import Principal, TokenService

# auto_error=False: a missing header reaches require_principal, which answers
# with the standard {"message"} body instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False, description="JWT from POST /users/login")


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


async def require_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> Principal:
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise AuthenticationError(message="Authentication required. Send 'Authorization: Bearer <token>'.")
    return tokens.verify(credentials.credentials)
