import logging
from typing import Annotated, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError

from config import settings

"""
THE PURPOSE OF THIS FILE IS TO VERIFY THE JWT SENT BY THE CLIENT. TOKENS ARE ISSUED BY THE IDENTITY
PROVIDER; WE ONLY CHECK THEM AGAINST THE SHARED SECRET AND PULL OUT THE SUBJECT ('sub') AS THE PRINCIPAL ID.

USED IN EVERY ENDPOINT THAT ACTS ON BEHALF OF A USER WITH 'def foo(uid: str = Depends(auth_user))'
"""

log = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 (re-authenticate), not a 403
SECURITY = HTTPBearer(auto_error=False)

UNAUTHORIZED = "Invalid or expired authorization token"


def auth_user(creds: Annotated[Optional[HTTPAuthorizationCredentials], Depends(SECURITY)]) -> str:
    if creds is None:
        log.info("Request without bearer token rejected")
        raise HTTPException(
            status_code=401,
            detail=UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = jwt.decode(
            creds.credentials,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
        sub = payload.get("sub")
        if not sub:
            raise ValueError("Missing sub")
        return sub  # principal id
    except (JWTError, ValueError) as e:
        log.info("User failed to authenticate: %s", e)
        raise HTTPException(
            status_code=401,
            detail=UNAUTHORIZED,
            headers={"WWW-Authenticate": "Bearer"},
        )
