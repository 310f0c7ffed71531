from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import jwt, JWTError
import logging
from supabase import Client
from app.core.config import settings
from app.core.supabase import get_supabase_client
from app.schemas.auth import TokenPayload
from app.schemas.user import User

logger = logging.getLogger(__name__)
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_V1_STR}/auth/login")


def credentials_exception() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_jwt(token: str) -> TokenPayload:
    """
    Verify a Supabase access token locally with the project's JWT secret.
    """
    try:
        payload = jwt.decode(
            token,
            settings.SUPABASE_JWT_SECRET,
            algorithms=["HS256"],
            audience="authenticated"
        )
    except JWTError as e:
        logger.error(f"JWT error: {e}")
        raise credentials_exception()
    token_data = TokenPayload(**payload)
    if not token_data.sub:
        raise credentials_exception()
    return token_data


def get_current_user(
    token: str = Depends(oauth2_scheme),
    supabase: Client = Depends(get_supabase_client),
) -> User:
    """
    Resolve the bearer token to the Supabase user.

    Tokens are verified locally when SUPABASE_JWT_SECRET is configured,
    otherwise Supabase Auth is asked.
    """
    if settings.SUPABASE_JWT_SECRET:
        token_data = verify_jwt(token)
        return User(id=token_data.sub, email=token_data.email)

    try:
        response = supabase.auth.get_user(token)
    except Exception as e:
        if "timeout" in str(e).lower():
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail="Authentication service timeout. Please try again."
            )
        logger.error(f"Supabase authentication error: {e}")
        raise credentials_exception()

    if not response or not response.user:
        raise credentials_exception()
    return User(id=response.user.id, email=response.user.email)
