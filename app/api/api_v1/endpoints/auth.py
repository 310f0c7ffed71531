from typing import Any
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
import logging
from supabase import Client
from app.core.auth import get_current_user
from app.core.supabase import get_supabase_client
from app.schemas.auth import Token, RefreshRequest
from app.schemas.user import User

logger = logging.getLogger(__name__)
router = APIRouter()


def session_token(auth_response) -> Token:
    if not auth_response or not auth_response.session:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No session returned",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return Token(
        access_token=auth_response.session.access_token,
        token_type="bearer",
        refresh_token=auth_response.session.refresh_token
    )


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    supabase: Client = Depends(get_supabase_client)
) -> Any:
    """
    Login using Supabase Auth.
    """
    try:
        auth_response = supabase.auth.sign_in_with_password({
            "email": form_data.username,
            "password": form_data.password
        })
    except Exception as e:
        logger.warning(f"Login failed for {form_data.username}: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session_token(auth_response)


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_user),
    supabase: Client = Depends(get_supabase_client)
):
    """
    Logout using Supabase Auth.
    """
    try:
        supabase.auth.sign_out()
    except Exception as e:
        logger.error(f"Logout failed for {current_user.id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e)
        )
    return {"message": "Successfully logged out"}


@router.post("/refresh-token", response_model=Token)
async def refresh_token(
    refresh_in: RefreshRequest,
    supabase: Client = Depends(get_supabase_client)
) -> Any:
    """
    Refresh access token using Supabase Auth.
    """
    try:
        auth_response = supabase.auth.refresh_session(refresh_in.refresh_token)
    except Exception as e:
        logger.warning(f"Token refresh failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid refresh token"
        )
    return session_token(auth_response)


@router.get("/me", response_model=User)
def read_current_user(current_user: User = Depends(get_current_user)) -> Any:
    """
    The user the access token belongs to.
    """
    return current_user
