# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Sign-in itself happens client-side with Supabase Auth; these routes let the
# admin UI check a token and read the caller's role flags.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import fetch_profile, get_current_user
from app.auth.models import AuthUser, UserResponse
from lib.supabase_client import SupabaseClientError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    user: AuthUser = Depends(get_current_user)
) -> UserResponse:
    """
    Get the current user's profile and role flags.

    Raises:
        401: If not authenticated
    """
    try:
        profile = fetch_profile(user.id) or {}
    except SupabaseClientError as e:
        logger.warning(f"Could not fetch profile for {user.id}: {e}")
        profile = {}

    return UserResponse(
        id=user.id,
        email=user.email,
        display_name=profile.get("display_name"),
        avatar_url=profile.get("avatar_url"),
        is_admin=bool(profile.get("is_admin")),
        is_editor=bool(profile.get("is_editor")),
    )


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """Confirm that the bearer token is valid."""
    return {
        "valid": True,
        "user_id": str(user.id),
        "email": user.email
    }
