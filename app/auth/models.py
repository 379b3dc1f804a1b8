# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict
from uuid import UUID
from typing import Optional


class AuthUser(BaseModel):
    """
    Authenticated user extracted from Supabase JWT.

    This is the minimal user info available from the token itself,
    without querying the database.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID
    email: Optional[str] = None


class AdminUser(AuthUser):
    """An authenticated user whose profile grants admin or editor rights."""
    is_admin: bool = False
    is_editor: bool = False


class UserResponse(BaseModel):
    """
    Profile returned by /api/auth/me.

    Role flags come from the public.profiles table; users without a profile
    row yet are reported with both flags off.
    """
    id: UUID
    email: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    is_admin: bool = False
    is_editor: bool = False
