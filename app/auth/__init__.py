# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# JWT-based authentication using Supabase Auth, plus the admin role check
# that guards every write endpoint.
#
# Usage:
#   from app.auth import require_admin, AdminUser
#
#   @router.delete("/poets/{poet_id}")
#   async def delete(poet_id: str, admin: AdminUser = Depends(require_admin)):
#       ...
# =============================================================================

from app.auth.dependencies import get_current_user, require_admin
from app.auth.models import AdminUser, AuthUser, UserResponse

__all__ = [
    "get_current_user",
    "require_admin",
    "AdminUser",
    "AuthUser",
    "UserResponse",
]
