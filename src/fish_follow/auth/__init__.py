"""
Caller identity and role checks.
"""

from fish_follow.auth.middleware import CurrentUser, get_current_user
from fish_follow.auth.rbac import Role, require_admin

__all__ = ["CurrentUser", "Role", "get_current_user", "require_admin"]
