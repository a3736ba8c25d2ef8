from __future__ import annotations

import logging

from ..utils.constants import Role
from ..utils.security import check_hash, generate_hash
from .common import _store

logger = logging.getLogger(__name__)


class UserService:
    """Console accounts: creation for seeding and credential checks for login."""

    @staticmethod
    def create_user(username: str, role: str, password: str):
        store = _store()
        role = (role or "").lower().strip()
        if role not in (Role.ADMIN, Role.STAFF):
            return False, "Role must be admin/staff"
        if store.user_exists(username):
            return False, "Username exists"
        store.create_user(username, generate_hash(password), role)
        logger.info("User %s created with role %s", username, role)
        return True, "User created"

    @staticmethod
    def authenticate(username: str, password: str) -> dict | None:
        """Return the stored user dict on matching credentials, else None."""
        user = _store().find_user((username or "").strip())
        if not user or not check_hash(password or "", user.get("password_hash")):
            logger.info("Failed login for %r", username)
            return None
        return user
