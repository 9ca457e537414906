from __future__ import annotations

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from fiscal_ledger.models.user import User

ADMIN = "admin"
USER = "user"


class RoleOracle(Protocol):
    def role_of(self, user_id: str | None) -> str: ...

    def is_admin(self, user_id: str | None) -> bool: ...


class UserRoleOracle:
    def __init__(self, s: Session):
        self.s = s

    def role_of(self, user_id: str | None) -> str:
        if not user_id:
            return USER
        role = self.s.execute(select(User.role).where(User.username == user_id)).scalar_one_or_none()
        return ADMIN if (role or "").strip().lower() == ADMIN else USER

    def is_admin(self, user_id: str | None) -> bool:
        return self.role_of(user_id) == ADMIN
