"""Auth Service — credential check for login, recorded in the access log.

Invariants:
    - Missing email or password -> ValidationError (400)
    - Unknown email and wrong password both -> AuthenticationError (401), same message
    - Inactive account -> ForbiddenError (403), checked only after the password matched
    - The returned user never contains the password digest
"""

import logging

from aquatour.core.errors import AuthenticationError, ForbiddenError, ValidationError
from aquatour.core.field_aliases import is_blank
from aquatour.services.access_log_service import AccessLogService
from aquatour.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, users: UserRepository, access_logs: AccessLogService):
        self.users = users
        self.access_logs = access_logs

    async def login(
        self,
        email: str | None,
        password: str | None,
        ip_address: str | None = None,
        browser: str | None = None,
        operating_system: str | None = None,
    ) -> dict:
        missing = [
            name for name, value in (("email", email), ("password", password))
            if is_blank(value)
        ]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", fields=missing,
            )

        row = await self.users.find_credentials(email)
        if row is None or not self.users.hasher.verify(password, row["password_digest"]):
            logger.warning("Failed login attempt", extra={"path": "/api/auth/login"})
            raise AuthenticationError()
        if not row["is_active"]:
            raise ForbiddenError("User account is inactive")

        user = self.users.project(row)
        session = await self.access_logs.create({
            "user_id": user["id"],
            "user_name": user["full_name"],
            "user_role": user["role"],
            "ip_address": ip_address,
            "browser": browser,
            "operating_system": operating_system,
        })
        logger.info("User logged in", extra={"actor_id": user["id"]})
        return {"user": user, "access_log_id": session["id"]}
