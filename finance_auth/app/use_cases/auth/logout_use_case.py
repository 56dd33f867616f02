"""
Logout Use Case

Revokes the presented refresh token. Never fails for the caller.
"""

from typing import Optional

from libs.result import Result, Return
from finance_auth.app.services.token_codec import TokenCodec
from finance_auth.app.services.unit_of_work import UnitOfWork
from finance_auth.domain.base import utcnow
from finance_auth.domain.entities import SYSTEM_ACTOR, AuditEvent
from .dtos import RequestContext


class LogoutUseCase:
    """
    Use case for logout.

    Business Rules:
    - Missing or malformed tokens are a silent no-op (no writes)
    - The secret is not verified; cookie possession is the proof
    - Audit actor is "system" since the owner is not looked up
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, refresh_token: Optional[str], context: Optional[RequestContext] = None
    ) -> Result[None]:
        context = context or RequestContext()

        parts = TokenCodec.parse_refresh_token(refresh_token)
        if parts is None:
            return Return.ok(None)

        async with self.uow:
            await self.uow.refresh_tokens.revoke(parts.id, utcnow())

            await self.uow.audit_events.create(
                AuditEvent(
                    action="auth.logout",
                    actor=SYSTEM_ACTOR,
                    user_id=None,
                    ip_address=context.ip_address,
                    user_agent=context.user_agent,
                    event_metadata={"refresh_token_id": str(parts.id)},
                )
            )

            await self.uow.commit()

        return Return.ok(None)
