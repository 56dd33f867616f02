from sqlmodel.ext.asyncio.session import AsyncSession

from finance_auth.app.repositories.audit_event_repository import IAuditEventRepository
from finance_auth.domain.entities import AuditEvent


class AuditEventRepository(IAuditEventRepository):
    """AuditEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        self.session.add(audit_event)
        await self.session.flush()
        return audit_event
