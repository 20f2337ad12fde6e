"""Audit service for OAuth protocol events"""

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oauth_server.core.config import logger
from oauth_server.models.audit_log import AuditLog


class AuditService:
    """Write-only audit sink; failures are logged and never reach the caller"""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def log_event(
        self,
        event_type: str,
        success: bool,
        user_id: str | None = None,
        client_id: str | None = None,
        event_data: dict | None = None,
        ip_address: str | None = None,
        error_message: str | None = None,
    ) -> None:
        """
        Log an audit event

        Args:
            event_type: Type of event (access_token_issued, token_request_rejected, etc.)
            success: Whether the event was successful
            user_id: User ID (if applicable)
            client_id: OAuth client ID (if applicable)
            event_data: Additional event data
            ip_address: Client IP address
            error_message: OAuth2 error code or message (if failed)
        """
        audit_log = AuditLog(
            user_id=user_id,
            client_id=client_id,
            event_type=event_type,
            event_data=event_data,
            ip_address=ip_address,
            success=success,
            error_message=error_message,
        )

        try:
            async with self._session_maker() as db:
                db.add(audit_log)
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write audit event {event_type}: {e}")

        # Also log to application logs
        log_level = logger.info if success else logger.warning
        log_level(
            f"Audit: {event_type} - {'SUCCESS' if success else 'FAILED'}",
            extra={
                "event_type": event_type,
                "success": success,
                "user_id": user_id,
                "client_id": client_id,
                "ip_address": ip_address,
            },
        )

    async def log_code_issued(
        self,
        user_id: str,
        client_id: str,
        ip_address: str | None = None,
    ) -> None:
        """Log authorization code issuance"""
        await self.log_event(
            event_type="authorization_code_issued",
            success=True,
            user_id=user_id,
            client_id=client_id,
            ip_address=ip_address,
        )

    async def log_token_issued(
        self,
        user_id: str,
        client_id: str,
        ip_address: str | None = None,
    ) -> None:
        """Log successful code exchange"""
        await self.log_event(
            event_type="access_token_issued",
            success=True,
            user_id=user_id,
            client_id=client_id,
            ip_address=ip_address,
        )

    async def log_token_rejected(
        self,
        client_id: str | None,
        error: str,
        ip_address: str | None = None,
    ) -> None:
        """Log rejected token request"""
        await self.log_event(
            event_type="token_request_rejected",
            success=False,
            client_id=client_id,
            ip_address=ip_address,
            error_message=error,
        )

    async def log_userinfo_rejected(self, ip_address: str | None = None) -> None:
        """Log userinfo request with an unusable bearer token"""
        await self.log_event(
            event_type="userinfo_rejected",
            success=False,
            ip_address=ip_address,
            error_message="invalid_token",
        )
