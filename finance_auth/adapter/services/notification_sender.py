import logging

from finance_auth.app.services.notification_sender import (
    NotificationSender,
    PasswordResetEmail,
    VerificationEmail,
)

logger = logging.getLogger(__name__)


class LoggingNotificationSender(NotificationSender):
    """Development sender that writes outgoing emails to the log"""

    async def send_verification_email(self, message: VerificationEmail) -> None:
        logger.info(
            "[email] send verification user_id=%s email=%s token=%s expires_at=%s",
            message.user.id,
            message.user.email,
            message.token,
            message.expires_at.isoformat(),
        )

    async def send_password_reset_email(self, message: PasswordResetEmail) -> None:
        logger.info(
            "[email] send password reset user_id=%s email=%s token=%s expires_at=%s",
            message.user.id,
            message.user.email,
            message.token,
            message.expires_at.isoformat(),
        )
