"""
Background e-mail tasks run by the RQ worker.

Delivery itself is out of scope: tasks log what they would send and return
a summary. Start a worker with ``rq worker default``.
"""

from typing import Any

from clubhub.core.config import settings
from clubhub.core.logging import get_logger

logger = get_logger(__name__)


def send_password_reset_email_task(to: str, name: str, token: str) -> dict[str, Any]:
    """
    Send a password reset link.

    Args:
        to: Recipient email address
        name: Recipient display name
        token: Reset token to embed in the link

    Returns:
        Task result dictionary
    """
    subject = "Password reset request"
    logger.info(f"Sending password reset email to {to} ({name}) from {settings.MAIL_FROM}")
    return {
        "to": to,
        "subject": subject,
        "status": "sent",
        "token_length": len(token),
    }


def send_contact_reply_task(to: str, name: str, subject: str, reply: str) -> dict[str, Any]:
    """
    Send an admin's reply to a contact-form message.

    Args:
        to: Original sender's email
        name: Original sender's name
        subject: Subject of the original message
        reply: Reply body

    Returns:
        Task result dictionary
    """
    logger.info(f"Sending contact reply to {to} ({name}): Re: {subject}")
    return {
        "to": to,
        "subject": f"Re: {subject}",
        "status": "sent",
        "length": len(reply),
    }
