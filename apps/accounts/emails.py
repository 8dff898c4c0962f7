"""
Outgoing account emails.

Messages go through Django's mail framework; the console backend is the
default until a provider is configured. Delivery failures are logged and
never break the calling request.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


def _deliver(subject, body, recipient):
    try:
        send_mail(subject, body, settings.DEFAULT_FROM_EMAIL, [recipient])
    except Exception:
        logger.exception("Email delivery to %s failed", recipient)
        return False
    return True


def send_verification_email(email, verification_code):
    """Send the six-digit verification code."""
    body = (
        f"Your verification code is: {verification_code}\n\n"
        "Enter this code in the verification page to complete your registration."
    )
    return _deliver('Verify your email', body, email)


def send_welcome_email(email, name):
    body = f"Hi {name},\n\nWelcome aboard! Create a group and start splitting expenses."
    return _deliver('Welcome', body, email)
