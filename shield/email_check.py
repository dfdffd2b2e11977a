"""Email deliverability check gated on remaining provider credits."""

import logging
from typing import Tuple

from email_validator import EmailNotValidError, validate_email

from .models import EmailOutcome, NotificationState, ValidationVerdict, classify_status
from .notifier import EXHAUSTED_REASON, notify
from .quota import API_KEY_HEADER, check_credits
from .settings import ShieldConfig
from .transport import Transport, TransportError

logger = logging.getLogger(__name__)

MSG_REQUIRED = "Email is required."
MSG_UNAVAILABLE = "Email validation is temporarily unavailable. Please try again later."
MSG_RETRY = "Error verifying email. Please try again later."


def sanitize_email(value: str) -> str:
    """Return the normalized address; the provider judges anything that fails syntax."""
    value = value.strip()
    try:
        return validate_email(value, check_deliverability=False).normalized
    except EmailNotValidError:
        return value


def verify_email(
    value: str,
    api_key: str,
    webhook_url: str,
    notif_state: NotificationState,
    transport: Transport,
    config: ShieldConfig,
) -> Tuple[ValidationVerdict, NotificationState]:
    """
    Verify an email address. Returns (verdict, notification state).

    With credits left, the provider status decides. With none left the
    submission passes (fail-open) and one alert is sent per exhaustion episode.
    """
    if not value or not value.strip():
        return ValidationVerdict.reject(MSG_REQUIRED), notif_state

    if not api_key:
        logger.error("Email verification API key is missing in settings.")
        return ValidationVerdict.reject(MSG_UNAVAILABLE), notif_state

    quota = check_credits(api_key, transport, config.email_credits_url)

    if quota.exhausted:
        if not notif_state.sent and webhook_url:
            notify(webhook_url, config.site_domain, EXHAUSTED_REASON, transport)
            notif_state = notif_state.mark_sent()
        logger.info("Email verification skipped, no credits left; accepting %s", value)
        return ValidationVerdict.accept(), notif_state

    if notif_state.sent:
        logger.info("Credits recovered (%d left); re-arming exhaustion alert", quota.credits_available)
        notif_state = notif_state.reset()

    email = sanitize_email(value)
    try:
        data = transport.post(
            config.email_verify_url,
            json={"email": email},
            headers={API_KEY_HEADER: api_key},
        ).json()
    except TransportError as e:
        logger.warning("Email verification request failed for %s: %s", email, e)
        return ValidationVerdict.reject(MSG_RETRY), notif_state

    result = data.get("data") if isinstance(data, dict) else None
    status = result.get("status") if isinstance(result, dict) else None
    if not isinstance(status, str) or not status:
        logger.warning("Email verification response missing data.status: %r", data)
        return ValidationVerdict.reject(MSG_RETRY), notif_state

    if classify_status(status, config.accept_statuses) is EmailOutcome.ACCEPT:
        logger.info("Email is valid: %s (%s)", email, status)
        return ValidationVerdict.accept(), notif_state

    logger.info("Email rejected: %s (%s)", email, status)
    return (
        ValidationVerdict.reject(f"The email address is invalid or not deliverable (status: {status})."),
        notif_state,
    )
