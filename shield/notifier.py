"""Webhook alert sent when verification credits run out."""

import logging

from .transport import Transport, TransportError

logger = logging.getLogger(__name__)

EXHAUSTED_REASON = "verification provider out of credits, validation disabled until reset"


def build_alert_text(domain: str, reason: str) -> str:
    return f"LeadShield on {domain}: {reason}."


def notify(webhook_url: str, domain: str, reason: str, transport: Transport) -> bool:
    """Post a {"text": ...} alert. Best effort: delivery failures are only logged."""
    if not webhook_url:
        logger.debug("Alert skipped (no webhook): %s", reason)
        return False

    try:
        transport.post(webhook_url, json={"text": build_alert_text(domain, reason)})
    except TransportError as e:
        logger.error("Failed to send alert to webhook: %s", e)
        return False

    logger.info("Alert sent for %s: %s", domain, reason)
    return True
