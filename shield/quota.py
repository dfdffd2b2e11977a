"""Remaining-credit lookup for the email verification provider."""

import logging

from .models import QuotaStatus
from .transport import Transport, TransportError

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"


def check_credits(api_key: str, transport: Transport, url: str) -> QuotaStatus:
    """Return the provider's remaining credits; any failure reads as zero."""
    try:
        data = transport.get(url, headers={API_KEY_HEADER: api_key}).json()
    except TransportError as e:
        logger.warning("Credit check failed, treating as exhausted: %s", e)
        return QuotaStatus(0, reachable=False)

    credits = data.get("creditsLeft") if isinstance(data, dict) else None
    # bool is an int subclass; a boolean count is a malformed payload
    if isinstance(credits, bool) or not isinstance(credits, (int, float, str)):
        logger.warning("Credit check returned no creditsLeft field: %r", data)
        return QuotaStatus(0, reachable=False)
    try:
        count = int(credits)
    except (ValueError, OverflowError):
        logger.warning("Credit check returned non-numeric creditsLeft: %r", credits)
        return QuotaStatus(0, reachable=False)

    return QuotaStatus(max(count, 0))
