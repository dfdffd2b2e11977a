"""Phone number validation via the numverify (apilayer) validate endpoint."""

import logging
import re
from typing import Optional, Sequence

from .models import FieldDescriptor, FieldKind, PhoneOutcome, ValidationVerdict
from .settings import ShieldConfig
from .transport import Transport, TransportError

logger = logging.getLogger(__name__)

LINE_TYPE_LABEL = "line_type"

MSG_UNAVAILABLE = "Phone validation is temporarily unavailable. Please try again later."
MSG_RETRY = "Error verifying phone number. Please try again later."
MSG_INVALID = "The phone number is invalid or not deliverable."
MSG_NO_LINE_TYPE = "The phone number is not a valid mobile or landline."


def sanitize_phone(value: str, country_code: str = "1") -> str:
    """Strip formatting and prefix the country code the provider expects."""
    digits = re.sub(r"\D", "", value or "")
    return f"{country_code}{digits}"


def find_line_type_field(form_fields: Sequence[FieldDescriptor]) -> Optional[FieldDescriptor]:
    for f in form_fields:
        if f.kind is FieldKind.HIDDEN and (f.label or "").strip().lower() == LINE_TYPE_LABEL:
            return f
    return None


def verify_phone(
    value: str,
    api_key: str,
    form_fields: Sequence[FieldDescriptor],
    transport: Transport,
    config: ShieldConfig,
) -> ValidationVerdict:
    if not api_key:
        logger.error("Phone verification API key is missing in settings.")
        return ValidationVerdict.reject(MSG_UNAVAILABLE)

    number = sanitize_phone(value, config.phone_country_code)
    try:
        data = transport.get(
            config.phone_validate_url,
            params={"access_key": api_key, "number": number},
        ).json()
    except TransportError as e:
        logger.warning("Phone verification request failed for %s: %s", number, e)
        return ValidationVerdict.reject(MSG_RETRY)

    if not isinstance(data, dict):
        logger.warning("Phone verification returned unexpected payload: %r", data)
        return ValidationVerdict.reject(MSG_RETRY)

    outcome = PhoneOutcome.from_payload(data)
    if not outcome.valid:
        logger.info("Phone rejected: %s (%s)", number, outcome.error_info or "not valid")
        if outcome.error_info:
            return ValidationVerdict.reject(f"Invalid phone number: {outcome.error_info}")
        return ValidationVerdict.reject(MSG_INVALID)

    # An unclassified line type is a rejection, not a pass
    if not outcome.line_type:
        logger.info("Phone rejected: %s (no line type)", number)
        return ValidationVerdict.reject(MSG_NO_LINE_TYPE)

    side_effects = {}
    target = find_line_type_field(form_fields)
    if target is not None:
        side_effects[target.input_name] = outcome.line_type

    logger.info("Phone is valid: %s (%s)", number, outcome.line_type)
    return ValidationVerdict.accept(side_effects)
