"""Per-field validation entry point: dispatches to the email and phone checks."""

import logging
from typing import Callable, Dict, Iterable, MutableMapping, Optional

from .email_check import verify_email
from .models import (
    FieldDescriptor,
    FieldKind,
    NotificationState,
    ValidationRequest,
    ValidationVerdict,
)
from .phone_check import verify_phone
from .settings import (
    EMAIL_API_KEY,
    NOTIFICATION_SENT,
    PHONE_API_KEY,
    WEBHOOK_URL,
    CredentialProvider,
    ShieldConfig,
)
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)

MSG_DEFECT = "Unable to verify this field right now. Please try again later."

Handler = Callable[[ValidationRequest], ValidationVerdict]


class Orchestrator:
    """Runs the verifier registered for a field's kind and returns its verdict."""

    def __init__(
        self,
        settings: CredentialProvider,
        config: Optional[ShieldConfig] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self.settings = settings
        self.config = config or ShieldConfig()
        self.transport = transport or RequestsTransport(timeout=self.config.timeout)
        self._handlers: Dict[FieldKind, Handler] = {
            FieldKind.EMAIL: self._validate_email,
            FieldKind.PHONE: self._validate_phone,
        }

    def register(self, kind: FieldKind, handler: Handler) -> None:
        self._handlers[FieldKind.coerce(kind)] = handler

    def validate(self, request: ValidationRequest) -> ValidationVerdict:
        handler = self._handlers.get(request.field_kind)
        if handler is None:
            return ValidationVerdict.accept()
        try:
            return handler(request)
        except Exception:
            logger.exception("Unexpected failure validating %s field", request.field_kind.value)
            return ValidationVerdict.reject(MSG_DEFECT)

    def validate_form(
        self, form_fields: Iterable[FieldDescriptor], values: MutableMapping[str, str]
    ) -> Dict[str, ValidationVerdict]:
        """Validate every field of a submission, writing derived values into `values`."""
        fields = tuple(form_fields)
        verdicts: Dict[str, ValidationVerdict] = {}
        for f in fields:
            request = ValidationRequest(f.kind, values.get(f.input_name, "") or "", fields)
            verdict = self.validate(request)
            apply_side_effects(verdict, values)
            verdicts[f.id] = verdict
        return verdicts

    def _validate_email(self, request: ValidationRequest) -> ValidationVerdict:
        state = NotificationState(sent=self.settings.get_bool(NOTIFICATION_SENT))
        verdict, new_state = verify_email(
            request.raw_value,
            self.settings.get_string(EMAIL_API_KEY),
            self.settings.get_string(WEBHOOK_URL),
            state,
            self.transport,
            self.config,
        )
        if new_state != state:
            self.settings.set_bool(NOTIFICATION_SENT, new_state.sent)
            logger.info("Credits notification flag set to %s", new_state.sent)
        return verdict

    def _validate_phone(self, request: ValidationRequest) -> ValidationVerdict:
        return verify_phone(
            request.raw_value,
            self.settings.get_string(PHONE_API_KEY),
            request.form_fields,
            self.transport,
            self.config,
        )


def apply_side_effects(verdict: ValidationVerdict, submission: MutableMapping[str, str]) -> None:
    """Write derived field values into the host's submission values."""
    if not verdict.is_valid:
        return
    for input_name, value in verdict.side_effects.items():
        submission[input_name] = value


def validate(
    request: ValidationRequest,
    settings: CredentialProvider,
    config: Optional[ShieldConfig] = None,
    transport: Optional[Transport] = None,
) -> ValidationVerdict:
    return Orchestrator(settings, config, transport).validate(request)
