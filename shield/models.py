"""Shared data models for field verification."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple


class FieldKind(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    HIDDEN = "hidden"
    OTHER = "other"

    @classmethod
    def coerce(cls, value: Any) -> "FieldKind":
        """Map a host field type onto a known kind; anything unknown is OTHER."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class FieldDescriptor:
    id: str
    kind: FieldKind
    label: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FieldKind.coerce(self.kind))

    @property
    def input_name(self) -> str:
        return f"input_{self.id}"


@dataclass(frozen=True)
class ValidationRequest:
    field_kind: FieldKind
    raw_value: str
    form_fields: Tuple[FieldDescriptor, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "field_kind", FieldKind.coerce(self.field_kind))

    @classmethod
    def build(
        cls, field_kind: Any, raw_value: Optional[str], form_fields: Iterable[FieldDescriptor] = ()
    ) -> "ValidationRequest":
        return cls(field_kind, raw_value or "", tuple(form_fields))


@dataclass
class ValidationVerdict:
    is_valid: bool
    message: Optional[str] = None
    side_effects: Dict[str, str] = field(default_factory=dict)  # input_<id> -> derived value

    @classmethod
    def accept(cls, side_effects: Optional[Dict[str, str]] = None) -> "ValidationVerdict":
        return cls(True, None, dict(side_effects or {}))

    @classmethod
    def reject(cls, message: str) -> "ValidationVerdict":
        return cls(False, message)


@dataclass(frozen=True)
class QuotaStatus:
    credits_available: int
    reachable: bool = True  # False when the count was degraded to 0 on error

    @property
    def exhausted(self) -> bool:
        return self.credits_available <= 0


@dataclass(frozen=True)
class NotificationState:
    sent: bool = False

    def mark_sent(self) -> "NotificationState":
        return NotificationState(sent=True)

    def reset(self) -> "NotificationState":
        return NotificationState(sent=False)


class EmailOutcome(str, Enum):
    ACCEPT = "accept"
    REJECT = "reject"


def classify_status(status: str, accept_statuses: Sequence[str]) -> EmailOutcome:
    """Map a provider status code onto ACCEPT/REJECT using the configured allow-list."""
    normalized = {s.strip().lower() for s in accept_statuses}
    if status.strip().lower() in normalized:
        return EmailOutcome.ACCEPT
    return EmailOutcome.REJECT


@dataclass(frozen=True)
class PhoneOutcome:
    valid: bool
    line_type: Optional[str]  # None/empty when the provider could not classify the line
    error_info: Optional[str]

    @classmethod
    def from_payload(cls, data: Dict[str, Any]) -> "PhoneOutcome":
        error = data.get("error")
        info = None
        if isinstance(error, dict):
            info = error.get("info")
        elif error:
            info = str(error)
        line_type = data.get("line_type")
        return cls(
            valid=bool(data.get("valid")),
            line_type=str(line_type).strip() if line_type else None,
            error_info=str(info) if info else None,
        )
