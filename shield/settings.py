"""Settings store: API keys, endpoints and the persisted alert flag."""

import json
import logging
import os
import socket
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Setting keys
EMAIL_API_KEY = "EMAIL_VERIFY_API_KEY"
PHONE_API_KEY = "PHONE_VERIFY_API_KEY"
WEBHOOK_URL = "ALERT_WEBHOOK_URL"
NOTIFICATION_SENT = "credits_notification_sent"

DEFAULT_ACCEPT_STATUSES: Tuple[str, ...] = (
    "valid",
    "accept_all",
    "accept-all",
    "unknown",
    "deliverable",
    "ok",
)
DEFAULT_EMAIL_VERIFY_URL = "https://apps.emaillistverify.com/api/verifyEmail"
DEFAULT_EMAIL_CREDITS_URL = "https://apps.emaillistverify.com/api/credits"
DEFAULT_PHONE_VALIDATE_URL = "http://apilayer.net/api/validate"
DEFAULT_STATE_FILE = ".lead_shield_state.json"


class CredentialProvider(Protocol):
    def get_string(self, key: str) -> str: ...

    def get_bool(self, key: str) -> bool: ...

    def set_bool(self, key: str, value: bool) -> None: ...


class MemorySettings:
    """Dict-backed provider for embedding hosts and tests."""

    def __init__(self, values: Optional[Dict[str, str]] = None, flags: Optional[Dict[str, bool]] = None):
        self.values = dict(values or {})
        self.flags = dict(flags or {})
        self.writes = 0

    def get_string(self, key: str) -> str:
        return self.values.get(key, "") or ""

    def get_bool(self, key: str) -> bool:
        return bool(self.flags.get(key, False))

    def set_bool(self, key: str, value: bool) -> None:
        self.flags[key] = bool(value)
        self.writes += 1


class EnvSettings:
    """Reads strings from the environment (.env aware); persists flags to a JSON file."""

    def __init__(self, state_file: Optional[str] = None, load_env: bool = True):
        if load_env:
            load_dotenv()
        self.state_path = Path(state_file or os.getenv("LEAD_SHIELD_STATE_FILE") or DEFAULT_STATE_FILE)

    def get_string(self, key: str) -> str:
        return (os.getenv(key) or "").strip()

    def get_bool(self, key: str) -> bool:
        return bool(self._read_state().get(key, False))

    def set_bool(self, key: str, value: bool) -> None:
        state = self._read_state()
        state[key] = bool(value)
        self.state_path.write_text(json.dumps(state, indent=2), encoding="utf-8")

    def _read_state(self) -> Dict[str, bool]:
        if not self.state_path.exists():
            return {}
        try:
            data = json.loads(self.state_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self.state_path, e)
            return {}
        return data if isinstance(data, dict) else {}


def _split_statuses(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_ACCEPT_STATUSES
    statuses = tuple(s.strip().lower() for s in raw.split(",") if s.strip())
    return statuses or DEFAULT_ACCEPT_STATUSES


@dataclass
class ShieldConfig:
    email_verify_url: str = DEFAULT_EMAIL_VERIFY_URL
    email_credits_url: str = DEFAULT_EMAIL_CREDITS_URL
    phone_validate_url: str = DEFAULT_PHONE_VALIDATE_URL
    accept_statuses: Tuple[str, ...] = DEFAULT_ACCEPT_STATUSES
    site_domain: str = field(default_factory=socket.gethostname)
    phone_country_code: str = "1"
    timeout: float = 15.0

    @classmethod
    def from_env(cls) -> "ShieldConfig":
        load_dotenv()
        return cls(
            email_verify_url=os.getenv("EMAIL_VERIFY_URL") or DEFAULT_EMAIL_VERIFY_URL,
            email_credits_url=os.getenv("EMAIL_CREDITS_URL") or DEFAULT_EMAIL_CREDITS_URL,
            phone_validate_url=os.getenv("PHONE_VALIDATE_URL") or DEFAULT_PHONE_VALIDATE_URL,
            accept_statuses=_split_statuses(os.getenv("EMAIL_ACCEPT_STATUSES")),
            site_domain=os.getenv("SITE_DOMAIN") or socket.gethostname(),
            phone_country_code=os.getenv("PHONE_COUNTRY_CODE") or "1",
            timeout=float(os.getenv("HTTP_TIMEOUT") or 15),
        )
