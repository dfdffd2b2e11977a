import pytest

from shield.settings import (
    EMAIL_API_KEY,
    PHONE_API_KEY,
    WEBHOOK_URL,
    MemorySettings,
    ShieldConfig,
)
from shield.transport import TransportError

from .fakes import CREDITS_URL, HOOK_URL, PHONE_URL, VERIFY_URL


@pytest.fixture
def config() -> ShieldConfig:
    return ShieldConfig(
        email_verify_url=VERIFY_URL,
        email_credits_url=CREDITS_URL,
        phone_validate_url=PHONE_URL,
        site_domain="leads.example.org",
    )


@pytest.fixture
def settings() -> MemorySettings:
    return MemorySettings(
        {
            EMAIL_API_KEY: "email-key",
            PHONE_API_KEY: "phone-key",
            WEBHOOK_URL: HOOK_URL,
        }
    )


@pytest.fixture
def transport_error() -> TransportError:
    return TransportError("HTTP error: connection refused")
