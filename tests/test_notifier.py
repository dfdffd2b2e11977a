from shield.notifier import EXHAUSTED_REASON, build_alert_text, notify

from .fakes import HOOK_URL, FakeTransport


def test_notify_posts_text_payload() -> None:
    transport = FakeTransport({HOOK_URL: {}})

    assert notify(HOOK_URL, "leads.example.org", EXHAUSTED_REASON, transport) is True

    call = transport.calls[0]
    assert call["method"] == "POST"
    assert call["json"] == {"text": build_alert_text("leads.example.org", EXHAUSTED_REASON)}
    assert "leads.example.org" in call["json"]["text"]
    assert EXHAUSTED_REASON in call["json"]["text"]


def test_notify_without_webhook_is_noop() -> None:
    transport = FakeTransport()

    assert notify("", "leads.example.org", EXHAUSTED_REASON, transport) is False
    assert transport.calls == []


def test_notify_swallows_delivery_failure(transport_error, caplog) -> None:
    transport = FakeTransport({HOOK_URL: transport_error})

    assert notify(HOOK_URL, "leads.example.org", EXHAUSTED_REASON, transport) is False
    assert "Failed to send alert" in caplog.text
