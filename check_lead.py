#!/usr/bin/env python3
"""
check_lead.py: manual checks against the LeadShield verifiers

Runs the same email/phone validation a form submission gets, so an
operator can see what a lead would be told.

Environment (.env)
  EMAIL_VERIFY_API_KEY=...
  PHONE_VERIFY_API_KEY=...
  ALERT_WEBHOOK_URL=...      (optional, credits-exhausted alert)
  SITE_DOMAIN=...            (optional, named in alerts)

Usage
  python check_lead.py email ADDRESS
  python check_lead.py phone NUMBER [--line-type-field ID]
  python check_lead.py credits
  python check_lead.py reset-alert
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

import click

from shield.models import FieldDescriptor, FieldKind, ValidationRequest, ValidationVerdict
from shield.orchestrator import Orchestrator
from shield.quota import check_credits
from shield.settings import EMAIL_API_KEY, NOTIFICATION_SENT, EnvSettings, ShieldConfig
from shield.transport import RequestsTransport


def print_verdict(kind: str, value: str, verdict: ValidationVerdict) -> None:
    print(f"\n================ {kind.title()} Check =================")
    print(f"🔎 Value:           {value}")
    if verdict.is_valid:
        print("✅ Verdict:         accepted")
    else:
        print("🚫 Verdict:         rejected")
        print(f"💡 Message:         {verdict.message}")
    for input_name, derived in verdict.side_effects.items():
        print(f"↪︎ Sets {input_name}: {derived}")
    print("============================================\n")


def _build(state_file: Optional[str]) -> Orchestrator:
    config = ShieldConfig.from_env()
    return Orchestrator(EnvSettings(state_file), config, RequestsTransport(timeout=config.timeout))


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--state-file", default=None, help="JSON file holding the alert flag.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging.")
@click.pass_context
def main(ctx: click.Context, state_file: Optional[str], verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = {"state_file": state_file}


@main.command()
@click.argument("address")
@click.pass_obj
def email(obj: dict, address: str) -> None:
    """Validate an email address as a form submission would."""
    verdict = _build(obj["state_file"]).validate(ValidationRequest(FieldKind.EMAIL, address))
    print_verdict("email", address, verdict)
    sys.exit(0 if verdict.is_valid else 1)


@main.command()
@click.argument("number")
@click.option("--line-type-field", default=None, help="Id of a hidden line_type field to fill.")
@click.pass_obj
def phone(obj: dict, number: str, line_type_field: Optional[str]) -> None:
    """Validate a phone number as a form submission would."""
    fields = []
    if line_type_field:
        fields.append(FieldDescriptor(line_type_field, FieldKind.HIDDEN, "line_type"))
    request = ValidationRequest(FieldKind.PHONE, number, tuple(fields))
    verdict = _build(obj["state_file"]).validate(request)
    print_verdict("phone", number, verdict)
    sys.exit(0 if verdict.is_valid else 1)


@main.command()
@click.pass_obj
def credits(obj: dict) -> None:
    """Show remaining email verification credits."""
    orchestrator = _build(obj["state_file"])
    api_key = orchestrator.settings.get_string(EMAIL_API_KEY)
    if not api_key:
        print("\n❌ Error: EMAIL_VERIFY_API_KEY is not set")
        sys.exit(2)
    quota = check_credits(api_key, orchestrator.transport, orchestrator.config.email_credits_url)
    if not quota.reachable:
        print("⚠️ Credits:         unknown (check failed, treated as 0)")
    else:
        print(f"📊 Credits:         {quota.credits_available}")
    sent = orchestrator.settings.get_bool(NOTIFICATION_SENT)
    print(f"🔔 Alert sent:      {'yes' if sent else 'no'}")


@main.command("reset-alert")
@click.pass_obj
def reset_alert(obj: dict) -> None:
    """Clear the credits-exhausted alert flag so the next exhaustion alerts again."""
    EnvSettings(obj["state_file"]).set_bool(NOTIFICATION_SENT, False)
    print("🔔 Alert flag cleared.")


if __name__ == "__main__":
    main()
