"""
Client for the third-party form relay.

Tournament submissions, organizer verification applications, contact
messages and newsletter signups are all POSTed here as JSON. Nothing in this
module touches the database: admins transcribe approved submissions by hand
through the admin panel.
"""
import sys

import requests
from flask import current_app


class RelayError(Exception):
    """The relay rejected the form or could not be reached."""


class RelayNotConfigured(RelayError):
    pass


def _log(msg: str):
    print(f"[RELAY] {msg}", file=sys.stderr)


def send_to_relay(fields: dict, subject: str, from_name: str) -> dict:
    access_key = current_app.config.get("WEB3FORMS_ACCESS_KEY")
    if not access_key:
        raise RelayNotConfigured("Form submission is not configured.")

    body = dict(fields)
    body.update({
        "access_key": access_key,
        "subject": subject,
        "from_name": from_name,
    })

    try:
        resp = requests.post(
            current_app.config.get("FORM_RELAY_URL", "https://api.web3forms.com/submit"),
            json=body,
            headers={"Accept": "application/json"},
            timeout=current_app.config.get("HTTP_TIMEOUT", 15),
        )
    except requests.RequestException as e:
        _log(f"Relay request failed: {e}")
        raise RelayError("Failed to send. Please try again later.") from e

    try:
        result = resp.json()
    except ValueError:
        _log(f"Relay returned non-JSON response ({resp.status_code})")
        raise RelayError("An error occurred submitting the form.")

    if not isinstance(result, dict):
        _log(f"Relay returned unexpected payload ({resp.status_code}): {result!r}")
        raise RelayError("An error occurred submitting the form.")

    if not result.get("success"):
        _log(f"Relay error: {result}")
        raise RelayError(result.get("message") or "An error occurred submitting the form.")

    _log(f"Relayed: {subject}")
    return result


def relay_tournament_submission(values: dict) -> dict:
    full_date_time = f"{values['date']} at {values['hour']}:{values['minute']} {values['ampm']}"
    fields = dict(values)
    fields["fullDateTime"] = full_date_time
    return send_to_relay(
        fields,
        subject=f"New Tournament Submission: {values['tournament_title']}",
        from_name="FFMaxArena Submissions",
    )


def relay_verification_request(values: dict) -> dict:
    return send_to_relay(
        values,
        subject=f"New Organizer Verification: {values['organizer_name']}",
        from_name="FFMaxArena Verifications",
    )


def relay_contact_message(values: dict) -> dict:
    return send_to_relay(
        values,
        subject=f"Contact Form: {values.get('subject') or 'No Subject'}",
        from_name=values["full_name"],
    )


def relay_newsletter_signup(email: str) -> dict:
    return send_to_relay(
        {"email": email, "message": f"{email} has subscribed to the newsletter."},
        subject=f"New Newsletter Subscription: {email}",
        from_name="FFMaxArena Newsletter",
    )
