"""
Form validation for the admin CRUD forms and the public relay forms.

Each `clean_*` function takes a request form (any mapping with `.get`,
plus `.getlist` for multi-selects) and returns `(values, errors)`.
`errors` maps field name -> message; when it is non-empty nothing should be
written or sent.
"""
import re
from typing import Optional

from ffmaxarena.helpers.time import india_today, parse_date, format_time
from ffmaxarena.helpers.listing import GAME_MODES
from ffmaxarena.models import BADGE_CHOICES

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
TIME_RE = re.compile(r"^(0?[1-9]|1[0-2]):[0-5]\d (AM|PM)$", re.IGNORECASE)
URL_RE = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)

FREE_FIRE_MAPS = ("Bermuda", "Bermuda Remastered", "Purgatory", "Kalahari", "Alpine", "NeXTerra")

TOURNAMENT_URL_FIELDS = (
    "poster_url", "banner_url", "registration_link",
    "whatsapp_link", "discord_link", "youtube_link",
)
ORGANIZER_URL_FIELDS = ("logo_url", "youtube_channel", "instagram_profile")


def _s(form, name: str) -> str:
    return (form.get(name) or "").strip()


def _opt(form, name: str) -> Optional[str]:
    return _s(form, name) or None


def _checkbox(form, name: str) -> bool:
    return _s(form, name).lower() in ("1", "on", "true", "yes")


def is_valid_email(email: str) -> bool:
    return bool(email and EMAIL_RE.search(email))


def is_valid_url(url: str) -> bool:
    return bool(url and URL_RE.match(url))


def _check_urls(values: dict, fields, errors: dict):
    for name in fields:
        value = values.get(name)
        if value and not is_valid_url(value):
            errors[name] = "Please enter a full link starting with http:// or https://"


def _time_from_form(form) -> str:
    """
    Either a single "time" field ("07:00 PM") or the hour/minute/ampm
    selects used by the submission form.
    """
    raw = _s(form, "time")
    if raw:
        return raw.upper()
    hour, minute, ampm = _s(form, "hour"), _s(form, "minute"), _s(form, "ampm")
    if hour and minute and ampm:
        try:
            return format_time(hour, minute, ampm)
        except ValueError:
            return f"{hour}:{minute} {ampm}"
    return ""


def clean_tournament_form(form):
    """Admin create/update of a tournament row."""
    errors = {}

    values = {
        "title": _s(form, "title"),
        "organizer_name": _s(form, "organizer_name"),
        "description": _opt(form, "description"),
        "game_mode": _opt(form, "game_mode"),
        "map": _opt(form, "map"),
        "prize_pool": _opt(form, "prize_pool"),
        "entry_fee": _opt(form, "entry_fee"),
        "max_participants": _opt(form, "max_participants"),
        "time": _time_from_form(form),
        "poster_url": _opt(form, "poster_url"),
        "banner_url": _opt(form, "banner_url"),
        "registration_link": _opt(form, "registration_link"),
        "whatsapp_link": _opt(form, "whatsapp_link"),
        "discord_link": _opt(form, "discord_link"),
        "youtube_link": _opt(form, "youtube_link"),
        "is_verified": _checkbox(form, "is_verified"),
        "status": _opt(form, "status"),
    }

    if not values["title"]:
        errors["title"] = "Tournament title is required"
    if not values["organizer_name"]:
        errors["organizer_name"] = "Organizer name is required"

    raw_date = _s(form, "date")
    values["date"] = parse_date(raw_date)
    if not raw_date:
        errors["date"] = "Tournament date is required"
    elif values["date"] is None:
        errors["date"] = "Date must look like YYYY-MM-DD"

    if not values["time"]:
        errors["time"] = "Start time is required"
    elif not TIME_RE.match(values["time"]):
        errors["time"] = "Time must look like 07:00 PM"

    if values["game_mode"] and values["game_mode"] not in GAME_MODES:
        errors["game_mode"] = "Pick one of: " + ", ".join(GAME_MODES)

    _check_urls(values, TOURNAMENT_URL_FIELDS, errors)
    return values, errors


def clean_organizer_form(form):
    """Admin create/update of an organizer row."""
    errors = {}

    badges = form.getlist("badges") if hasattr(form, "getlist") else list(form.get("badges") or [])
    values = {
        "name": _s(form, "name"),
        "contact_email": _s(form, "contact_email"),
        "about": _opt(form, "about"),
        "logo_url": _opt(form, "logo_url"),
        "discord_id": _opt(form, "discord_id"),
        "youtube_channel": _opt(form, "youtube_channel"),
        "instagram_profile": _opt(form, "instagram_profile"),
        "whatsapp_number": _opt(form, "whatsapp_number"),
        "is_verified": _checkbox(form, "is_verified"),
        "badges": [b for b in badges if b in BADGE_CHOICES],
    }

    if not values["name"]:
        errors["name"] = "Organizer name is required"
    if not values["contact_email"]:
        errors["contact_email"] = "Contact email is required"
    elif not is_valid_email(values["contact_email"]):
        errors["contact_email"] = "Email address is invalid"

    raw_rating = _s(form, "rating") or "0"
    try:
        values["rating"] = float(raw_rating)
        if not 0 <= values["rating"] <= 5:
            errors["rating"] = "Rating must be between 0 and 5"
    except ValueError:
        values["rating"] = raw_rating
        errors["rating"] = "Rating must be a number"

    for name in ("total_tournaments", "players_served"):
        raw = _s(form, name) or "0"
        if raw.isdigit():
            values[name] = int(raw)
        else:
            values[name] = raw
            errors[name] = "Must be a whole number, 0 or more"

    _check_urls(values, ORGANIZER_URL_FIELDS, errors)
    return values, errors


# --- Public relay forms ---

SUBMISSION_STEP_FIELDS = {
    1: ("organizer_name", "email", "tournament_title"),
    2: ("date", "entry_fee"),
    3: ("poster_url",),
}


def clean_submission_form(form, today=None):
    """Public "submit your tournament" form. Validated before any relay call."""
    errors = {}
    today = today or india_today()

    values = {
        "organizer_name": _s(form, "organizer_name"),
        "email": _s(form, "email"),
        "tournament_title": _s(form, "tournament_title"),
        "date": _s(form, "date"),
        "hour": _s(form, "hour") or "07",
        "minute": _s(form, "minute") or "00",
        "ampm": (_s(form, "ampm") or "PM").upper(),
        "entry_fee": _s(form, "entry_fee"),
        "game_mode": _s(form, "game_mode") or "Squad",
        "map": _s(form, "map") or "Bermuda",
        "prize_pool": _s(form, "prize_pool"),
        "max_participants": _s(form, "max_participants"),
        "whatsapp_link": _s(form, "whatsapp_link"),
        "discord_link": _s(form, "discord_link"),
        "registration_link": _s(form, "registration_link"),
        "youtube_link": _s(form, "youtube_link"),
        "description": _s(form, "description"),
        "poster_url": _s(form, "poster_url"),
    }

    if not values["organizer_name"]:
        errors["organizer_name"] = "Organizer name is required"
    if not values["email"]:
        errors["email"] = "Organizer email is required"
    elif not is_valid_email(values["email"]):
        errors["email"] = "Email address is invalid"
    if not values["tournament_title"]:
        errors["tournament_title"] = "Tournament title is required"

    if not values["date"]:
        errors["date"] = "Tournament date is required"
    else:
        day = parse_date(values["date"])
        if day is None:
            errors["date"] = "Tournament date is required"
        elif day < today:
            errors["date"] = "Date cannot be in the past"
    if not values["entry_fee"]:
        errors["entry_fee"] = "Entry fee is required (e.g., FREE or 50)"

    if not values["poster_url"]:
        errors["poster_url"] = "A poster image is required. Please upload one."

    _check_urls(values, ("whatsapp_link", "discord_link", "registration_link", "youtube_link"), errors)
    return values, errors


def first_error_step(errors: dict, step_fields: dict) -> int:
    """Step of the multi-step form that holds the first failing field."""
    for step in sorted(step_fields):
        if any(name in errors for name in step_fields[step]):
            return step
    return max(step_fields) + 1 if step_fields else 1


VERIFICATION_STEP_FIELDS = {
    1: ("organizer_name", "organization_name", "email", "phone"),
    2: ("experience", "why_verified"),
}


def clean_verification_form(form):
    """Organizer verification application."""
    errors = {}
    values = {
        name: _s(form, name)
        for name in (
            "organizer_name", "email", "phone", "organization_name", "experience",
            "previous_tournaments", "whatsapp_link", "discord_link", "social_media",
            "why_verified", "proof_links", "logo_url",
        )
    }

    if not values["organizer_name"]:
        errors["organizer_name"] = "Name is required"
    if not values["organization_name"]:
        errors["organization_name"] = "Organization name is required"
    if not values["email"]:
        errors["email"] = "Email is required"
    elif not is_valid_email(values["email"]):
        errors["email"] = "Email is invalid"
    if not values["phone"]:
        errors["phone"] = "Phone number is required"
    if not values["experience"]:
        errors["experience"] = "Experience is required"
    if not values["why_verified"]:
        errors["why_verified"] = "This field is required"

    _check_urls(values, ("whatsapp_link", "discord_link", "logo_url"), errors)
    return values, errors


def clean_contact_form(form):
    errors = {}
    values = {
        "full_name": _s(form, "full_name"),
        "email": _s(form, "email"),
        "subject": _s(form, "subject"),
        "message": _s(form, "message"),
    }
    if not values["full_name"]:
        errors["full_name"] = "Your name is required"
    if not values["email"]:
        errors["email"] = "Email is required"
    elif not is_valid_email(values["email"]):
        errors["email"] = "Email address is invalid"
    if not values["message"]:
        errors["message"] = "Message is required"
    return values, errors


def clean_newsletter_form(form):
    email = _s(form, "email")
    errors = {}
    if not is_valid_email(email):
        errors["email"] = "Please enter a valid email address."
    return {"email": email}, errors
