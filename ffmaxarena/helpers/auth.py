import sys
from functools import wraps

import requests
from flask import current_app, flash, redirect, session


class AuthError(Exception):
    """Identity provider refused the credentials or could not be reached."""


def sign_in_with_password(email: str, password: str) -> dict:
    """
    Password grant against the hosted identity provider.
    Returns the token payload; raises AuthError on any failure.
    """
    base = current_app.config["SUPABASE_URL"].rstrip("/")
    key = current_app.config["SUPABASE_ANON_KEY"]

    try:
        resp = requests.post(
            f"{base}/auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers={"apikey": key, "Authorization": f"Bearer {key}"},
            timeout=current_app.config.get("HTTP_TIMEOUT", 15),
        )
    except requests.RequestException as e:
        print(f"[AUTH] Sign-in request failed: {e}", file=sys.stderr)
        raise AuthError("Could not reach the login service. Please try again.") from e

    try:
        data = resp.json()
    except ValueError:
        data = {}

    if resp.status_code != 200:
        message = data.get("error_description") or data.get("msg") or data.get("message")
        print(f"[AUTH] Sign-in rejected for {email} ({resp.status_code})", file=sys.stderr)
        raise AuthError(message or "An unknown error occurred.")

    return data


def establish_admin_session(email: str):
    session["admin_ok"] = True
    session["admin_email"] = (email or "").strip().lower()


def clear_admin_session():
    session.pop("admin_ok", None)
    session.pop("admin_email", None)


def is_authenticated() -> bool:
    return bool(session.get("admin_ok"))


def admin_required(view):
    """Redirect to /login unless the admin session is set."""
    @wraps(view)
    def wrapped(*args, **kwargs):
        if not is_authenticated():
            flash("Please log in to access the admin panel.", "warning")
            return redirect("/login")
        return view(*args, **kwargs)
    return wrapped
