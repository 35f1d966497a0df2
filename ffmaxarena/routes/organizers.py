from flask import Blueprint, render_template, request, redirect, flash, abort

from ffmaxarena.helpers.display import parse_player_count
from ffmaxarena.helpers.drafts import load_draft, save_draft, clear_draft
from ffmaxarena.helpers.relay import RelayError, relay_verification_request
from ffmaxarena.helpers.store import (
    StoreError, get_organizer, list_verified_organizers, tournaments_for_organizer,
)
from ffmaxarena.helpers.time import status_for
from ffmaxarena.helpers.validation import (
    VERIFICATION_STEP_FIELDS, clean_verification_form, first_error_step,
)

organizers_bp = Blueprint("organizers", __name__)

VERIFICATION_DRAFT = "verification"
VERIFICATION_STEPS = ("Contact", "Experience", "Links", "Review & Submit")


@organizers_bp.route("/organizers")
def organizers_index():
    try:
        organizers = list_verified_organizers()
    except StoreError:
        flash("Could not load organizers right now. Please try again later.", "error")
        organizers = []

    return render_template("organizers.html", organizers=organizers)


@organizers_bp.route("/organizers/<int:organizer_id>")
def organizer_detail(organizer_id):
    try:
        organizer = get_organizer(organizer_id)
    except StoreError:
        organizer = None
    if organizer is None:
        abort(404)

    try:
        tournaments = tournaments_for_organizer(organizer.name)
    except StoreError:
        flash("Could not load this organizer's tournaments.", "error")
        tournaments = []

    active, past = [], []
    for t in tournaments:
        (past if status_for(t)["is_completed"] else active).append(t)

    return render_template(
        "organizer_detail.html",
        organizer=organizer,
        active_tournaments=active,
        past_tournaments=past,
        hosted_players=sum(parse_player_count(t.max_participants) for t in tournaments),
    )


def _render_verify(values, errors=None, step=1):
    return render_template(
        "verify_organizer.html",
        values=values or {},
        errors=errors or {},
        step=step,
        steps=VERIFICATION_STEPS,
    )


@organizers_bp.route("/organizers/verify", methods=["GET", "POST"])
def verify_organizer():
    """
    Verification application. Relayed for human review; a verified organizer
    only appears once an admin creates the row.
    """
    if request.method == "GET":
        return _render_verify(load_draft(VERIFICATION_DRAFT) or {})

    action = request.form.get("action", "submit")

    if action == "cancel":
        clear_draft(VERIFICATION_DRAFT)
        return redirect("/organizers")

    if action == "reset":
        clear_draft(VERIFICATION_DRAFT)
        flash("Form cleared.", "success")
        return redirect("/organizers/verify")

    values = save_draft(VERIFICATION_DRAFT, None, request.form)

    cleaned, errors = clean_verification_form(request.form)
    if errors:
        flash("Please fill all required fields before submitting.", "error")
        return _render_verify(values, errors, step=first_error_step(errors, VERIFICATION_STEP_FIELDS))

    try:
        relay_verification_request(cleaned)
    except RelayError as e:
        flash(str(e), "error")
        return _render_verify(values, step=len(VERIFICATION_STEPS))

    clear_draft(VERIFICATION_DRAFT)
    return redirect("/thank-you/verification")
