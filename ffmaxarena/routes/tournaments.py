from flask import Blueprint, render_template, request, redirect, flash, abort

from ffmaxarena.helpers.display import parse_player_count
from ffmaxarena.helpers.drafts import load_draft, save_draft, clear_draft
from ffmaxarena.helpers.listing import (
    GAME_MODES, MODE_OPTIONS, TYPE_OPTIONS, PAGE_SIZE,
    parse_listing_args, fetch_tournament_page, total_pages, page_window, filter_args,
)
from ffmaxarena.helpers.relay import RelayError, relay_tournament_submission
from ffmaxarena.helpers.storage import UploadError, upload_image
from ffmaxarena.helpers.store import StoreError, get_tournament, get_organizer_by_name, list_organizers
from ffmaxarena.helpers.time import (
    status_for, countdown_parts, tournament_start, STATUS_REFRESH_SECONDS, COUNTDOWN_TICK_SECONDS,
)
from ffmaxarena.helpers.validation import (
    FREE_FIRE_MAPS, SUBMISSION_STEP_FIELDS, clean_submission_form, first_error_step,
)

tournaments_bp = Blueprint("tournaments", __name__)

SUBMISSION_DRAFT = "submission"
SUBMISSION_STEPS = ("Core Info", "Schedule & Rules", "Media & Links", "Review & Submit")
HOUR_OPTIONS = [f"{h:02d}" for h in range(1, 13)]
MINUTE_OPTIONS = [f"{m:02d}" for m in range(60)]


@tournaments_bp.route("/tournaments")
def tournaments_index():
    """
    Paged listing. Search/filter/sort/paging all run in the database; the
    filter form never posts `page`, so any filter change lands on page 1.
    """
    params = parse_listing_args(request.args)

    try:
        rows, total = fetch_tournament_page(params)
    except StoreError:
        flash("Could not load tournaments right now. Please try again later.", "error")
        rows, total = [], 0

    pages = total_pages(total)
    try:
        organizers = list_organizers()
    except StoreError:
        organizers = []

    return render_template(
        "tournaments.html",
        tournaments=rows,
        organizers=organizers,
        total=total,
        params=params,
        pages=pages,
        page_numbers=page_window(params["page"], pages),
        filter_args=filter_args,
        mode_options=MODE_OPTIONS,
        type_options=TYPE_OPTIONS,
        page_size=PAGE_SIZE,
        refresh_seconds=STATUS_REFRESH_SECONDS,
    )


@tournaments_bp.route("/tournaments/<int:tournament_id>")
def tournament_detail(tournament_id):
    try:
        tournament = get_tournament(tournament_id)
    except StoreError:
        tournament = None
    if tournament is None:
        abort(404)

    try:
        organizer = get_organizer_by_name(tournament.organizer_name)
    except StoreError:
        organizer = None

    status = status_for(tournament)
    start = tournament_start(tournament.date, tournament.time)

    return render_template(
        "tournament_detail.html",
        tournament=tournament,
        organizer=organizer,
        status=status,
        countdown=countdown_parts(tournament.date, tournament.time),
        start_iso=start.isoformat() if start else None,
        player_count=parse_player_count(tournament.max_participants),
        share_url=request.url,
        refresh_seconds=STATUS_REFRESH_SECONDS,
        tick_seconds=COUNTDOWN_TICK_SECONDS,
    )


def _render_submit(values, errors=None, step=1):
    return render_template(
        "submit.html",
        values=values or {},
        errors=errors or {},
        step=step,
        steps=SUBMISSION_STEPS,
        game_modes=GAME_MODES,
        maps=FREE_FIRE_MAPS,
        hours=HOUR_OPTIONS,
        minutes=MINUTE_OPTIONS,
    )


@tournaments_bp.route("/submit", methods=["GET", "POST"])
def submit_tournament():
    """
    Public submission form. Approved submissions reach the tournaments table
    only when an admin enters them by hand; this route only relays.
    """
    if request.method == "GET":
        return _render_submit(load_draft(SUBMISSION_DRAFT) or {})

    action = request.form.get("action", "submit")

    if action == "reset":
        clear_draft(SUBMISSION_DRAFT)
        flash("Form cleared.", "success")
        return redirect("/submit")

    values = save_draft(SUBMISSION_DRAFT, None, request.form)

    if action == "upload_poster":
        try:
            values["poster_url"] = upload_image(request.files.get("poster_file"))
        except UploadError as e:
            flash(str(e), "error")
            return _render_submit(values, step=3)
        save_draft(SUBMISSION_DRAFT, None, values)
        flash("Poster uploaded.", "success")
        return _render_submit(values, step=3)

    if action == "remove_poster":
        values["poster_url"] = ""
        save_draft(SUBMISSION_DRAFT, None, values)
        return _render_submit(values, step=3)

    cleaned, errors = clean_submission_form(request.form)
    if errors:
        flash("Please review your submission. Some required fields are missing.", "error")
        return _render_submit(values, errors, step=first_error_step(errors, SUBMISSION_STEP_FIELDS))

    try:
        relay_tournament_submission(cleaned)
    except RelayError as e:
        flash(str(e), "error")
        return _render_submit(values, step=len(SUBMISSION_STEPS))

    clear_draft(SUBMISSION_DRAFT)
    return redirect("/thank-you/submission")
