import sys

from flask import Blueprint, render_template, request, redirect, flash, abort

from ffmaxarena.helpers.auth import admin_required
from ffmaxarena.helpers.drafts import load_draft, save_draft, clear_draft, has_draft
from ffmaxarena.helpers.listing import GAME_MODES
from ffmaxarena.helpers.storage import UploadError, upload_image
from ffmaxarena.helpers.store import (
    StoreError, fetch_admin_data, get_tournament, get_organizer,
    insert_tournament, update_tournament, delete_tournament,
    insert_organizer, update_organizer, delete_organizer,
)
from ffmaxarena.helpers.validation import FREE_FIRE_MAPS, clean_tournament_form, clean_organizer_form
from ffmaxarena.models import BADGE_CHOICES

admin_bp = Blueprint("admin", __name__)

# form file field -> record URL field
TOURNAMENT_UPLOADS = {"poster_file": "poster_url", "banner_file": "banner_url"}
ORGANIZER_UPLOADS = {"logo_file": "logo_url"}


def _log(msg: str):
    print(f"[ADMIN] {msg}", file=sys.stderr)


@admin_bp.route("/admin")
@admin_required
def admin_page():
    """
    Dashboard. Always re-reads both collections, so after any create/update/
    delete (which redirect here) the lists reflect the database, not a
    locally patched copy.
    """
    try:
        tournaments, organizers = fetch_admin_data()
    except StoreError as e:
        flash(f"Error fetching admin data: {e}", "error")
        tournaments, organizers = [], []

    tab = request.args.get("tab", "tournaments")
    if tab not in ("tournaments", "organizers"):
        tab = "tournaments"

    return render_template(
        "admin/dashboard.html",
        tab=tab,
        tournaments=tournaments,
        organizers=organizers,
        has_new_tournament_draft=has_draft("tournament"),
        has_new_organizer_draft=has_draft("organizer"),
    )


def _apply_uploads(form, uploads: dict):
    """Upload any attached images and write their public URLs into `form`."""
    for file_field, url_field in uploads.items():
        file_storage = request.files.get(file_field)
        if file_storage is None or not file_storage.filename:
            continue
        form[url_field] = upload_image(file_storage)


# --- Tournaments ---

def tournament_form_values(tournament) -> dict:
    if tournament is None:
        return {}
    values = {
        name: "" if getattr(tournament, name) is None else getattr(tournament, name)
        for name in tournament.EDITABLE_FIELDS
    }
    values["date"] = tournament.date.isoformat() if tournament.date else ""
    values["is_verified"] = "on" if tournament.is_verified else ""
    return values


def _render_tournament_form(tournament, values, errors=None, status=200):
    return render_template(
        "admin/tournament_form.html",
        tournament=tournament,
        values=values,
        errors=errors or {},
        game_modes=GAME_MODES,
        maps=FREE_FIRE_MAPS,
    ), status


def _tournament_form(tournament):
    entity_id = tournament.id if tournament else None

    if request.method == "GET":
        draft = load_draft("tournament", entity_id)
        if draft:
            flash("Restored your unsaved changes.", "warning")
        return _render_tournament_form(tournament, draft or tournament_form_values(tournament))

    action = request.form.get("action", "save")

    if action == "cancel":
        clear_draft("tournament", entity_id)
        return redirect("/admin")

    form = request.form.copy()
    values = save_draft("tournament", entity_id, form)

    if action == "save_draft":
        flash("Draft saved.", "success")
        return _render_tournament_form(tournament, values)

    try:
        _apply_uploads(form, TOURNAMENT_UPLOADS)
    except UploadError as e:
        flash(str(e), "error")
        return _render_tournament_form(tournament, values, status=400)
    values = save_draft("tournament", entity_id, form)

    cleaned, errors = clean_tournament_form(form)
    if errors:
        flash("Please fix the highlighted fields.", "error")
        return _render_tournament_form(tournament, values, errors, status=400)

    try:
        if tournament is None:
            insert_tournament(cleaned)
        else:
            update_tournament(tournament.id, cleaned)
    except StoreError as e:
        verb = "add" if tournament is None else "update"
        flash(f"Failed to {verb} tournament: {e}", "error")
        return _render_tournament_form(tournament, values, status=500)

    clear_draft("tournament", entity_id)
    flash("Tournament added successfully!" if tournament is None else "Tournament updated successfully!", "success")
    return redirect("/admin?tab=tournaments")


@admin_bp.route("/admin/tournaments/new", methods=["GET", "POST"])
@admin_required
def new_tournament():
    return _tournament_form(None)


@admin_bp.route("/admin/tournaments/<int:tournament_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_tournament(tournament_id):
    try:
        tournament = get_tournament(tournament_id)
    except StoreError:
        tournament = None
    if tournament is None:
        abort(404)
    return _tournament_form(tournament)


@admin_bp.route("/admin/tournaments/<int:tournament_id>/delete", methods=["GET", "POST"])
@admin_required
def remove_tournament(tournament_id):
    try:
        tournament = get_tournament(tournament_id)
    except StoreError:
        tournament = None
    if tournament is None:
        abort(404)

    if request.method == "GET":
        return render_template(
            "admin/confirm_delete.html",
            kind="tournament",
            label=tournament.title,
            action_url=f"/admin/tournaments/{tournament.id}/delete",
            back_url="/admin?tab=tournaments",
        )

    if request.form.get("confirm") != "yes":
        flash("Delete cancelled.", "warning")
        return redirect("/admin?tab=tournaments")

    try:
        delete_tournament(tournament.id)
    except StoreError as e:
        flash(f"Failed to delete tournament: {e}", "error")
        return redirect("/admin?tab=tournaments")

    clear_draft("tournament", tournament_id)
    _log(f"Tournament {tournament_id} deleted")
    flash("Tournament deleted.", "success")
    return redirect("/admin?tab=tournaments")


# --- Organizers ---

def organizer_form_values(organizer) -> dict:
    if organizer is None:
        return {"badges": []}
    values = {
        name: "" if getattr(organizer, name) is None else getattr(organizer, name)
        for name in organizer.EDITABLE_FIELDS
    }
    values["badges"] = list(organizer.badges or [])
    values["is_verified"] = "on" if organizer.is_verified else ""
    return values


def _render_organizer_form(organizer, values, errors=None, status=200):
    return render_template(
        "admin/organizer_form.html",
        organizer=organizer,
        values=values,
        errors=errors or {},
        badge_choices=BADGE_CHOICES,
    ), status


def _organizer_form(organizer):
    entity_id = organizer.id if organizer else None

    if request.method == "GET":
        draft = load_draft("organizer", entity_id)
        if draft:
            flash("Restored your unsaved changes.", "warning")
        return _render_organizer_form(organizer, draft or organizer_form_values(organizer))

    action = request.form.get("action", "save")

    if action == "cancel":
        clear_draft("organizer", entity_id)
        return redirect("/admin?tab=organizers")

    form = request.form.copy()
    values = save_draft("organizer", entity_id, form)

    if action == "save_draft":
        flash("Draft saved.", "success")
        return _render_organizer_form(organizer, values)

    try:
        _apply_uploads(form, ORGANIZER_UPLOADS)
    except UploadError as e:
        flash(str(e), "error")
        return _render_organizer_form(organizer, values, status=400)
    values = save_draft("organizer", entity_id, form)

    cleaned, errors = clean_organizer_form(form)
    if errors:
        flash("Please fix the highlighted fields.", "error")
        return _render_organizer_form(organizer, values, errors, status=400)

    try:
        if organizer is None:
            insert_organizer(cleaned)
        else:
            update_organizer(organizer.id, cleaned)
    except StoreError as e:
        verb = "add" if organizer is None else "update"
        flash(f"Failed to {verb} organizer: {e}", "error")
        return _render_organizer_form(organizer, values, status=500)

    clear_draft("organizer", entity_id)
    flash("Organizer added successfully!" if organizer is None else "Organizer updated successfully!", "success")
    return redirect("/admin?tab=organizers")


@admin_bp.route("/admin/organizers/new", methods=["GET", "POST"])
@admin_required
def new_organizer():
    return _organizer_form(None)


@admin_bp.route("/admin/organizers/<int:organizer_id>/edit", methods=["GET", "POST"])
@admin_required
def edit_organizer(organizer_id):
    try:
        organizer = get_organizer(organizer_id)
    except StoreError:
        organizer = None
    if organizer is None:
        abort(404)
    return _organizer_form(organizer)


@admin_bp.route("/admin/organizers/<int:organizer_id>/delete", methods=["GET", "POST"])
@admin_required
def remove_organizer(organizer_id):
    try:
        organizer = get_organizer(organizer_id)
    except StoreError:
        organizer = None
    if organizer is None:
        abort(404)

    if request.method == "GET":
        return render_template(
            "admin/confirm_delete.html",
            kind="organizer",
            label=organizer.name,
            action_url=f"/admin/organizers/{organizer.id}/delete",
            back_url="/admin?tab=organizers",
        )

    if request.form.get("confirm") != "yes":
        flash("Delete cancelled.", "warning")
        return redirect("/admin?tab=organizers")

    try:
        delete_organizer(organizer.id)
    except StoreError as e:
        flash(f"Failed to delete organizer: {e}", "error")
        return redirect("/admin?tab=organizers")

    clear_draft("organizer", organizer_id)
    _log(f"Organizer {organizer_id} deleted")
    flash("Organizer deleted.", "success")
    return redirect("/admin?tab=organizers")
