from flask import Blueprint, request, jsonify, abort

from ffmaxarena.helpers.auth import is_authenticated
from ffmaxarena.helpers.drafts import draft_key, save_draft

drafts_bp = Blueprint("drafts", __name__)

# entity -> whether it belongs to the admin panel
DRAFT_ENTITIES = {
    "tournament": True,
    "organizer": True,
    "submission": False,
    "verification": False,
}


@drafts_bp.route("/drafts/<entity>", methods=["POST"])
@drafts_bp.route("/drafts/<entity>/<int:entity_id>", methods=["POST"])
def autosave_draft(entity, entity_id=None):
    """
    Background save from arena.js while a form is being edited.
    Public forms only have a "new" draft; admin drafts need the admin session.
    """
    if entity not in DRAFT_ENTITIES:
        abort(404)
    is_admin_form = DRAFT_ENTITIES[entity]
    if not is_admin_form and entity_id is not None:
        abort(404)
    if is_admin_form and not is_authenticated():
        return jsonify({"error": "Admin login required"}), 403

    values = save_draft(entity, entity_id, request.form)
    return jsonify({"saved": True, "key": draft_key(entity, entity_id), "fields": len(values)})
