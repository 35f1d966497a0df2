"""
Form drafts, stored in the `form_drafts` table.

The session cookie only carries a short random owner id; the form values
themselves never go into the cookie, so long descriptions are safe.
"""
import secrets
import sys

from flask import session
from sqlalchemy.exc import SQLAlchemyError

from ffmaxarena.extensions import db
from ffmaxarena.models import Draft

OWNER_KEY = "draft_owner"

# Fields that hold several values (multi-selects); everything else is a string.
LIST_FIELDS = ("badges",)

# Never persisted into a draft
SKIP_FIELDS = ("csrf_token", "action", "confirm", "password", "step")


def _log(msg: str):
    print(f"[DRAFT] {msg}", file=sys.stderr)


def draft_key(entity: str, entity_id=None) -> str:
    return f"draft:{entity}:{entity_id if entity_id is not None else 'new'}"


def draft_owner(create: bool = False):
    owner = session.get(OWNER_KEY)
    if owner is None and create:
        owner = secrets.token_hex(16)
        session[OWNER_KEY] = owner
    return owner


def form_snapshot(form) -> dict:
    snapshot = {}
    for name in form.keys():
        if name in SKIP_FIELDS:
            continue
        if name in LIST_FIELDS and hasattr(form, "getlist"):
            snapshot[name] = form.getlist(name)
        else:
            snapshot[name] = form.get(name) or ""
    return snapshot


def _row(owner, key):
    return Draft.query.filter_by(owner=owner, key=key).first()


def save_draft(entity: str, entity_id, form) -> dict:
    """
    Store the form values and return them. A failed write is logged and the
    values are still returned, so the form re-renders with what was typed.
    """
    data = form_snapshot(form) if hasattr(form, "getlist") else dict(form)
    owner = draft_owner(create=True)
    key = draft_key(entity, entity_id)

    try:
        row = _row(owner, key)
        if row is None:
            db.session.add(Draft(owner=owner, key=key, data=data))
        else:
            row.data = data
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Saving {key} failed: {e}")
    return data


def load_draft(entity: str, entity_id=None):
    owner = draft_owner()
    if owner is None:
        return None
    row = _row(owner, draft_key(entity, entity_id))
    return dict(row.data) if row and row.data else None


def has_draft(entity: str, entity_id=None) -> bool:
    return bool(load_draft(entity, entity_id))


def clear_draft(entity: str, entity_id=None):
    owner = draft_owner()
    if owner is None:
        return
    try:
        Draft.query.filter_by(owner=owner, key=draft_key(entity, entity_id)).delete()
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Clearing {draft_key(entity, entity_id)} failed: {e}")
