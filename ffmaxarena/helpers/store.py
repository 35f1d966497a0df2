"""
Data access layer for the two hosted tables.

Every call here is a direct query against the backend database. Writes
commit immediately and roll back on failure, so a failed mutation never
leaves partial state in the session. Callers re-read after writing instead
of patching what they already hold.
"""
import sys

from sqlalchemy.exc import SQLAlchemyError

from ffmaxarena.extensions import db
from ffmaxarena.models import Organizer, Tournament


class StoreError(Exception):
    """A read or write against the backend failed."""


def _log(msg: str):
    print(f"[STORE] {msg}", file=sys.stderr)


def _clean(model, values: dict) -> dict:
    allowed = model.EDITABLE_FIELDS
    return {k: v for k, v in (values or {}).items() if k in allowed}


# --- Reads ---

def fetch_admin_data():
    """
    Both admin collections: tournaments by date ascending, organizers newest
    first. Raises StoreError if either read fails.
    """
    try:
        tournaments = Tournament.query.order_by(Tournament.date.asc(), Tournament.id.asc()).all()
        organizers = Organizer.query.order_by(Organizer.created_at.desc(), Organizer.id.desc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Admin fetch failed: {e}")
        raise StoreError(str(e)) from e
    return tournaments, organizers


def load_shared_data() -> dict:
    """
    Shared tournament/organizer cache for the home and organizer pages.

    Never raises: on failure the collections are empty and `error` carries
    the message so the page can render its empty state.
    """
    try:
        tournaments, organizers = fetch_admin_data()
    except StoreError as e:
        return {"tournaments": [], "organizers": [], "error": str(e) or "Failed to fetch data"}
    return {"tournaments": tournaments, "organizers": organizers, "error": None}


def list_organizers() -> list:
    try:
        return Organizer.query.order_by(Organizer.created_at.desc(), Organizer.id.desc()).all()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Organizer fetch failed: {e}")
        raise StoreError(str(e)) from e


def get_tournament(tournament_id: int):
    try:
        return db.session.get(Tournament, tournament_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Tournament {tournament_id} lookup failed: {e}")
        raise StoreError(str(e)) from e


def get_organizer(organizer_id: int):
    try:
        return db.session.get(Organizer, organizer_id)
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Organizer {organizer_id} lookup failed: {e}")
        raise StoreError(str(e)) from e


def get_organizer_by_name(name: str):
    try:
        return Organizer.query.filter(Organizer.name == (name or "").strip()).first()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Organizer lookup by name failed: {e}")
        raise StoreError(str(e)) from e


def list_verified_organizers() -> list:
    try:
        return (
            Organizer.query
            .filter(Organizer.is_verified == True)  # noqa: E712
            .order_by(Organizer.created_at.desc(), Organizer.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Verified organizer fetch failed: {e}")
        raise StoreError(str(e)) from e


def tournaments_for_organizer(name: str) -> list:
    try:
        return (
            Tournament.query
            .filter(Tournament.organizer_name == name)
            .order_by(Tournament.date.desc(), Tournament.time.asc())
            .all()
        )
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Tournament fetch for organizer {name!r} failed: {e}")
        raise StoreError(str(e)) from e


# --- Writes ---

def _insert(model, values: dict):
    row = model(**_clean(model, values))
    try:
        db.session.add(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Insert into {model.__tablename__} failed: {e}")
        raise StoreError(str(e)) from e
    _log(f"Inserted {model.__tablename__} #{row.id}")
    return row


def _update(model, row_id: int, values: dict):
    try:
        row = db.session.get(model, row_id)
        if row is None:
            raise StoreError(f"{model.__name__} {row_id} not found.")
        for key, value in _clean(model, values).items():
            setattr(row, key, value)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Update of {model.__tablename__} #{row_id} failed: {e}")
        raise StoreError(str(e)) from e
    _log(f"Updated {model.__tablename__} #{row_id}")
    return row


def _delete(model, row_id: int):
    try:
        row = db.session.get(model, row_id)
        if row is None:
            raise StoreError(f"{model.__name__} {row_id} not found.")
        db.session.delete(row)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        _log(f"Delete of {model.__tablename__} #{row_id} failed: {e}")
        raise StoreError(str(e)) from e
    _log(f"Deleted {model.__tablename__} #{row_id}")


def insert_tournament(values: dict) -> Tournament:
    return _insert(Tournament, values)


def update_tournament(tournament_id: int, values: dict) -> Tournament:
    return _update(Tournament, tournament_id, values)


def delete_tournament(tournament_id: int):
    _delete(Tournament, tournament_id)


def insert_organizer(values: dict) -> Organizer:
    return _insert(Organizer, values)


def update_organizer(organizer_id: int, values: dict) -> Organizer:
    return _update(Organizer, organizer_id, values)


def delete_organizer(organizer_id: int):
    _delete(Organizer, organizer_id)
