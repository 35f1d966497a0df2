from datetime import timedelta

import pytest

from ffmaxarena import create_app
from ffmaxarena.extensions import db
from ffmaxarena.models import Draft, Organizer, Tournament
from ffmaxarena.routes import register_blueprints
from ffmaxarena.helpers.time import india_today

TEST_CONFIG = {
    "TESTING": True,
    "SQLALCHEMY_DATABASE_URI": "sqlite://",
    "SECRET_KEY": "test-secret",
    "SUPABASE_URL": "https://demo.supabase.co",
    "SUPABASE_ANON_KEY": "anon-key",
    "STORAGE_BUCKET": "tournament-posters",
    "WEB3FORMS_ACCESS_KEY": "relay-key",
    "FORM_RELAY_URL": "https://relay.test/submit",
}


def stored_draft(key):
    """Draft values saved under `key` by any browser, or None."""
    row = Draft.query.filter_by(key=key).first()
    return row.data if row else None


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


@pytest.fixture
def app():
    app = create_app(TEST_CONFIG)
    register_blueprints(app)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    with client.session_transaction() as sess:
        sess["admin_ok"] = True
        sess["admin_email"] = "admin@ffmaxarena.in"
    return client


@pytest.fixture
def make_tournament(app):
    def _make(**overrides):
        values = {
            "title": "Weekend Squad Cup",
            "organizer_name": "Alpha Esports",
            "date": india_today() + timedelta(days=10),
            "time": "07:00 PM",
            "game_mode": "Squad",
            "entry_fee": "FREE",
            "prize_pool": "₹5,000",
            "max_participants": "48 teams",
        }
        values.update(overrides)
        t = Tournament(**values)
        db.session.add(t)
        db.session.commit()
        return t
    return _make


@pytest.fixture
def make_organizer(app):
    def _make(**overrides):
        values = {
            "name": "Alpha Esports",
            "contact_email": "alpha@example.com",
            "is_verified": True,
            "rating": 4.5,
            "total_tournaments": 12,
            "players_served": 1500,
            "badges": ["Verified", "Fast Payouts"],
        }
        values.update(overrides)
        o = Organizer(**values)
        db.session.add(o)
        db.session.commit()
        return o
    return _make


@pytest.fixture
def relay_calls(monkeypatch):
    """Capture relay POSTs and answer with success."""
    calls = []

    def fake_post(url, json=None, headers=None, timeout=None, **kwargs):
        calls.append({"url": url, "json": json})
        return FakeResponse(200, {"success": True, "message": "Email sent"})

    monkeypatch.setattr("ffmaxarena.helpers.relay.requests.post", fake_post)
    return calls
