import sys

from flask import Flask

from .config import Config, check_required_settings
from .extensions import db
from ffmaxarena.helpers.time import utc_to_india, status_for
from ffmaxarena.helpers.display import format_number, organizer_for, sanitize_url, transformed_image_url


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    check_required_settings(app.config)
    print(f"[CONFIG] Using database: {app.config['SQLALCHEMY_DATABASE_URI'].split('@')[-1]}", file=sys.stderr)

    if not app.config.get("WEB3FORMS_ACCESS_KEY"):
        print("[CONFIG] WEB3FORMS_ACCESS_KEY not set - public forms will refuse to submit", file=sys.stderr)

    db.init_app(app)

    app.jinja_env.globals["utc_to_india"] = utc_to_india
    app.jinja_env.globals["status_for"] = status_for
    app.jinja_env.globals["organizer_for"] = organizer_for

    app.jinja_env.filters["compact_number"] = format_number
    app.jinja_env.filters["safe_url"] = sanitize_url

    # {{ t.poster_url|image_url(400, 225) }}
    @app.template_filter("image_url")
    def image_url(url, width: int = 400, height=None):
        return transformed_image_url(sanitize_url(url), width=width, height=height)

    return app
