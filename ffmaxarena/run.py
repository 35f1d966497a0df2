import os
import sys

from dotenv import load_dotenv

# .env must be loaded before Config reads the environment
load_dotenv()

from ffmaxarena import create_app
from ffmaxarena.extensions import db
from ffmaxarena.routes import register_blueprints

arena = create_app()
register_blueprints(arena)

with arena.app_context():
    # Tables are normally managed on the hosted database; this only fills
    # in a fresh local SQLite file.
    db.create_all()
    print(f"[CONFIG] {len(list(arena.url_map.iter_rules()))} routes registered", file=sys.stderr)

if __name__ == "__main__":
    arena.run(
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        debug=os.getenv("FLASK_DEBUG", "1") == "1",
    )
