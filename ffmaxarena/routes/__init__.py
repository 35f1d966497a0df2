from .index import index_bp
from .tournaments import tournaments_bp
from .organizers import organizers_bp
from .forms import forms_bp
from .auth import auth_bp
from .admin import admin_bp
from .api import api_bp
from .drafts import drafts_bp

def register_blueprints(app):
    app.register_blueprint(index_bp)
    app.register_blueprint(tournaments_bp)
    app.register_blueprint(organizers_bp)
    app.register_blueprint(forms_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(drafts_bp)
