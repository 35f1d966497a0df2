from datetime import datetime
from ffmaxarena.extensions import db

class Draft(db.Model):
    """Unsaved form values, one row per browser session and form."""
    __tablename__ = "form_drafts"

    id = db.Column(db.Integer, primary_key=True)

    # Random id kept in the session cookie; the values stay server-side
    owner = db.Column(db.String(64), nullable=False, index=True)
    key = db.Column(db.String(120), nullable=False)

    data = db.Column(db.JSON, nullable=False, default=dict)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (db.UniqueConstraint("owner", "key", name="uq_form_drafts_owner_key"),)

    def __repr__(self):
        return f"<Draft {self.owner[:8]} {self.key}>"
