from datetime import datetime
from ffmaxarena.extensions import db

# Fixed vocabulary for organizer badges (admin picks from these)
BADGE_CHOICES = (
    "Verified",
    "Top Rated",
    "Fast Payouts",
    "Fair Play",
    "Community Favourite",
    "Veteran Host",
)

class Organizer(db.Model):
    __tablename__ = "organizers"

    id = db.Column(db.Integer, primary_key=True)

    # De facto natural key, matched against Tournament.organizer_name
    name = db.Column(db.String(160), nullable=False, index=True)

    contact_email = db.Column(db.String(255), nullable=False)
    about = db.Column(db.Text, nullable=True)
    logo_url = db.Column(db.Text, nullable=True)

    discord_id = db.Column(db.String(160), nullable=True)
    youtube_channel = db.Column(db.Text, nullable=True)
    instagram_profile = db.Column(db.Text, nullable=True)
    whatsapp_number = db.Column(db.String(40), nullable=True)

    is_verified = db.Column(db.Boolean, nullable=True, default=False)
    badges = db.Column(db.JSON, nullable=True, default=list)

    # Admin-entered, never aggregated from tournaments
    rating = db.Column(db.Float, nullable=True, default=0.0)
    total_tournaments = db.Column(db.Integer, nullable=True, default=0)
    players_served = db.Column(db.Integer, nullable=True, default=0)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    EDITABLE_FIELDS = (
        "name", "contact_email", "about", "logo_url", "discord_id",
        "youtube_channel", "instagram_profile", "whatsapp_number",
        "is_verified", "badges", "rating", "total_tournaments", "players_served",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "contact_email": self.contact_email,
            "about": self.about,
            "logo_url": self.logo_url,
            "discord_id": self.discord_id,
            "youtube_channel": self.youtube_channel,
            "instagram_profile": self.instagram_profile,
            "whatsapp_number": self.whatsapp_number,
            "is_verified": bool(self.is_verified),
            "badges": list(self.badges or []),
            "rating": self.rating,
            "total_tournaments": self.total_tournaments,
            "players_served": self.players_served,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Organizer {self.id} {self.name!r}>"
