from datetime import datetime
from ffmaxarena.extensions import db

class Tournament(db.Model):
    __tablename__ = "tournaments"

    id = db.Column(db.Integer, primary_key=True)

    title = db.Column(db.String(200), nullable=False)

    # Display-level join against Organizer.name. No FK: renaming an organizer
    # leaves older rows pointing at the old name.
    organizer_name = db.Column(db.String(160), nullable=False, index=True)

    description = db.Column(db.Text, nullable=True)
    game_mode = db.Column(db.String(40), nullable=True)
    map = db.Column(db.String(80), nullable=True)

    # Free text, e.g. "₹5,000", "FREE", "50", "100 teams"
    prize_pool = db.Column(db.String(120), nullable=True)
    entry_fee = db.Column(db.String(60), nullable=True)
    max_participants = db.Column(db.String(60), nullable=True)

    # Start instant = date + "H:MM AM/PM" in India Standard Time
    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.String(16), nullable=False)

    poster_url = db.Column(db.Text, nullable=True)
    banner_url = db.Column(db.Text, nullable=True)
    registration_link = db.Column(db.Text, nullable=True)
    whatsapp_link = db.Column(db.Text, nullable=True)
    discord_link = db.Column(db.Text, nullable=True)
    youtube_link = db.Column(db.Text, nullable=True)

    is_verified = db.Column(db.Boolean, nullable=True, default=False)

    # Legacy/cosmetic. Lifecycle is always computed from date + time.
    status = db.Column(db.String(40), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    EDITABLE_FIELDS = (
        "title", "organizer_name", "description", "game_mode", "map",
        "prize_pool", "entry_fee", "max_participants", "date", "time",
        "poster_url", "banner_url", "registration_link", "whatsapp_link",
        "discord_link", "youtube_link", "is_verified", "status",
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "organizer_name": self.organizer_name,
            "description": self.description,
            "game_mode": self.game_mode,
            "map": self.map,
            "prize_pool": self.prize_pool,
            "entry_fee": self.entry_fee,
            "max_participants": self.max_participants,
            "date": self.date.isoformat() if self.date else None,
            "time": self.time,
            "poster_url": self.poster_url,
            "banner_url": self.banner_url,
            "registration_link": self.registration_link,
            "whatsapp_link": self.whatsapp_link,
            "discord_link": self.discord_link,
            "youtube_link": self.youtube_link,
            "is_verified": bool(self.is_verified),
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<Tournament {self.id} {self.title!r}>"
