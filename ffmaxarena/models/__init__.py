from .tournament import Tournament
from .organizer import Organizer, BADGE_CHOICES
from .draft import Draft

__all__ = ["Tournament", "Organizer", "BADGE_CHOICES", "Draft"]
