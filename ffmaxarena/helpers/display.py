import re
from typing import Optional
from urllib.parse import urlencode, urlparse

STORAGE_PUBLIC_MARKER = "/storage/v1/object/public/"
STORAGE_RENDER_MARKER = "/storage/v1/render/image/public/"

PLAYERS_PER_TEAM = 4  # Free Fire Max squad


def parse_player_count(max_participants: Optional[str]) -> int:
    """
    "400 players" -> 400, "100 teams" -> 400, "400" -> 400, anything else -> 0.
    """
    if not max_participants:
        return 0

    m = re.search(r"(\d+)\s*players", max_participants, re.IGNORECASE)
    if m:
        return int(m.group(1))

    m = re.search(r"(\d+)\s*teams", max_participants, re.IGNORECASE)
    if m:
        return int(m.group(1)) * PLAYERS_PER_TEAM

    if re.fullmatch(r"\d+", max_participants):
        return int(max_participants)

    return 0


def format_number(num) -> str:
    num = num or 0
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1000:
        return f"{num / 1000:.1f}k"
    return str(num)


def sanitize_url(url: Optional[str]) -> Optional[str]:
    """Only http(s) URLs and base64 image data URIs make it into templates."""
    if not url:
        return None

    if url.startswith("data:image/"):
        parts = url.split(";")
        if len(parts) >= 2 and parts[1].startswith("base64,"):
            return url

    try:
        parsed = urlparse(url)
    except ValueError:
        return None

    if parsed.scheme in ("http", "https") and parsed.netloc:
        return url
    return None


def transformed_image_url(
    original_url: Optional[str],
    width: int,
    height: Optional[int] = None,
    quality: int = 80,
    resize: str = "cover",
) -> Optional[str]:
    """
    Point object-storage public URLs at the image render endpoint so cards
    get a resized copy. Data URIs and other hosts come back unchanged.
    """
    if not original_url:
        return None

    if STORAGE_PUBLIC_MARKER not in original_url:
        return original_url

    url = original_url.replace(STORAGE_PUBLIC_MARKER, STORAGE_RENDER_MARKER)
    params = {"width": width, "quality": quality, "resize": resize}
    if height:
        params["height"] = height
    return f"{url}?{urlencode(params)}"


def organizer_for(tournament, organizers):
    """Match a tournament to its organizer by name (no FK exists)."""
    if tournament is None:
        return None
    name = (tournament.organizer_name or "").strip()
    for org in organizers or []:
        if org.name == name:
            return org
    return None
